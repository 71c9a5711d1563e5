"""
Default frame renderer: one bordered, titled panel with centered text.
"""

from dataclasses import dataclass

from rich.align import Align
from rich.box import ROUNDED
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from .terminal import Frame

# Colors a panel may use for its border and body text
PALETTE = (
    "white",
    "bright_white",
    "cyan",
    "bright_cyan",
    "blue",
    "bright_blue",
    "green",
    "bright_green",
    "yellow",
    "bright_yellow",
    "magenta",
    "bright_magenta",
    "red",
    "bright_red",
)

PANEL_MARGIN = 2

DEFAULT_TITLE = "SFUI"
DEFAULT_BODY = "Hello World!"
DEFAULT_BORDER_COLOR = "white"
DEFAULT_TEXT_COLOR = "bright_cyan"


def build_panel(
    title: str,
    body: str,
    border_color: str = DEFAULT_BORDER_COLOR,
    text_color: str = DEFAULT_TEXT_COLOR,
    height: int | None = None,
) -> Panel:
    """
    Build the rounded panel widget.

    Args:
        title: Text shown in the top border
        body: Text centered on the first line inside the panel
        border_color: Border and title color, from PALETTE
        text_color: Body text color, from PALETTE
        height: Fixed panel height in rows, or None to fit the content

    Returns:
        Panel ready to be placed in a Frame
    """
    text = Text(body, style=Style(color=text_color), justify="center")
    return Panel(
        Align.center(text),
        title=title,
        box=ROUNDED,
        border_style=Style(color=border_color),
        height=height,
        expand=True,
    )


@dataclass(frozen=True)
class PanelRenderer:
    """Frame renderer drawing the panel inside a fixed margin of the viewport"""

    title: str = DEFAULT_TITLE
    body: str = DEFAULT_BODY
    border_color: str = DEFAULT_BORDER_COLOR
    text_color: str = DEFAULT_TEXT_COLOR

    @classmethod
    def from_config(cls, config) -> "PanelRenderer":
        return cls(
            title=config.title,
            body=config.body,
            border_color=config.border_color,
            text_color=config.text_color,
        )

    def __call__(self, frame: Frame) -> None:
        area = frame.size.inner(PANEL_MARGIN)
        if area.is_empty:
            return
        panel = build_panel(
            self.title, self.body, self.border_color, self.text_color, height=area.height
        )
        frame.render_widget(panel, area)
