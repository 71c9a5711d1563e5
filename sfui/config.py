"""
Runtime options for the SFUI shell.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigError
from .poller import DEFAULT_TICK_RATE
from .widgets import (
    DEFAULT_BODY,
    DEFAULT_BORDER_COLOR,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TITLE,
    PALETTE,
)


@dataclass
class AppConfig:
    """Options collected from the command line"""

    tick_rate: float = DEFAULT_TICK_RATE
    title: str = DEFAULT_TITLE
    body: str = DEFAULT_BODY
    border_color: str = DEFAULT_BORDER_COLOR
    text_color: str = DEFAULT_TEXT_COLOR
    log_file: Path | None = None
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AppConfig":
        log_file = getattr(args, "log_file", None)
        return cls(
            tick_rate=args.tick_rate / 1000.0,
            title=args.title,
            body=args.text,
            border_color=args.border_color,
            text_color=args.text_color,
            log_file=Path(log_file) if log_file else None,
            verbose=args.verbose,
        )

    def validate(self) -> None:
        """
        Check option values.

        Raises:
            ConfigError: On the first invalid value
        """
        if self.tick_rate <= 0:
            raise ConfigError(f"tick rate must be positive, got {self.tick_rate * 1000:g} ms")
        if not self.title.strip():
            raise ConfigError("title must not be empty")
        for name in ("border_color", "text_color"):
            color = getattr(self, name)
            if color not in PALETTE:
                raise ConfigError(
                    f"Invalid {name.replace('_', ' ')} '{color}'. "
                    f"Choose from: {', '.join(PALETTE)}"
                )
