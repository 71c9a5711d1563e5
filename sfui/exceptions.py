"""
Exception hierarchy for the SFUI terminal shell.
"""


class SfuiError(Exception):
    """Base exception for SFUI errors."""

    pass


class ConfigError(SfuiError):
    """Raised when runtime options are invalid."""

    pass


class TerminalError(SfuiError):
    """Raised when the terminal cannot be configured, read or drawn to."""

    pass


class ChannelError(SfuiError):
    """Base exception for event channel errors."""

    pass


class ChannelClosed(ChannelError):
    """Raised when sending to, or receiving from, a closed channel."""

    pass


class ChannelTimeout(ChannelError):
    """Raised when a receive times out before an event arrives."""

    pass


class PollerError(SfuiError):
    """Raised when the event poller fails or a second poller is started."""

    pass
