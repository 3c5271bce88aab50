"""Exception hierarchy for page building"""


class MdPageError(Exception):
    """Base exception for all mdpage errors."""


class ConfigError(MdPageError, ValueError):
    """Raised for an invalid config file or option value."""


class IncludeError(MdPageError):
    """Raised when an include file (css, javascript, header, footer) cannot be read."""

    def __init__(self, path, message: str):
        super().__init__(message)
        self.path = str(path)


class IncludeNotFoundError(IncludeError):
    """Raised when an include file does not exist."""


class PageStateError(MdPageError):
    """Raised when a page transform is driven after it finished or failed."""
