"""Exception types raised by clockiReport."""
from typing import Optional


class ReportError(Exception):
    """Base class for every error clockiReport raises on purpose."""


class ValidationError(ReportError):
    """Raised when the report options are not a valid combination."""


class ConflictingFlagsError(ValidationError):
    """Two or more mutually exclusive flags were set together."""

    def __init__(self, *flags: str):
        self.flags = flags
        if len(flags) > 1:
            names = ", ".join(flags[:-1]) + " and " + flags[-1]
        else:
            names = "".join(flags)
        super().__init__(f"the following flags can't be used together: {names}")


class DependentFlagMissingError(ValidationError):
    """A flag was set without the flag it depends on."""

    def __init__(self, flag: str, required: str):
        self.flag = flag
        self.required = required
        super().__init__(f"flag '{flag}' can't be used without flag '{required}'")


class TemplateSyntaxError(ReportError):
    """The user supplied template could not be parsed."""


class TemplateEvalError(ReportError):
    """The template failed while rendering a specific time entry."""

    def __init__(self, message: str, entry_id: Optional[str] = None):
        self.entry_id = entry_id
        super().__init__(message)


class WriteError(ReportError):
    """The output stream rejected a write."""


class ApiError(ReportError):
    """A request to the Clockify API failed."""


class EntryLoadError(ReportError):
    """Time entries could not be read from a JSON export."""


class ConfigError(ReportError):
    """A required setting is missing."""
