"""Error taxonomy for helpman.

Every failure the library can report derives from HelpmanError, so the
CLI can catch one class and leave termination policy to itself.  Parse
errors remember the 1-based line where they were detected.
"""

__all__ = [
    "HelpmanError",
    "ReplacerError",
    "HelpParseError",
    "IncludeParseError",
    "HelpCaptureError",
    "RenderError",
    "SourceDateEpochError",
]


class HelpmanError(Exception):
    """Base class for all helpman errors."""


class ReplacerError(HelpmanError, ValueError):
    """Malformed rule list for a PatternReplacer (odd count, bad pattern)."""


class _LineError(HelpmanError):
    """Error tied to a position in a line-oriented input."""

    def __init__(self, message, lineno=None):
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class HelpParseError(_LineError):
    """Help text is structurally malformed (flag header without description)."""


class IncludeParseError(_LineError):
    """Include file is structurally malformed (invalid [NAME] section)."""


class HelpCaptureError(HelpmanError):
    """The target program could not produce its help output."""


class RenderError(HelpmanError):
    """Manual page parameters are invalid (section, SOURCE_DATE_EPOCH)."""


class SourceDateEpochError(RenderError):
    """SOURCE_DATE_EPOCH is set but is not a Unix timestamp."""
