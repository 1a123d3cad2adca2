"""Error reporting for archive operations."""

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional


class Severity(enum.Enum):
    """How serious a reported problem is."""

    WARNING = enum.auto()
    NONFATAL = enum.auto()
    FATAL = enum.auto()


class ErrorKind(enum.Enum):
    """Which kind of operation a reported problem belongs to."""

    ARCHIVE_CREATION = enum.auto()
    ARCHIVE_EXTRACTION = enum.auto()


class XarError(Exception):
    """Raised when an archive operation fails."""

    def __init__(self, message, *, severity=Severity.FATAL, kind=None, file=None, errno=0):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.kind = kind
        self.file = file
        self.errno = errno


@dataclass
class ErrorContext:
    """Details of the most recent problem, handed to the error callback."""

    message: Optional[str] = None
    saved_errno: int = 0
    file: Any = None
    user_context: Any = None
    archive: Any = None


Callback = Callable[[Severity, ErrorKind, ErrorContext], Any]


class ErrorReporter:
    """Collects error details and passes them to a registered callback."""

    def __init__(self, archive=None):
        self.context = ErrorContext(archive=archive)
        self._callback: Optional[Callback] = None

    def register(self, callback, user_context):
        """Install ``callback`` and the user data handed along with it."""
        self._callback = callback
        self.context.user_context = user_context

    def new(self):
        """Start a fresh report, clearing message, file and errno."""
        self.context.message = None
        self.context.saved_errno = 0
        self.context.file = None

    def set_file(self, file):
        self.context.file = file

    def set_string(self, message):
        self.context.message = message

    def set_errno(self, errno):
        self.context.saved_errno = errno

    def report(self, severity, kind):
        """Call the registered callback; return its result, or 0 without one."""
        if self._callback is None:
            return 0
        return self._callback(severity, kind, self.context)