"""bzip2 compression of heap data."""

import bz2
import re

from .errors import ErrorKind, ErrorReporter, Severity, XarError

MIME_TYPE = "application/x-bzip2"
DEFAULT_LEVEL = 9

_MAGIC = b"BZh"
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def is_compressed(data):
    """Return True if ``data`` starts with the bzip2 stream signature."""
    if data is None or len(data) < 3:
        return False
    return bytes(data[:3]) == _MAGIC


def compression_level(value):
    """Turn a compression-argument option value into a bzip2 level.

    ``None`` gives the default level. The leading integer of the text is
    used; a level outside 1..9 raises ValueError.
    """
    if value is None:
        return DEFAULT_LEVEL
    match = _LEADING_INT.match(value)
    level = int(match.group(1)) if match else 0
    if not 1 <= level <= 9:
        raise ValueError(f"bzip2 compression level out of range: {value!r}")
    return level


def _failure(reporter, file, message, kind, code=0):
    if reporter is not None:
        reporter.new()
        reporter.set_file(file)
        reporter.set_string(message)
        reporter.set_errno(code)
        reporter.report(Severity.FATAL, kind)
    return XarError(message, severity=Severity.FATAL, kind=kind, file=file, errno=code)


class BzipEncoder:
    """Incremental bzip2 compressor for data written to the heap."""

    def __init__(self, level=DEFAULT_LEVEL, reporter: ErrorReporter = None, file=None):
        if not 1 <= level <= 9:
            raise ValueError(f"bzip2 compression level out of range: {level!r}")
        self._compressor = bz2.BZ2Compressor(level)
        self._reporter = reporter
        self._file = file
        self._finished = False

    def feed(self, chunk):
        """Compress ``chunk`` and return whatever output is ready."""
        if self._finished:
            raise _failure(self._reporter, self._file, "Error compressing file",
                           ErrorKind.ARCHIVE_CREATION)
        return self._compressor.compress(bytes(chunk))

    def finish(self):
        """End the stream and return the remaining output; later calls return b''."""
        if self._finished:
            return b""
        self._finished = True
        return self._compressor.flush()


class BzipDecoder:
    """Incremental bzip2 decompressor for data read from the heap."""

    def __init__(self, reporter: ErrorReporter = None, file=None):
        self._decompressor = bz2.BZ2Decompressor()
        self._reporter = reporter
        self._file = file

    @property
    def finished(self):
        return self._decompressor.eof

    def _error(self):
        return _failure(self._reporter, self._file, "Error decompressing file",
                        ErrorKind.ARCHIVE_EXTRACTION)

    def feed(self, chunk):
        """Decompress ``chunk`` and return the output it produced."""
        if not chunk:
            return b""
        if self._decompressor.eof:
            raise self._error()
        try:
            out = self._decompressor.decompress(bytes(chunk))
        except (OSError, ValueError, EOFError) as exc:
            raise self._error() from exc
        if self._decompressor.unused_data:
            raise self._error()
        return out