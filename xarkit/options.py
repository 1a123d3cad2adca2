"""Archive options and the property include/exclude rules."""

import hashlib
import string
from typing import List, Optional, Tuple

from .errors import ErrorKind, ErrorReporter, Severity, XarError

OPT_TOCCKSUM = "toc-cksum"
OPT_FILECKSUM = "file-chksum"
OPT_COMPRESSION = "compression"
OPT_COMPRESSIONARG = "compression-arg"
OPT_PROPINCLUDE = "prop-include"
OPT_PROPEXCLUDE = "prop-exclude"
OPT_RSIZE = "rsize"
OPT_STRIPCOMPONENTS = "strip-components"
OPT_EXTRACTSTDOUT = "extract-stdout"
OPT_RFC6713FORMAT = "rfc6713format"
OPT_XARLIBVERSION = "xar-library-version"

VAL_NONE = "none"
VAL_TRUE = "true"
VAL_SHA1 = "sha1"
VAL_MD5 = "md5"
VAL_GZIP = "gzip"
VAL_BZIP = "bzip2"

LIBRARY_VERSION = "0x01060200"

MAX_DIGEST_SIZE = 64
MINIMUM_BUFFER_SIZE = 512
DEFAULT_BUFFER_SIZE = 32768

_CLASSIC_TOC_CHECKSUMS = (VAL_NONE, VAL_SHA1, VAL_MD5)


def digest_size(name):
    """Return the digest size in bytes of the hash algorithm ``name``.

    Raises ValueError for unknown, variable-length or oversized digests.
    """
    try:
        size = hashlib.new(name).digest_size
    except (ValueError, TypeError) as exc:
        raise ValueError(f"unknown digest algorithm: {name!r}") from exc
    if size <= 0 or size > MAX_DIGEST_SIZE:
        raise ValueError(f"unsupported digest algorithm: {name!r}")
    return size


def _strtol(text) -> Tuple[int, str]:
    """Parse a leading integer with C ``strtol`` base-0 rules.

    Returns the value and the unparsed remainder; with no digits the value
    is 0 and the remainder is the whole text.
    """
    pos = 0
    while pos < len(text) and text[pos] in " \t\n\v\f\r":
        pos += 1
    sign = 1
    if pos < len(text) and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    base = 10
    digits = string.digits
    if text[pos:pos + 2].lower() == "0x" and text[pos + 2:pos + 3] != "" \
            and text[pos + 2] in string.hexdigits:
        base, digits = 16, string.hexdigits
        pos += 2
    elif text[pos:pos + 1] == "0":
        base, digits = 8, "01234567"
    start = pos
    while pos < len(text) and text[pos] in digits:
        pos += 1
    if pos == start:
        return 0, text
    return sign * int(text[start:pos], base), text[pos:]


class Options:
    """Named options of an archive.

    Several values may be stored under one name; lookups see the most
    recently set one.
    """

    def __init__(self, writing=False, reporter: Optional[ErrorReporter] = None):
        self._entries: List[Tuple[str, str]] = []
        self._reporter = reporter
        self.files_added = False
        self.heap_reserve = 0
        self.strip_components = 0
        self.to_stdout = False
        self.rfc_format = False
        if writing:
            # sha1 is the default TOC checksum until told otherwise.
            self.heap_reserve = digest_size(VAL_SHA1)
            self.set(OPT_COMPRESSION, VAL_GZIP)
            self.set(OPT_FILECKSUM, VAL_SHA1)

    def get(self, name):
        """Return the newest value stored under ``name``, or None."""
        if name is None:
            return None
        if name == OPT_XARLIBVERSION:
            return LIBRARY_VERSION
        for key, value in self._entries:
            if key == name:
                return value
        return None

    def set(self, name, value):
        """Store ``value`` under ``name``, applying its side effects.

        Raises ValueError for an invalid value and XarError when the TOC
        checksum is changed after files have been added.
        """
        if name is None:
            raise ValueError("option name is required")
        if value is None:
            value = ""

        if name == OPT_TOCCKSUM:
            if self.files_added:
                message = "XAR_OPT_TOCCKSUM must be set before files are added"
                if self._reporter is not None:
                    self._reporter.new()
                    self._reporter.set_string(message)
                    self._reporter.report(Severity.WARNING, ErrorKind.ARCHIVE_CREATION)
                raise XarError(message, severity=Severity.WARNING,
                               kind=ErrorKind.ARCHIVE_CREATION)
            if value == VAL_NONE:
                self.heap_reserve = 0
            else:
                self.heap_reserve = digest_size(value)

        if name == OPT_FILECKSUM and value != VAL_NONE:
            digest_size(value)

        if name == OPT_STRIPCOMPONENTS:
            comps, rest = _strtol(value)
            if not value or rest or comps < 0:
                raise ValueError(f"invalid strip-components value: {value!r}")
            self.strip_components = comps

        if name == OPT_EXTRACTSTDOUT:
            self.to_stdout = value == VAL_TRUE

        if name == OPT_RFC6713FORMAT and not self.files_added:
            self.rfc_format = value == VAL_TRUE

        self._entries.insert(0, (name, value))

    def unset(self, name):
        """Remove every value stored under ``name``."""
        self._entries = [entry for entry in self._entries if entry[0] != name]

    def check_prop(self, name):
        """Return True if the property ``name`` should be included.

        When any include rule exists only included properties pass;
        otherwise properties matched by an exclude rule are left out.
        """
        include_set = False
        for key, value in self._entries:
            if key == OPT_PROPINCLUDE:
                if value == name:
                    return True
                include_set = True
        if include_set:
            return False
        return not any(
            key == OPT_PROPEXCLUDE and value == name for key, value in self._entries
        )

    def freeze_toc_checksum(self):
        """Mark that files are being added; the TOC checksum is now fixed.

        A TOC checksum other than none, sha1 or md5 forces the RFC 6713
        format on.
        """
        if self.files_added:
            return
        self.files_added = True
        toc = self.get(OPT_TOCCKSUM)
        if toc is not None and toc not in _CLASSIC_TOC_CHECKSUMS:
            self.rfc_format = True

    @property
    def read_size(self):
        """Buffer size used for copying, from the rsize option."""
        value = self.get(OPT_RSIZE)
        if value is None:
            return DEFAULT_BUFFER_SIZE
        size, _ = _strtol(value)
        return max(size, MINIMUM_BUFFER_SIZE)