"""Compression, checksumming and timestamps for the table of contents."""

import hashlib
import time
import zlib

from .errors import XarError
from .options import VAL_NONE, digest_size

_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class TocDigest:
    """Running checksum over the compressed table of contents.

    With no algorithm (``None`` or "none") nothing is computed and the
    digest is empty.
    """

    def __init__(self, name=None):
        if name is None or name == VAL_NONE:
            self.name = None
            self.size = 0
            self._hash = None
        else:
            self.size = digest_size(name)
            self.name = name
            self._hash = hashlib.new(name)

    @property
    def enabled(self):
        return self._hash is not None

    def update(self, data):
        """Feed ``data`` into the checksum."""
        if self._hash is not None:
            self._hash.update(bytes(data))

    def digest(self):
        """Return the checksum of everything fed so far."""
        if self._hash is None:
            return b""
        return self._hash.copy().digest()


def compress_toc(xml, chunk_size):
    """Compress the serialized TOC ``xml`` (str or bytes) for the archive.

    The input is deflated at the best compression level, ``chunk_size``
    bytes at a time with a sync flush after each chunk, and the stream is
    then finished.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk size must be positive: {chunk_size!r}")
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    data = bytes(xml)
    compressor = zlib.compressobj(zlib.Z_BEST_COMPRESSION)
    parts = []
    for start in range(0, len(data), chunk_size):
        parts.append(compressor.compress(data[start:start + chunk_size]))
        parts.append(compressor.flush(zlib.Z_SYNC_FLUSH))
    parts.append(compressor.flush(zlib.Z_FINISH))
    return b"".join(parts)


def decompress_toc(data):
    """Inflate a compressed TOC and return the XML bytes.

    Raises XarError when the data is corrupt or incomplete.
    """
    decompressor = zlib.decompressobj()
    try:
        out = decompressor.decompress(bytes(data))
    except zlib.error as exc:
        raise XarError(f"corrupt table of contents: {exc}") from exc
    if not decompressor.eof:
        raise XarError("table of contents is truncated")
    return out


def creation_time(timestamp=None):
    """Format ``timestamp`` (seconds since the epoch, default now) in UTC."""
    if timestamp is None:
        timestamp = time.time()
    return time.strftime(_TIME_FORMAT, time.gmtime(timestamp))