"""The fixed binary header at the start of every xar archive."""

import enum
import struct
from dataclasses import dataclass

from .errors import XarError

MAGIC = 0x78617221  # "xar!"
VERSION = 1

_BASE_FORMAT = ">IHHQQI"
BASE_SIZE = struct.calcsize(_BASE_FORMAT)  # 28
NAME_FIELD_SIZE = 36
EXTENDED_SIZE = BASE_SIZE + NAME_FIELD_SIZE  # 64

_PREFIX_SIZE = 6  # magic + size


class ChecksumAlgorithm(enum.IntEnum):
    """Checksum algorithm protecting the table of contents."""

    NONE = 0
    SHA1 = 1
    MD5 = 2
    OTHER = 3


_NAMED = {
    ChecksumAlgorithm.SHA1: "sha1",
    ChecksumAlgorithm.MD5: "md5",
}


@dataclass
class XarHeader:
    """Decoded archive header."""

    size: int
    version: int
    toc_length_compressed: int
    toc_length_uncompressed: int
    cksum_alg: ChecksumAlgorithm
    cksum_name: str = ""

    def checksum_name(self):
        """Name of the TOC checksum algorithm, or None when there is none."""
        if self.cksum_alg is ChecksumAlgorithm.NONE:
            return None
        if self.cksum_alg in _NAMED:
            return _NAMED[self.cksum_alg]
        return self.cksum_name

    def to_bytes(self):
        """Encode the header in network byte order, ``size`` bytes long."""
        try:
            out = struct.pack(
                _BASE_FORMAT,
                MAGIC,
                self.size,
                self.version,
                self.toc_length_compressed,
                self.toc_length_uncompressed,
                int(self.cksum_alg),
            )
        except struct.error as exc:
            raise ValueError(f"header field out of range: {exc}") from exc
        if self.cksum_alg is ChecksumAlgorithm.OTHER:
            name = self.cksum_name.encode("ascii")
            if len(name) + 1 > NAME_FIELD_SIZE:
                raise XarError(f"checksum name too long: {self.cksum_name!r}")
            out += name.ljust(NAME_FIELD_SIZE, b"\0")
        if len(out) > self.size:
            raise ValueError("header size is too small for its contents")
        return out.ljust(self.size, b"\0")


def _read_exact(stream, count):
    data = stream.read(count)
    if data is None or len(data) != count:
        raise XarError("truncated xar header")
    return bytes(data)


def _skip(stream, count):
    try:
        stream.seek(count, 1)
        return
    except (AttributeError, OSError, ValueError):
        pass
    stream.read(count)


def parse_header(stream):
    """Read and validate an archive header from a binary ``stream``.

    Any bytes the recorded header size claims beyond the known layout are
    skipped. Raises XarError when the header is missing or malformed.
    """
    magic_bytes = _read_exact(stream, 4)
    (magic,) = struct.unpack(">I", magic_bytes)
    if magic != MAGIC:
        raise XarError("not a xar archive: bad magic")

    (size,) = struct.unpack(">H", _read_exact(stream, 2))
    if size < BASE_SIZE:
        raise XarError(f"xar header size too small: {size}")
    to_read = min(size, EXTENDED_SIZE)

    rest = _read_exact(stream, to_read - _PREFIX_SIZE)
    raw = magic_bytes + struct.pack(">H", size) + rest
    _, _, version, compressed, uncompressed, alg_value = struct.unpack(
        _BASE_FORMAT, raw[:BASE_SIZE]
    )

    try:
        alg = ChecksumAlgorithm(alg_value)
    except ValueError:
        raise XarError(f"unknown checksum algorithm: {alg_value}") from None

    name = ""
    if alg is ChecksumAlgorithm.OTHER:
        if size < BASE_SIZE + 4 or size & 0x3:
            raise XarError("xar header has no room for a checksum name")
        field = raw[BASE_SIZE:to_read]
        end = field.find(b"\0")
        if end < 0:
            raise XarError("checksum name in xar header is not terminated")
        name = field[:end].decode("latin-1")
    elif alg in _NAMED:
        name = _NAMED[alg]

    if size > to_read:
        _skip(stream, size - to_read)

    return XarHeader(
        size=size,
        version=version,
        toc_length_compressed=compressed,
        toc_length_uncompressed=uncompressed,
        cksum_alg=alg,
        cksum_name=name,
    )


def build_header(checksum_name, toc_compressed, toc_uncompressed):
    """Build the header for a new archive.

    ``checksum_name`` is None or "none" for no TOC checksum, "sha1" or
    "md5" for the classic algorithms, or any other digest name, which
    needs the extended header carrying the name.
    """
    if toc_compressed < 0 or toc_uncompressed < 0:
        raise ValueError("TOC lengths must not be negative")
    name = "none" if checksum_name is None else checksum_name.lower()
    if name == "none":
        alg, stored = ChecksumAlgorithm.NONE, ""
    elif name == "sha1":
        alg, stored = ChecksumAlgorithm.SHA1, name
    elif name == "md5":
        alg, stored = ChecksumAlgorithm.MD5, name
    else:
        if len(name.encode("ascii")) + 1 > NAME_FIELD_SIZE:
            raise XarError(f"checksum name too long: {checksum_name!r}")
        alg, stored = ChecksumAlgorithm.OTHER, name
    size = EXTENDED_SIZE if alg is ChecksumAlgorithm.OTHER else BASE_SIZE
    return XarHeader(
        size=size,
        version=VERSION,
        toc_length_compressed=toc_compressed,
        toc_length_uncompressed=toc_uncompressed,
        cksum_alg=alg,
        cksum_name=stored,
    )