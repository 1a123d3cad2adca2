import io
import struct

import pytest

from xarkit.errors import XarError
from xarkit.header import (
    ChecksumAlgorithm,
    XarHeader,
    build_header,
    parse_header,
)


class _Pipe:
    """A non-seekable reader."""

    def __init__(self, data):
        self._buf = io.BytesIO(data)

    def read(self, n):
        return self._buf.read(n)

    def remaining(self):
        return self._buf.read()


def test_sha1_header_wire_bytes():
    data = build_header("sha1", 100, 200).to_bytes()
    assert data[:4] == b"xar!"
    assert len(data) == 28
    assert struct.unpack(">H", data[4:6])[0] == 28
    assert struct.unpack(">H", data[6:8])[0] == 1
    assert struct.unpack(">QQI", data[8:28]) == (100, 200, 1)


def test_other_algorithm_uses_extended_header():
    header = build_header("sha256", 10, 20)
    assert header.cksum_alg is ChecksumAlgorithm.OTHER
    data = header.to_bytes()
    assert len(data) == 64
    assert data[28:34] == b"sha256"
    assert data[34:64] == b"\0" * 30


@pytest.mark.parametrize(
    "name,alg",
    [
        (None, ChecksumAlgorithm.NONE),
        ("none", ChecksumAlgorithm.NONE),
        ("sha1", ChecksumAlgorithm.SHA1),
        ("md5", ChecksumAlgorithm.MD5),
        ("sha512", ChecksumAlgorithm.OTHER),
    ],
)
def test_round_trip(name, alg):
    header = build_header(name, 1234, 56789)
    parsed = parse_header(io.BytesIO(header.to_bytes()))
    assert parsed == header
    assert parsed.cksum_alg is alg


def test_checksum_name_values():
    assert build_header(None, 0, 0).checksum_name() is None
    assert build_header("md5", 0, 0).checksum_name() == "md5"
    assert build_header("sha256", 0, 0).checksum_name() == "sha256"


def test_bad_magic():
    data = b"zip!" + build_header("sha1", 1, 1).to_bytes()[4:]
    with pytest.raises(XarError):
        parse_header(io.BytesIO(data))


def test_size_too_small():
    data = bytearray(build_header("sha1", 1, 1).to_bytes())
    data[4:6] = struct.pack(">H", 20)
    with pytest.raises(XarError):
        parse_header(io.BytesIO(bytes(data)))


def test_truncated_header():
    data = build_header("sha1", 1, 1).to_bytes()[:20]
    with pytest.raises(XarError):
        parse_header(io.BytesIO(data))


def test_other_size_not_multiple_of_four():
    header = XarHeader(30, 1, 1, 1, ChecksumAlgorithm.OTHER, "x")
    data = bytearray(build_header("sha256", 1, 1).to_bytes())
    data[4:6] = struct.pack(">H", header.size)
    with pytest.raises(XarError):
        parse_header(io.BytesIO(bytes(data)))


def test_other_name_not_terminated():
    data = bytearray(build_header("sha256", 1, 1).to_bytes())
    data[28:64] = b"a" * 36
    with pytest.raises(XarError):
        parse_header(io.BytesIO(bytes(data)))


def test_unknown_algorithm():
    data = bytearray(build_header("sha1", 1, 1).to_bytes())
    data[24:28] = struct.pack(">I", 9)
    with pytest.raises(XarError):
        parse_header(io.BytesIO(bytes(data)))


def test_extra_header_bytes_skipped_seekable():
    header = XarHeader(72, 1, 5, 6, ChecksumAlgorithm.OTHER, "sha256")
    stream = io.BytesIO(header.to_bytes() + b"TOC")
    parsed = parse_header(stream)
    assert parsed.cksum_name == "sha256"
    assert stream.read() == b"TOC"


def test_extra_header_bytes_skipped_pipe():
    header = XarHeader(32, 1, 5, 6, ChecksumAlgorithm.SHA1)
    pipe = _Pipe(header.to_bytes() + b"TOC")
    parsed = parse_header(pipe)
    assert parsed.size == 32
    assert pipe.remaining() == b"TOC"


def test_name_too_long():
    with pytest.raises(XarError):
        build_header("h" * 36, 0, 0)


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        build_header("sha1", -1, 0)