import bz2

import pytest

from xarkit.bzip import (
    BzipDecoder,
    BzipEncoder,
    compression_level,
    is_compressed,
)
from xarkit.errors import ErrorKind, ErrorReporter, Severity, XarError


def _recording_reporter():
    calls = []
    reporter = ErrorReporter()
    reporter.register(
        lambda severity, kind, context: calls.append(
            (severity, kind, context.message, context.file)),
        None,
    )
    return reporter, calls


def _encode(data, level=9, chunk=7):
    encoder = BzipEncoder(level)
    parts = [encoder.feed(data[i:i + chunk]) for i in range(0, len(data), chunk)]
    parts.append(encoder.finish())
    return b"".join(parts)


@pytest.mark.parametrize("payload", [b"", b"a", b"hello bzip2 " * 200, bytes(range(256)) * 4])
def test_round_trip(payload):
    stream = _encode(payload)
    decoder = BzipDecoder()
    out = b"".join(decoder.feed(stream[i:i + 5]) for i in range(0, len(stream), 5))
    assert out == payload
    assert decoder.finished is True


def test_encoder_output_is_standard_bzip2():
    payload = b"standard stream" * 50
    assert bz2.decompress(_encode(payload, level=1)) == payload


def test_encoder_output_is_detected_as_compressed():
    assert is_compressed(_encode(b"data")) is True


@pytest.mark.parametrize("data", [None, b"", b"BZ", b"BZx...", b"plain text"])
def test_is_compressed_rejects_other_data(data):
    assert is_compressed(data) is False


def test_finish_is_idempotent():
    encoder = BzipEncoder()
    encoder.feed(b"abc")
    encoder.finish()
    assert encoder.finish() == b""


def test_feed_after_finish_reports_creation_error():
    reporter, calls = _recording_reporter()
    encoder = BzipEncoder(reporter=reporter, file="f")
    encoder.finish()
    with pytest.raises(XarError) as info:
        encoder.feed(b"late")
    assert info.value.kind is ErrorKind.ARCHIVE_CREATION
    assert calls == [(Severity.FATAL, ErrorKind.ARCHIVE_CREATION, "Error compressing file", "f")]


def test_garbage_input_reports_extraction_error():
    reporter, calls = _recording_reporter()
    decoder = BzipDecoder(reporter=reporter, file="g")
    with pytest.raises(XarError):
        decoder.feed(b"not a bzip2 stream at all")
    assert calls == [(Severity.FATAL, ErrorKind.ARCHIVE_EXTRACTION, "Error decompressing file", "g")]


def test_trailing_data_after_stream_is_an_error():
    decoder = BzipDecoder()
    with pytest.raises(XarError):
        decoder.feed(bz2.compress(b"abc") + b"extra")


def test_feed_after_end_of_stream_is_an_error():
    decoder = BzipDecoder()
    assert decoder.feed(bz2.compress(b"abc")) == b"abc"
    with pytest.raises(XarError):
        decoder.feed(b"more")


def test_empty_chunk_yields_nothing():
    assert BzipDecoder().feed(b"") == b""


def test_compression_level_default():
    assert compression_level(None) == 9


@pytest.mark.parametrize("text,level", [("5", 5), (" 3abc", 3), ("+1", 1), ("9", 9)])
def test_compression_level_parses_leading_integer(text, level):
    assert compression_level(text) == level


@pytest.mark.parametrize("text", ["0", "10", "-2", "abc", ""])
def test_compression_level_out_of_range(text):
    with pytest.raises(ValueError):
        compression_level(text)


def test_encoder_rejects_bad_level():
    with pytest.raises(ValueError):
        BzipEncoder(level=0)