import base64

import pytest

from xarkit.base64 import from_base64


@pytest.mark.parametrize(
    "payload",
    [b"", b"x", b"xy", b"xyz", b"hello world", bytes(range(256)), b"\x00\xff" * 37],
)
def test_round_trip_with_standard_encoding(payload):
    assert from_base64(base64.b64encode(payload)) == payload


def test_single_byte_with_double_padding():
    assert from_base64(b"QQ==") == b"A"


def test_two_bytes_with_single_padding():
    assert from_base64(b"QUI=") == b"AB"


def test_text_input_matches_bytes_input():
    assert from_base64("QQ==") == from_base64(b"QQ==")


def test_non_alphabet_characters_are_skipped():
    payload = b"some longer payload to wrap over lines"
    encoded = base64.b64encode(payload)
    wrapped = b"\n".join(encoded[i:i + 4] for i in range(0, len(encoded), 4))
    assert from_base64(b" \t" + wrapped + b"\r\n") == payload


def test_nul_byte_terminates_input():
    encoded = base64.b64encode(b"xyz")
    assert from_base64(encoded + b"\x00garbage!") == b"xyz"


def test_data_after_padding_is_ignored():
    assert from_base64(b"QQ==QUJD") == from_base64(b"QQ==")


@pytest.mark.parametrize(
    "bad",
    [b"Q===", b"=QQQ", b"QQ=x", b"QQ=", b"QUJ", b"Q", b"QU\x00", b"QUJDQ"],
)
def test_malformed_input_raises(bad):
    with pytest.raises(ValueError):
        from_base64(bad)