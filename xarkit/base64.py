"""Lenient base64 decoding for values stored in the table of contents.

Characters outside the base64 alphabet are skipped, a NUL byte ends the
input, and padding must be well formed.
"""

_NUL = -3
_PAD = -2
_SKIP = -1

_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def _build_table():
    table = [_SKIP] * 256
    table[0] = _NUL
    table[ord("=")] = _PAD
    for value, char in enumerate(_ALPHABET):
        table[char] = value
    return tuple(table)


_TABLE = _build_table()


def from_base64(data):
    """Decode base64 ``data`` (bytes or str) and return the decoded bytes.

    Raises ValueError when the input is malformed.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    data = bytes(data)

    out = bytearray()
    buf = [0, 0, 0]
    ignored = 0
    pad = 0
    index = 0
    length = len(data)

    while index < length and not pad:
        code = _TABLE[data[index]]
        index += 1
        position = (index - ignored - 1) % 4

        if code == _NUL:
            if position:
                raise ValueError("base64 input ends in the middle of a quantum")
            return bytes(out)
        if code == _PAD:
            if position < 2:
                raise ValueError("misplaced base64 padding")
            if position == 2:
                if index >= length or data[index] != ord("="):
                    raise ValueError("incomplete base64 padding")
                buf[2] = 0
                pad = 2
            else:
                pad = 1
        elif code == _SKIP:
            ignored += 1
        elif position == 0:
            buf[0] = (code << 2) & 0xFF
        elif position == 1:
            buf[0] |= code >> 4
            buf[1] = (code << 4) & 0xFF
        elif position == 2:
            buf[1] |= code >> 2
            buf[2] = (code << 6) & 0xFF
        else:
            buf[2] |= code
            out.extend(buf)

    if pad:
        out.extend(buf[: 3 - pad])
    elif (index - ignored) % 4:
        raise ValueError("base64 input length is not a multiple of four")
    return bytes(out)