"""Transfer-encoding decoders for attachment bodies.

Both decoders are best-effort: malformed input produces shorter or
garbled output, never an exception.
"""

import quopri
import re

ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_VALUES = {symbol: value for value, symbol in enumerate(ALPHABET)}
_NOT_BASE64 = re.compile(rb"[^A-Za-z0-9+/=]")


def decode_base64(data: bytes) -> bytes:
    """
    Decode base64, ignoring line breaks and any other foreign characters.

    Input is consumed four symbols at a time. A group padded with "=" ends
    the data; a trailing group with fewer than two symbols is dropped.
    """
    symbols = _NOT_BASE64.sub(b"", data)
    out = bytearray()

    for i in range(0, len(symbols), 4):
        group = symbols[i : i + 4]
        usable = group.split(b"=", 1)[0]
        if len(usable) < 2:
            break

        bits = 0
        for symbol in usable:
            bits = (bits << 6) | _VALUES[symbol]
        bits <<= 6 * (4 - len(usable))

        decoded = bits.to_bytes(3, "big")
        out += decoded[: len(usable) - 1]

        if len(usable) < 4:
            break

    return bytes(out)


def decode_body(body: bytes, transfer_encoding: str | None) -> bytes:
    """Decode a part body according to its Content-Transfer-Encoding."""
    encoding = (transfer_encoding or "").lower()
    if "base64" in encoding:
        return decode_base64(body)
    if "quoted-printable" in encoding:
        return quopri.decodestring(body)
    return body
