"""Encodes request payloads as 7-bit clean JSON bytes."""
import json

_PRINTABLE_ASCII_MIN = 0x20
_PRINTABLE_ASCII_MAX = 0x7E


def _escape_char(char: str) -> str:
    codepoint = ord(char)
    if codepoint <= 0xFFFF:
        return f"\\u{codepoint:04x}"
    # Outside the BMP: emit a UTF-16 surrogate pair
    offset = codepoint - 0x10000
    high = 0xD800 + (offset >> 10)
    low = 0xDC00 + (offset & 0x3FF)
    return f"\\u{high:04x}\\u{low:04x}"


def escape_non_ascii(serialized: str) -> str:
    """Replace every character outside printable ASCII with a JSON escape.

    The input must already be valid JSON text. Control characters were
    escaped by the serializer, so only the characters it left raw are touched.
    """
    return "".join(
        char if _PRINTABLE_ASCII_MIN <= ord(char) <= _PRINTABLE_ASCII_MAX else _escape_char(char)
        for char in serialized
    )


def encode_payload(text: str) -> bytes:
    """Serialize ``{"text": text}`` into ASCII-only JSON bytes."""
    serialized = json.dumps({"text": text}, ensure_ascii=False)
    return escape_non_ascii(serialized).encode("ascii")
