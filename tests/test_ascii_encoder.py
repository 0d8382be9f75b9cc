"""Tests for the ASCII-safe request payload encoder."""

from __future__ import annotations

import json

import pytest

from pangram_annotator.utils.ascii_encoder import encode_payload, escape_non_ascii


@pytest.mark.parametrize(
    "text",
    [
        "Plain ASCII text.",
        "Café au lait, naïve résumé",
        "Grüße aus Köln – “quoted” — dashes",
        "日本語のテキスト",
        "Emoji 😀 and 🇫🇷 flags",
        "Math 𝔘𝔫𝔦𝔠𝔬𝔡𝔢 outside the BMP",
        "line one\nline two\ttabbed\r\n",
        "quotes \" and backslashes \\ survive",
    ],
)
def test_payload_is_ascii_and_round_trips(text: str):
    payload = encode_payload(text)

    assert isinstance(payload, bytes)
    assert all(byte < 0x80 for byte in payload)
    assert json.loads(payload) == {"text": text}


def test_astral_character_becomes_surrogate_pair():
    payload = encode_payload("😀")

    assert payload == b'{"text": "\\ud83d\\ude00"}'
    assert json.loads(payload)["text"] == "\U0001F600"


def test_bmp_character_becomes_single_escape():
    assert encode_payload("é") == b'{"text": "\\u00e9"}'


def test_serializer_escapes_are_not_doubled():
    payload = encode_payload("a\nb\x01c")

    assert b"\\n" in payload
    assert b"\\u0001" in payload
    assert b"\\\\" not in payload
    assert json.loads(payload)["text"] == "a\nb\x01c"


def test_delete_character_is_escaped():
    payload = encode_payload("x\x7fy")

    assert b"\\u007f" in payload
    assert json.loads(payload)["text"] == "x\x7fy"


def test_matches_standard_ascii_serialization():
    text = "Zoë writes 🐍 code"
    assert encode_payload(text) == json.dumps({"text": text}, ensure_ascii=True).encode("ascii")


def test_escape_non_ascii_leaves_printable_ascii_alone():
    assert escape_non_ascii('{"text": "hello"}') == '{"text": "hello"}'
