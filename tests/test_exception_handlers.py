"""Tests for user-facing error reporting."""

from __future__ import annotations

import pytest

from pangram_annotator.api.exceptions.exception_handlers import (
    PARSE_MSG,
    PRECONDITION_MSG,
    STALE_TARGET_MSG,
    TRANSPORT_MSG,
    UNKNOWN_MSG,
    error_message,
)
from pangram_annotator.core.exceptions import (
    PangramError,
    ParseError,
    PreconditionError,
    StaleTargetError,
    TransportError,
)


@pytest.mark.parametrize(
    "exc, expected",
    [
        (PreconditionError("text is empty"), f"{PRECONDITION_MSG}: text is empty"),
        (TransportError("HTTP 503", status_code=503), f"{TRANSPORT_MSG}: HTTP 503"),
        (ParseError("missing windows"), f"{PARSE_MSG}: missing windows"),
        (StaleTargetError("doc 1 closed"), STALE_TARGET_MSG),
        (PangramError(), UNKNOWN_MSG),
    ],
)
def test_error_message(exc, expected):
    assert error_message(exc) == expected


def test_error_kinds_are_distinct():
    kinds = [PreconditionError, TransportError, ParseError, StaleTargetError]
    for kind in kinds:
        assert issubclass(kind, PangramError)
        others = [k for k in kinds if k is not kind]
        assert not any(issubclass(kind, other) for other in others)
