"""
Error reporting for analysis sessions.

This module provides:
1. User-facing messages for each error kind
2. A decorator that turns session errors into a reported, returned outcome

"""

from functools import wraps
from typing import Any, Callable

from pangram_annotator.core.exceptions import (
    PangramError,
    ParseError,
    PreconditionError,
    StaleTargetError,
    TransportError,
)
from pangram_annotator.core.logging import get_logger
from pangram_annotator.dtos.analysis_dto import AnalysisOutcomeDTO

logger = get_logger(__name__)

# Prefixes shown to the user for each error kind
PRECONDITION_MSG = "Pangram: cannot analyze"
TRANSPORT_MSG = "Pangram: request failed"
PARSE_MSG = "Pangram: unexpected response"
STALE_TARGET_MSG = "Pangram: document closed before results arrived"
UNKNOWN_MSG = "Pangram: analysis failed"


def error_message(exc: Exception) -> str:
    """
    Build the message reported to the user for an error.
    """
    if isinstance(exc, StaleTargetError):
        return STALE_TARGET_MSG
    if isinstance(exc, PreconditionError):
        prefix = PRECONDITION_MSG
    elif isinstance(exc, TransportError):
        prefix = TRANSPORT_MSG
    elif isinstance(exc, ParseError):
        prefix = PARSE_MSG
    else:
        prefix = UNKNOWN_MSG
    detail = str(exc)
    return f"{prefix}: {detail}" if detail else prefix


def handle_session_errors(func: Callable) -> Callable:
    """
    Decorator for the asynchronous body of an analysis session.

    Known error kinds are logged, reported through the controller's notify
    sink and returned as the outcome's ``error``. Anything else is logged
    with its traceback and re-raised.
    """
    @wraps(func)
    async def wrapper(self: Any, session: Any, *args: Any, **kwargs: Any) -> AnalysisOutcomeDTO:
        try:
            return await func(self, session, *args, **kwargs)

        except PangramError as e:
            logger.warning(
                "analysis_session_failed",
                error=str(e),
                error_type=type(e).__name__,
                session=func.__name__,
            )
            self.notify(error_message(e))
            return AnalysisOutcomeDTO(request_id=session.request_id, error=e)

        except Exception as e:
            # Unexpected errors - log with full traceback
            logger.error(
                "analysis_session_unexpected_error",
                error=str(e),
                error_type=type(e).__name__,
                session=func.__name__,
                exc_info=True
            )
            raise

    return wrapper
