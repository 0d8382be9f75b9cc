"""Orchestrates one analysis round trip per invocation."""
import asyncio
import math
from dataclasses import dataclass, field
from typing import Callable

from pydantic import ValidationError

from pangram_annotator.api.exceptions.exception_handlers import handle_session_errors
from pangram_annotator.api.v3.schemas.analysis import AnalysisRequest
from pangram_annotator.core.exceptions import PreconditionError
from pangram_annotator.core.logging import (
    clear_request_context,
    generate_request_id,
    get_logger,
    set_request_context,
)
from pangram_annotator.core.security import SecretProvider
from pangram_annotator.document.host import DocumentHost, TextRange
from pangram_annotator.dtos.analysis_dto import AnalysisOutcomeDTO, AnalysisResultDTO
from pangram_annotator.services.annotator import Annotator
from pangram_annotator.services.pangram_client import PangramClient
from pangram_annotator.utils.ascii_encoder import encode_payload

logger = get_logger(__name__)


@dataclass
class AnalysisSession:
    """State captured when an analysis is submitted."""
    request_id: str
    document: DocumentHost
    text_range: TextRange
    text: str
    generation: int
    api_key: str = field(repr=False)

    @property
    def base_offset(self) -> int:
        return self.text_range.start


def _percent(fraction: float) -> int:
    return math.floor(fraction * 100 + 0.5)


def format_summary(result: AnalysisResultDTO) -> str:
    return (
        f"{result.headline} "
        f"(AI: {_percent(result.fraction_ai)}%, "
        f"AI-assisted: {_percent(result.fraction_ai_assisted)}%, "
        f"Human: {_percent(result.fraction_human)}%)"
    )


@dataclass
class _DocumentSequence:
    """Request ordering for one document while it has requests in flight."""
    submitted: int = 0
    applied: int = 0
    pending: int = 0


def _log_message(message: str) -> None:
    logger.info("user_message", message=message)


class SessionController:
    """Entry points for analyzing a document and clearing its annotations.

    Overlapping ``analyze`` calls each run their own round trip. Responses
    are sequenced per document: a response is discarded only when a newer
    request for the same document has already applied its annotations.
    """

    def __init__(
        self,
        client: PangramClient,
        annotator: Annotator,
        secrets: SecretProvider,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        self._client = client
        self._annotator = annotator
        self._secrets = secrets
        self._notify = notify or _log_message
        self._sequences: dict[str, _DocumentSequence] = {}
        self._tasks: set[asyncio.Task] = set()

    def notify(self, message: str) -> None:
        self._notify(message)

    def _prepare(self, document: DocumentHost) -> AnalysisSession:
        """Validate preconditions and capture the session state.

        Raises:
            PreconditionError: If the text is blank or no API key is configured
        """
        selection = document.selection()
        text_range = selection if selection is not None and len(selection) > 0 else document.extent()
        try:
            request = AnalysisRequest(text=document.text(text_range))
        except ValidationError as e:
            raise PreconditionError("Nothing to analyze: the text is empty") from e

        api_key = self._secrets.get_api_key()

        sequence = self._sequences.setdefault(document.document_id, _DocumentSequence())
        sequence.submitted += 1
        sequence.pending += 1
        generation = sequence.submitted

        return AnalysisSession(
            request_id=generate_request_id(),
            document=document,
            text_range=text_range,
            text=request.text,
            generation=generation,
            api_key=api_key,
        )

    def analyze(self, document: DocumentHost) -> asyncio.Task[AnalysisOutcomeDTO]:
        """Start analyzing the selection, or the whole document, in the background.

        Must be called from a running event loop. Precondition failures raise
        here, before anything is scheduled; every later failure is reported
        through ``notify`` and carried in the task's outcome.
        """
        session = self._prepare(document)
        task = asyncio.create_task(self._run(session))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def run(self, document: DocumentHost) -> AnalysisOutcomeDTO:
        """Analyze and wait for the outcome."""
        session = self._prepare(document)
        return await self._run(session)

    def clear(self, document: DocumentHost) -> int:
        """Remove this tool's annotations; in-flight requests are not cancelled."""
        removed = self._annotator.clear(document)
        self.notify(f"Pangram: cleared {removed} annotation(s)")
        return removed

    async def _run(self, session: AnalysisSession) -> AnalysisOutcomeDTO:
        set_request_context(request_id=session.request_id, document_id=session.document.document_id)
        try:
            return await self._execute(session)
        finally:
            self._release(session)
            clear_request_context()

    def _release(self, session: AnalysisSession) -> None:
        document_id = session.document.document_id
        sequence = self._sequences.get(document_id)
        if sequence is None:
            return
        sequence.pending -= 1
        if sequence.pending <= 0:
            del self._sequences[document_id]

    @handle_session_errors
    async def _execute(self, session: AnalysisSession) -> AnalysisOutcomeDTO:
        logger.info(
            "analysis_started",
            base_offset=session.base_offset,
            text_length=len(session.text),
            generation=session.generation,
        )
        payload = encode_payload(session.text)
        result = await self._client.submit(payload, session.api_key)
        summary = format_summary(result)

        sequence = self._sequences[session.document.document_id]
        if session.generation < sequence.applied:
            logger.info(
                "stale_response_discarded",
                generation=session.generation,
                applied_generation=sequence.applied,
            )
            self.notify(f"{summary} [superseded by a newer analysis]")
            return AnalysisOutcomeDTO(
                request_id=session.request_id,
                result=result,
                summary=summary,
                applied=False,
            )

        annotations = self._annotator.annotate(
            session.document,
            result.windows,
            base_offset=session.base_offset,
            limit=session.text_range.end,
        )
        sequence.applied = session.generation
        self.notify(summary)
        logger.info("analysis_completed", annotations=len(annotations), windows=len(result.windows))
        return AnalysisOutcomeDTO(
            request_id=session.request_id,
            result=result,
            annotations=annotations,
            summary=summary,
            applied=True,
        )
