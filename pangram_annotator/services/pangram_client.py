"""Transport client for the Pangram text classification service."""
import httpx
from pydantic import ValidationError

from pangram_annotator.api.v3.schemas.analysis import AnalysisResponse
from pangram_annotator.core.config import DEFAULT_API_URL, ApiConfig
from pangram_annotator.core.exceptions import ParseError, PreconditionError, TransportError
from pangram_annotator.core.logging import get_logger
from pangram_annotator.dtos.analysis_dto import AnalysisResultDTO, ClassificationWindowDTO

logger = get_logger(__name__)

_BODY_EXCERPT_CHARS = 200


def parse_analysis_response(body: bytes | str) -> AnalysisResultDTO:
    """Validate a response body and convert it into an AnalysisResultDTO.

    Raises:
        ParseError: If the body is not JSON or a required field is missing
            or has the wrong type.
    """
    try:
        response = AnalysisResponse.model_validate_json(body)
    except ValidationError as e:
        logger.warning(
            "analysis_response_invalid",
            error_count=e.error_count(),
            errors=[
                {"loc": ".".join(str(part) for part in err["loc"]), "type": err["type"]}
                for err in e.errors()
            ],
        )
        raise ParseError(f"Malformed analysis response: {e.error_count()} validation error(s)") from e

    return AnalysisResultDTO(
        headline=response.headline,
        fraction_ai=response.fraction_ai,
        fraction_ai_assisted=response.fraction_ai_assisted,
        fraction_human=response.fraction_human,
        windows=[
            ClassificationWindowDTO(
                start_index=w.start_index,
                end_index=w.end_index,
                label=w.label,
                ai_assistance_score=w.ai_assistance_score,
                confidence=w.confidence,
            )
            for w in response.windows
        ],
    )


class PangramClient:
    """Client for calling the Pangram classification endpoint.

    A single POST per call; nothing is retried.
    """

    def __init__(
        self,
        url: str = DEFAULT_API_URL,
        timeout: float = 60.0,
        api_key_header: str = "x-api-key",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.api_key_header = api_key_header
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        api_config: ApiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "PangramClient":
        return cls(
            url=api_config.url,
            timeout=api_config.timeout_s,
            api_key_header=api_config.api_key_header,
            transport=transport,
        )

    async def submit(self, payload: bytes, api_key: str) -> AnalysisResultDTO:
        """
        POST an encoded payload and parse the classification result.

        Args:
            payload: ASCII-safe JSON body
            api_key: Service API key

        Returns:
            Parsed analysis result

        Raises:
            PreconditionError: If the API key is empty
            TransportError: If no response arrives or the status is not 2xx
            ParseError: If the response body is malformed
        """
        if not api_key or not api_key.strip():
            raise PreconditionError("API key must not be empty")

        headers = {
            "Content-Type": "application/json",
            self.api_key_header: api_key,
        }

        logger.info("analysis_submitted", url=self.url, payload_bytes=len(payload))
        try:
            # The client context closes the connection pool on every path
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(self.url, content=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(
                "analysis_transport_failed",
                url=self.url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportError(f"No response from {self.url}: {str(e) or type(e).__name__}") from e

        logger.info(
            "analysis_response_received",
            status_code=response.status_code,
            body_bytes=len(response.content),
        )

        if not response.is_success:
            logger.warning(
                "analysis_http_error",
                status_code=response.status_code,
                body=response.text[:_BODY_EXCERPT_CHARS],
            )
            raise TransportError(
                f"{self.url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        return parse_analysis_response(response.content)
