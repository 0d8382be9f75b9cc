"""
Pytest configuration and fixtures for pangram_annotator tests.

The classification service is never contacted: every client talks to an
``httpx.MockTransport``.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from pangram_annotator.core.config import ApiConfig, Config
from pangram_annotator.core.security import SettingsSecretProvider
from pangram_annotator.services.annotator import Annotator
from pangram_annotator.services.pangram_client import PangramClient
from pangram_annotator.services.session_controller import SessionController

TEST_URL = "https://pangram.test/v3"
TEST_API_KEY = "test-key-1234"
OWNER_TAG = "pangram"


# =========================================================================
# Response Fixtures
# =========================================================================


def make_response_body(windows: list[dict[str, Any]] | None = None, **overrides: Any) -> dict[str, Any]:
    """Build a well-formed service response."""
    body = {
        "headline": "Mixed authorship detected",
        "fraction_ai": 0.34,
        "fraction_ai_assisted": 0.33,
        "fraction_human": 0.33,
        "windows": windows if windows is not None else [
            {"start_index": 0, "end_index": 5, "label": "AI Generated",
             "ai_assistance_score": 0.97, "confidence": "High"},
            {"start_index": 5, "end_index": 10, "label": "Human",
             "ai_assistance_score": 0.02, "confidence": "High"},
            {"start_index": 10, "end_index": 15, "label": "Mixed",
             "ai_assistance_score": 0.55, "confidence": "Medium"},
        ],
    }
    body.update(overrides)
    return body


@pytest.fixture
def response_body() -> dict[str, Any]:
    return make_response_body()


@pytest.fixture
def make_body() -> Callable[..., dict[str, Any]]:
    return make_response_body


# =========================================================================
# Transport Fixtures
# =========================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records requests and whether it was closed."""

    def __init__(self, handler: Callable) -> None:
        super().__init__(handler)
        self.requests: list[httpx.Request] = []
        self.close_count = 0

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return await super().handle_async_request(request)

    async def aclose(self) -> None:
        self.close_count += 1


def json_transport(body: Any, status_code: int = 200) -> RecordingTransport:
    """Transport answering every request with ``body`` serialized as JSON."""
    content = json.dumps(body).encode()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content, headers={"Content-Type": "application/json"})

    return RecordingTransport(handler)


@pytest.fixture
def make_json_transport() -> Callable[..., RecordingTransport]:
    return json_transport


@pytest.fixture
def make_transport() -> type[RecordingTransport]:
    return RecordingTransport


# =========================================================================
# Service Fixtures
# =========================================================================


@pytest.fixture
def app_config() -> Config:
    return Config(
        owner_tag=OWNER_TAG,
        api=ApiConfig(url=TEST_URL, api_key=TEST_API_KEY, timeout_s=5.0),
    )


@pytest.fixture
def messages() -> list[str]:
    """Collects messages the controller reports to the user."""
    return []


@pytest.fixture
def make_controller(app_config: Config, messages: list[str]) -> Callable[..., SessionController]:
    def factory(transport: httpx.AsyncBaseTransport, config: Config | None = None) -> SessionController:
        cfg = config or app_config
        return SessionController(
            client=PangramClient.from_config(cfg.api, transport=transport),
            annotator=Annotator(owner_tag=cfg.owner_tag),
            secrets=SettingsSecretProvider(cfg),
            notify=messages.append,
        )

    return factory
