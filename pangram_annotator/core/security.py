"""
Secret lookup for the classification service API key.

The key itself is opaque to the rest of the application: services ask a
``SecretProvider`` for it right before a request and never store it.
"""

from typing import Protocol

from pangram_annotator.core.config import Config
from pangram_annotator.core.exceptions import PreconditionError
from pangram_annotator.core.logging import get_logger

logger = get_logger(__name__)


class SecretProvider(Protocol):
    def get_api_key(self) -> str:
        ...


class SettingsSecretProvider:
    """Reads the API key from application configuration (``PANGRAM_API_KEY``)."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def get_api_key(self) -> str:
        """
        Return the configured API key.

        Raises:
            PreconditionError: If no key is configured or it is blank
        """
        if not self._config.api.has_api_key:
            logger.warning("api_key_missing")
            raise PreconditionError(
                "No Pangram API key configured; set PANGRAM_API_KEY"
            )
        value = self._config.api.api_key.get_secret_value().strip()
        logger.debug("api_key_loaded", api_key=mask_secret(value))
        return value


class StaticSecretProvider:
    """Serves a fixed key, e.g. one given with ``--api-key``."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    def get_api_key(self) -> str:
        if not self._api_key or not self._api_key.strip():
            raise PreconditionError("API key must not be empty")
        return self._api_key.strip()


def mask_secret(value: str) -> str:
    """
    Render a secret for logs, keeping only its last four characters.

    Args:
        value: Secret value

    Returns:
        Masked representation, e.g. ``****abcd``
    """
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]
