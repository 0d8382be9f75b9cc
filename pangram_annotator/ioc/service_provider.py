"""
Service provider for dependency injection.

This module provides all service dependencies.
"""

from dishka import Provider, Scope, from_context, provide

from pangram_annotator.core.config import Config
from pangram_annotator.core.security import SecretProvider
from pangram_annotator.services.annotator import Annotator
from pangram_annotator.services.pangram_client import PangramClient
from pangram_annotator.services.session_controller import SessionController


class ServiceProvider(Provider):
    """
    Provider for service dependencies.

    All services are provided at APP scope (singleton).
    """

    config = from_context(provides=Config, scope=Scope.APP)
    secrets = from_context(provides=SecretProvider, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def provide_pangram_client(self, config: Config) -> PangramClient:
        return PangramClient.from_config(config.api)

    @provide(scope=Scope.APP)
    def provide_annotator(self, config: Config) -> Annotator:
        return Annotator(owner_tag=config.owner_tag)

    @provide(scope=Scope.APP)
    def provide_session_controller(
        self,
        client: PangramClient,
        annotator: Annotator,
        secrets: SecretProvider,
    ) -> SessionController:
        return SessionController(client, annotator, secrets)
