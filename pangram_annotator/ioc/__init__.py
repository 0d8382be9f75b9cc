"""
Dependency injection container configuration using Dishka.
"""

from pangram_annotator.ioc.service_provider import ServiceProvider


class AppProvider(ServiceProvider):
    """Main dependency injection provider for the application."""
    pass


__all__ = ["AppProvider"]
