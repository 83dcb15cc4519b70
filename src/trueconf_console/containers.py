"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from trueconf_console.adapters.trueconf_client import (
    DirectoryClient,
    HttpxTrueConfClient,
)
from trueconf_console.config import Settings
from trueconf_console.services.directory import DirectoryService
from trueconf_console.services.imports import ImportService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    directory_client: DirectoryClient
    directory_service: DirectoryService
    import_service: ImportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    directory_client = HttpxTrueConfClient.create(
        api_key=resolved_settings.api_key,
        base_url=resolved_settings.users_api_url,
        timeout=resolved_settings.request_timeout_seconds,
    )
    directory_service = DirectoryService(directory_client)
    import_service = ImportService(
        directory_service=directory_service,
        email_domain=resolved_settings.email_domain,
    )

    async def close_resources() -> None:
        await directory_client.close()

    return AppContainer(
        settings=resolved_settings,
        directory_client=directory_client,
        directory_service=directory_service,
        import_service=import_service,
        close_resources=close_resources,
    )
