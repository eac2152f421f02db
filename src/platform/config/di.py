"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers
import httpx

from src.platform.config.core_setting import Settings
from src.service.scanner.driven_adapter.http.ticket_store_http_impl import TicketStoreHttpImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # One pooled client for every call to the ticket store
    http_client = providers.Singleton(
        httpx.AsyncClient,
        timeout=config_service.provided.SCANNER_API_TIMEOUT,
    )

    ticket_store = providers.Singleton(
        TicketStoreHttpImpl,
        base_url=config_service.provided.SCANNER_API_BASE_URL,
        scanner_key=config_service.provided.scanner_key,
        client=http_client,
    )


container = Container()


def setup() -> None:
    container.config_service()


async def cleanup() -> None:
    await container.http_client().aclose()
    container.reset_singletons()
