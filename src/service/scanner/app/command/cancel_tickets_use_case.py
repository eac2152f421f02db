from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import MissingContextError
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.domain.value_object.scan_context import ScanContext


class CancelTicketsUseCase:
    """Delete an abandoned purchase, either by ticket ids or by whole bundle."""

    def __init__(self, *, ticket_store: ITicketStore) -> None:
        self.ticket_store = ticket_store

    @classmethod
    @inject
    def depends(
        cls, ticket_store: ITicketStore = Depends(Provide[Container.ticket_store])
    ) -> Self:
        return cls(ticket_store=ticket_store)

    @Logger.io
    async def execute(
        self,
        *,
        context: ScanContext,
        ids: Optional[list[str]] = None,
        bundle_id: Optional[str] = None,
    ) -> None:
        cleaned_ids = [tid.strip() for tid in ids or [] if tid and tid.strip()]
        cleaned_bundle = (bundle_id or '').strip() or None
        if not cleaned_ids and not cleaned_bundle:
            raise MissingContextError('Missing ticket ids or bundle id')

        await self.ticket_store.cancel_tickets(
            context=context, ids=cleaned_ids or None, bundle_id=cleaned_bundle
        )
        Logger.base.info(
            f'[CANCEL] Cancelled tickets ids={cleaned_ids} bundle={cleaned_bundle} '
            f'for event {context.event_id}'
        )
