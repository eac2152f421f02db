from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.app.query.ticket_lookup import load_bundle
from src.service.scanner.domain.bundle_grouping import narrow_to_parent
from src.service.scanner.domain.entity.ticket_entity import Ticket
from src.service.scanner.domain.value_object.scan_context import ScanContext


class GetBundleUseCase:
    """
    Load one bundle for the bundle screen.

    With ``parent_ticket_id`` the result is narrowed to that parent and its
    children; an unknown parent id falls back to the whole bundle.
    """

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
        bundle_id: str,
        parent_ticket_id: Optional[str] = None,
    ) -> list[Ticket]:
        members = await load_bundle(self.ticket_store, context=context, bundle_id=bundle_id)
        if parent_ticket_id:
            return narrow_to_parent(members, parent_ticket_id)
        return members
