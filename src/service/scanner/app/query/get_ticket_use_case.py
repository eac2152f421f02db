from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.app.query.ticket_lookup import load_ticket_with_bundle
from src.service.scanner.domain.entity.ticket_entity import Ticket
from src.service.scanner.domain.value_object.scan_context import ScanContext


class GetTicketUseCase:
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
        self, *, context: ScanContext, ticket_id: str
    ) -> tuple[Ticket, list[Ticket]]:
        return await load_ticket_with_bundle(
            self.ticket_store, context=context, ticket_id=ticket_id
        )
