from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.dto.ticket_rows_result import TicketRowsResult
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.domain.bundle_grouping import group_ticket_rows
from src.service.scanner.domain.ticket_filter import TicketFilter, available_section_sides
from src.service.scanner.domain.value_object.scan_context import ScanContext


class ListTicketRowsUseCase:
    """
    Ticket list of one event, filtered and grouped into rows.

    Section/side options are computed from the unfiltered set so the filter
    dropdown never loses its own selection.
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
        self, *, context: ScanContext, ticket_filter: TicketFilter | None = None
    ) -> TicketRowsResult:
        tickets = await self.ticket_store.fetch_tickets(context=context)
        visible = (ticket_filter or TicketFilter()).apply(tickets)
        return TicketRowsResult(
            rows=group_ticket_rows(visible),
            available_section_sides=available_section_sides(tickets),
            total_tickets=len(tickets),
        )
