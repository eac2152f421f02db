from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.command.ticket_status_batch_writer import TicketStatusBatchWriter
from src.service.scanner.app.dto.transition_result import TransitionResult
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.app.query.ticket_lookup import load_ticket_with_bundle
from src.service.scanner.domain.bundle_status_policy import apply_changes, bundle_view, plan_redeem
from src.service.scanner.domain.value_object.scan_context import ScanContext


class RedeemTicketUseCase:
    """
    Redeem one ticket (active -> redeemed).

    Flow:
    1. Fetch the ticket and its bundle fresh from the store
    2. Check parent-first and child capacity rules on the fresh tally
    3. Write the single status change
    """

    def __init__(self, *, ticket_store: ITicketStore) -> None:
        self.ticket_store = ticket_store
        self.batch_writer = TicketStatusBatchWriter(ticket_store=ticket_store)

    @classmethod
    @inject
    def depends(
        cls, ticket_store: ITicketStore = Depends(Provide[Container.ticket_store])
    ) -> Self:
        return cls(ticket_store=ticket_store)

    @Logger.io
    async def execute(self, *, context: ScanContext, ticket_id: str) -> TransitionResult:
        ticket, bundle_tickets = await load_ticket_with_bundle(
            self.ticket_store, context=context, ticket_id=ticket_id
        )
        plan = plan_redeem(ticket, bundle_tickets)
        await self.batch_writer.write(context=context, changes=plan.changes)
        Logger.base.info(f'[REDEEM] Ticket {ticket_id} redeemed for event {context.event_id}')
        return TransitionResult(
            tickets=apply_changes(bundle_view(ticket, bundle_tickets), plan.changes),
            changed_ticket_ids=plan.ticket_ids,
        )
