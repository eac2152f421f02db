from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.command.ticket_status_batch_writer import TicketStatusBatchWriter
from src.service.scanner.app.dto.transition_result import TransitionResult
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.app.query.ticket_lookup import load_ticket_with_bundle
from src.service.scanner.domain.bundle_status_policy import apply_changes, bundle_view, plan_revert_to_active
from src.service.scanner.domain.value_object.scan_context import ScanContext


class RevertTicketToActiveUseCase:
    """
    Revert one ticket (invalid|redeemed -> active).

    Reverting the parent that makes the bundle valid again also reverts its
    invalid children. Redeemed children are left as they are.
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
        plan = plan_revert_to_active(ticket, bundle_tickets)
        await self.batch_writer.write(context=context, changes=plan.changes)
        if len(plan.changes) > 1:
            Logger.base.info(
                f'[REVERT] Ticket {ticket_id} reverted, restored {len(plan.changes) - 1} children'
            )
        return TransitionResult(
            tickets=apply_changes(bundle_view(ticket, bundle_tickets), plan.changes),
            changed_ticket_ids=plan.ticket_ids,
        )
