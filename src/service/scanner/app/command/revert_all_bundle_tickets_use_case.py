from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.command.ticket_status_batch_writer import TicketStatusBatchWriter
from src.service.scanner.app.dto.transition_result import TransitionResult
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.app.query.ticket_lookup import load_bundle
from src.service.scanner.domain.bundle_status_policy import apply_changes, plan_revert_all
from src.service.scanner.domain.value_object.scan_context import ScanContext


class RevertAllBundleTicketsUseCase:
    """Put every redeemed ticket of a bundle back to active. No capacity checks."""

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
    async def execute(self, *, context: ScanContext, bundle_id: str) -> TransitionResult:
        members = await load_bundle(self.ticket_store, context=context, bundle_id=bundle_id)
        plan = plan_revert_all(members)
        if plan.is_noop:
            return TransitionResult(tickets=members, noop_reason=plan.noop_reason)

        await self.batch_writer.write(context=context, changes=plan.changes)
        return TransitionResult(
            tickets=apply_changes(members, plan.changes),
            changed_ticket_ids=plan.ticket_ids,
        )
