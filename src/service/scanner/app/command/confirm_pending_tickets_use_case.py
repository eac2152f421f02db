from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import MissingContextError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.dto.transition_result import TransitionResult
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.app.query.ticket_lookup import BUNDLE_NOT_FOUND_MESSAGE, load_bundle
from src.service.scanner.domain.bundle_grouping import sort_tickets_by_type
from src.service.scanner.domain.bundle_status_policy import apply_changes, plan_confirm_pending
from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.value_object.scan_context import ScanContext


class ConfirmPendingTicketsUseCase:
    """
    Activate the pending tickets of a fresh purchase.

    With both a bundle id and ids, only the listed members of that bundle are
    confirmed.

    Unlike the scan operations this is a single ``confirm_batch`` call: the
    store applies it in one request, so there is no partial outcome to report.
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
        bundle_id: Optional[str] = None,
        ids: Optional[list[str]] = None,
    ) -> TransitionResult:
        wanted = [tid.strip() for tid in ids or [] if tid and tid.strip()]
        if bundle_id and bundle_id.strip():
            tickets = await load_bundle(self.ticket_store, context=context, bundle_id=bundle_id)
            if wanted:
                tickets = [t for t in tickets if t.id in wanted]
                if not tickets:
                    raise NotFoundError(BUNDLE_NOT_FOUND_MESSAGE)
        elif wanted:
            fetched = await self.ticket_store.fetch_tickets(context=context, ids=wanted)
            tickets = sort_tickets_by_type(t for t in fetched if t.id in wanted)
        else:
            raise MissingContextError('Missing bundle id or ticket ids')

        plan = plan_confirm_pending(tickets)
        if plan.is_noop:
            return TransitionResult(tickets=tickets, noop_reason=plan.noop_reason)

        await self.ticket_store.confirm_batch(
            context=context,
            status=TicketStatus.ACTIVE,
            ids=plan.ticket_ids,
            bundle_id=None if wanted else (bundle_id or None),
        )
        Logger.base.info(f'[CONFIRM] {len(plan.changes)} pending tickets activated')
        return TransitionResult(
            tickets=apply_changes(tickets, plan.changes),
            changed_ticket_ids=plan.ticket_ids,
        )
