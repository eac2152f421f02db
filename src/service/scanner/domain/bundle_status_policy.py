"""
Bundle status policy

Pure planning for ticket status transitions inside a bundle. Each ``plan_*``
function takes the current ticket set, enforces the cross-ticket rules and
returns the full list of status writes to perform. Nothing here talks to the
ticket store; executing a plan is the use cases' job.

Rules:
- a child may only be redeemed once a parent (adult/priority) of its bundle
  is redeemed, and redeemed children never exceed
  ``redeemed_parents * MAX_CHILD_PER_PARENT``
- invalidating the last valid parent cascades ``invalid`` to the active
  children; reverting a parent that makes the bundle valid again reverts
  those children
- the cascade fires only when the "all parents invalid" predicate flips
"""

from collections.abc import Iterable, Sequence
from typing import Optional

import attrs

from src.platform.exception.exceptions import (
    ChildLimitExceededError,
    DomainError,
    MissingContextError,
)
from src.platform.logging.loguru_io import Logger
from src.service.scanner.domain.bundle_grouping import compute_bundle_tally, sort_tickets_by_type
from src.service.scanner.domain.entity.ticket_entity import Ticket
from src.service.scanner.domain.enum.ticket_status import TicketStatus


MAX_CHILD_PER_PARENT = 3

PARENT_REQUIRED_MESSAGE = 'An adult or priority ticket must be redeemed first'
CHILD_LIMIT_MESSAGE = (
    f'Child ticket limit reached: each redeemed adult or priority ticket '
    f'admits up to {MAX_CHILD_PER_PARENT} children'
)
NO_PARENTS_MESSAGE = 'No adult or priority tickets in this bundle'
BUNDLE_CHILD_LIMIT_MESSAGE = (
    f'Redeeming this bundle would exceed the limit of '
    f'{MAX_CHILD_PER_PARENT} children per adult or priority ticket'
)
NOTHING_TO_REDEEM = 'Nothing to redeem'
NOTHING_TO_REVERT = 'Nothing to revert'
NOTHING_TO_CONFIRM = 'Nothing to confirm'


@attrs.define(frozen=True)
class StatusChange:
    ticket_id: str
    from_status: TicketStatus
    to_status: TicketStatus


@attrs.define(frozen=True)
class TransitionPlan:
    changes: tuple[StatusChange, ...] = ()
    noop_reason: Optional[str] = None

    @property
    def is_noop(self) -> bool:
        return not self.changes

    @property
    def ticket_ids(self) -> list[str]:
        return [change.ticket_id for change in self.changes]


def apply_changes(tickets: Iterable[Ticket], changes: Iterable[StatusChange]) -> list[Ticket]:
    targets = {change.ticket_id: change.to_status for change in changes}
    return [
        ticket.with_status(targets[ticket.id]) if ticket.id in targets else ticket
        for ticket in tickets
    ]


def all_parents_invalid(tickets: Iterable[Ticket]) -> bool:
    parents = [ticket for ticket in tickets if ticket.is_parent]
    return bool(parents) and all(p.status == TicketStatus.INVALID for p in parents)


def bundle_view(ticket: Ticket, bundle_tickets: Iterable[Ticket]) -> list[Ticket]:
    """
    The ticket's bundle with ``ticket`` as the authoritative copy of itself.

    Tickets from other bundles are ignored; an un-bundled ticket is its own view.
    """
    if not ticket.bundle_id:
        return [ticket]
    others = [t for t in bundle_tickets if t.bundle_id == ticket.bundle_id and t.id != ticket.id]
    return sort_tickets_by_type([ticket, *others])


def _require_source_status(
    ticket: Ticket, allowed: Sequence[TicketStatus], action: str
) -> None:
    if ticket.status not in allowed:
        raise DomainError(f'Cannot {action} a ticket that is {ticket.status.value}')


def _cascade(
    members: Sequence[Ticket],
    own: StatusChange,
    *,
    cascade_from: TicketStatus,
    flips_when_invalid_before: bool,
) -> tuple[StatusChange, ...]:
    """
    Children to carry along with a parent change.

    The "all parents invalid" predicate is computed before and after the
    tentative parent change; children follow only when it flips in the
    expected direction.
    """
    before = all_parents_invalid(members)
    after = all_parents_invalid(apply_changes(members, [own]))
    if before == after or before != flips_when_invalid_before:
        return ()
    return tuple(
        StatusChange(ticket_id=t.id, from_status=t.status, to_status=own.to_status)
        for t in members
        if t.is_child and t.status == cascade_from
    )


@Logger.io
def plan_redeem(ticket: Ticket, bundle_tickets: Iterable[Ticket]) -> TransitionPlan:
    _require_source_status(ticket, (TicketStatus.ACTIVE,), 'redeem')
    members = bundle_view(ticket, bundle_tickets)

    if ticket.is_child and len(members) > 1:
        tally = compute_bundle_tally(members)
        if tally.redeemed_parents < 1:
            raise DomainError(PARENT_REQUIRED_MESSAGE)
        if tally.redeemed_children + 1 > tally.redeemed_parents * MAX_CHILD_PER_PARENT:
            raise ChildLimitExceededError(CHILD_LIMIT_MESSAGE)

    return TransitionPlan(
        changes=(StatusChange(ticket.id, ticket.status, TicketStatus.REDEEMED),)
    )


@Logger.io
def plan_invalidate(ticket: Ticket, bundle_tickets: Iterable[Ticket]) -> TransitionPlan:
    _require_source_status(ticket, (TicketStatus.ACTIVE,), 'invalidate')
    own = StatusChange(ticket.id, ticket.status, TicketStatus.INVALID)
    if not ticket.is_parent or not ticket.bundle_id:
        return TransitionPlan(changes=(own,))

    members = bundle_view(ticket, bundle_tickets)
    cascade = _cascade(
        members, own, cascade_from=TicketStatus.ACTIVE, flips_when_invalid_before=False
    )
    return TransitionPlan(changes=(own, *cascade))


@Logger.io
def plan_revert_to_active(ticket: Ticket, bundle_tickets: Iterable[Ticket]) -> TransitionPlan:
    _require_source_status(ticket, (TicketStatus.INVALID, TicketStatus.REDEEMED), 'revert')
    own = StatusChange(ticket.id, ticket.status, TicketStatus.ACTIVE)
    if not ticket.is_parent or not ticket.bundle_id:
        return TransitionPlan(changes=(own,))

    members = bundle_view(ticket, bundle_tickets)
    cascade = _cascade(
        members, own, cascade_from=TicketStatus.INVALID, flips_when_invalid_before=True
    )
    return TransitionPlan(changes=(own, *cascade))


def _require_tickets(bundle_tickets: Sequence[Ticket]) -> None:
    if not bundle_tickets:
        raise MissingContextError('No tickets found for this bundle.')


@Logger.io
def plan_redeem_all(bundle_tickets: Sequence[Ticket]) -> TransitionPlan:
    _require_tickets(bundle_tickets)
    active = [t for t in bundle_tickets if t.status == TicketStatus.ACTIVE]
    if not active:
        return TransitionPlan(noop_reason=NOTHING_TO_REDEEM)

    tally = compute_bundle_tally(bundle_tickets)
    final_parents = tally.redeemed_parents + tally.active_parents
    if final_parents <= 0:
        raise DomainError(NO_PARENTS_MESSAGE)
    final_children = tally.redeemed_children + tally.active_children
    if final_children > final_parents * MAX_CHILD_PER_PARENT:
        raise ChildLimitExceededError(BUNDLE_CHILD_LIMIT_MESSAGE)

    return TransitionPlan(
        changes=tuple(
            StatusChange(t.id, t.status, TicketStatus.REDEEMED) for t in sort_tickets_by_type(active)
        )
    )


@Logger.io
def plan_revert_all(bundle_tickets: Sequence[Ticket]) -> TransitionPlan:
    _require_tickets(bundle_tickets)
    redeemed = [t for t in bundle_tickets if t.status == TicketStatus.REDEEMED]
    if not redeemed:
        return TransitionPlan(noop_reason=NOTHING_TO_REVERT)
    return TransitionPlan(
        changes=tuple(
            StatusChange(t.id, t.status, TicketStatus.ACTIVE) for t in sort_tickets_by_type(redeemed)
        )
    )


@Logger.io
def plan_confirm_pending(tickets: Sequence[Ticket]) -> TransitionPlan:
    _require_tickets(tickets)
    pending = [t for t in tickets if t.status == TicketStatus.PENDING]
    if not pending:
        return TransitionPlan(noop_reason=NOTHING_TO_CONFIRM)
    return TransitionPlan(
        changes=tuple(
            StatusChange(t.id, t.status, TicketStatus.ACTIVE) for t in sort_tickets_by_type(pending)
        )
    )
