"""
Bundle grouping

Turns the flat ticket list of one event/season into display rows:
- tickets without a bundle id, or alone in their bundle, become single rows
- tickets sharing a bundle id become one bundle row with aggregates

All functions here are pure; nothing is cached between calls.
"""

from collections.abc import Iterable, Sequence
import math
from typing import Optional, Union

import attrs

from src.service.scanner.domain.entity.ticket_entity import Ticket
from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.enum.ticket_type import TYPE_RANK, UNKNOWN_TYPE_RANK


@attrs.define(frozen=True)
class SingleRow:
    ticket: Ticket

    @property
    def key(self) -> str:
        return self.ticket.id

    @property
    def min_rank(self) -> int:
        return type_rank(self.ticket)


@attrs.define(frozen=True)
class BundleRow:
    bundle_id: str
    tickets: tuple[Ticket, ...]
    status: TicketStatus
    all_same_status: bool
    price_total: Optional[float]
    primary_name: str
    parent_ticket_id: str

    @property
    def key(self) -> str:
        return self.bundle_id

    @property
    def count(self) -> int:
        return len(self.tickets)

    @property
    def min_rank(self) -> int:
        return min(type_rank(ticket) for ticket in self.tickets)


TicketRow = Union[SingleRow, BundleRow]


@attrs.define(frozen=True)
class BundleTally:
    redeemed_parents: int = 0
    active_parents: int = 0
    invalid_parents: int = 0
    redeemed_children: int = 0
    active_children: int = 0
    invalid_children: int = 0


def type_rank(ticket: Ticket) -> int:
    if ticket.type is None:
        return UNKNOWN_TYPE_RANK
    return TYPE_RANK.get(ticket.type, UNKNOWN_TYPE_RANK)


def sort_tickets_by_type(tickets: Iterable[Ticket]) -> list[Ticket]:
    return sorted(tickets, key=lambda t: (type_rank(t), t.assigned_name or ''))


def compute_bundle_tally(tickets: Iterable[Ticket]) -> BundleTally:
    counts = {
        'redeemed_parents': 0,
        'active_parents': 0,
        'invalid_parents': 0,
        'redeemed_children': 0,
        'active_children': 0,
        'invalid_children': 0,
    }
    for ticket in tickets:
        if ticket.is_parent:
            role = 'parents'
        elif ticket.is_child:
            role = 'children'
        else:
            continue
        if ticket.status in (TicketStatus.REDEEMED, TicketStatus.ACTIVE, TicketStatus.INVALID):
            counts[f'{ticket.status.value}_{role}'] += 1
    return BundleTally(**counts)


def _price_total(tickets: Sequence[Ticket]) -> Optional[float]:
    total = sum((ticket.price or 0) for ticket in tickets)
    return total if math.isfinite(total) else None


def _build_row(group: list[Ticket]) -> TicketRow:
    ordered = sort_tickets_by_type(group)
    first = ordered[0]
    if first.bundle_id is None or len(ordered) == 1:
        return SingleRow(ticket=first)

    representative = next((t for t in ordered if t.is_parent), first)
    return BundleRow(
        bundle_id=first.bundle_id,
        tickets=tuple(ordered),
        status=representative.status,
        all_same_status=all(t.status == first.status for t in ordered),
        price_total=_price_total(ordered),
        primary_name=representative.assigned_name,
        parent_ticket_id=representative.id,
    )


def group_ticket_rows(tickets: Iterable[Ticket]) -> list[TicketRow]:
    groups: dict[str, list[Ticket]] = {}
    for ticket in tickets:
        # Un-bundled tickets key on their own id so they always stay single
        key = f'bundle:{ticket.bundle_id}' if ticket.bundle_id else f'ticket:{ticket.id}'
        groups.setdefault(key, []).append(ticket)

    rows = [_build_row(group) for group in groups.values()]
    # Stable sort keeps first-seen order among rows of equal rank
    return sorted(rows, key=lambda row: row.min_rank)


def bundle_members(bundle_id: str, tickets: Iterable[Ticket]) -> list[Ticket]:
    return sort_tickets_by_type(t for t in tickets if t.bundle_id == bundle_id)


def find_guardian(child: Ticket, bundle_tickets: Iterable[Ticket]) -> Optional[Ticket]:
    """Parent ticket sponsoring ``child`` inside its bundle, or None when unresolvable."""
    if not child.parent_ticket_id:
        return None
    for ticket in bundle_tickets:
        if (
            ticket.id == child.parent_ticket_id
            and ticket.is_parent
            and ticket.bundle_id == child.bundle_id
        ):
            return ticket
    return None


def children_of(parent: Ticket, bundle_tickets: Iterable[Ticket]) -> list[Ticket]:
    return sort_tickets_by_type(
        t
        for t in bundle_tickets
        if t.is_child and t.parent_ticket_id == parent.id and t.bundle_id == parent.bundle_id
    )


def narrow_to_parent(
    bundle_tickets: Sequence[Ticket], parent_ticket_id: Optional[str]
) -> list[Ticket]:
    """Keep one parent and its children; an unknown parent id falls back to the full bundle."""
    ordered = sort_tickets_by_type(bundle_tickets)
    if not parent_ticket_id:
        return ordered
    parent = next((t for t in ordered if t.id == parent_ticket_id), None)
    if parent is None:
        return ordered
    return [parent, *children_of(parent, ordered)]
