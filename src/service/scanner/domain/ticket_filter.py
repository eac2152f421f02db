from collections.abc import Iterable
from typing import Optional

import attrs

from src.service.scanner.domain.entity.ticket_entity import Ticket
from src.service.scanner.domain.enum.ticket_status import TicketStatus


@attrs.define(frozen=True)
class TicketFilter:
    query: str = ''
    status: Optional[TicketStatus] = None
    section_side: Optional[str] = None
    purchase_type: Optional[str] = None

    def matches(self, ticket: Ticket) -> bool:
        q = self.query.strip().lower()
        if q and q not in ticket.id.lower() and q not in ticket.assigned_name.lower():
            return False
        if self.status is not None and ticket.status != self.status:
            return False
        if self.section_side and ticket.section_side_label != self.section_side:
            return False
        if self.purchase_type:
            purchase = (ticket.purchase_type or '').strip().lower()
            if purchase != self.purchase_type.strip().lower():
                return False
        return True

    def apply(self, tickets: Iterable[Ticket]) -> list[Ticket]:
        return [ticket for ticket in tickets if self.matches(ticket)]


def available_section_sides(tickets: Iterable[Ticket]) -> list[str]:
    return sorted({label for ticket in tickets if (label := ticket.section_side_label)})
