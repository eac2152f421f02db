from typing import Optional

import attrs

from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.enum.ticket_type import TicketType


DEFAULT_HOLDER_NAME = 'Guest'


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


@attrs.define(frozen=True)
class Ticket:
    id: str
    status: TicketStatus = TicketStatus.ACTIVE
    type: Optional[TicketType] = None
    bundle_id: Optional[str] = attrs.field(default=None, converter=_blank_to_none)
    parent_ticket_id: Optional[str] = attrs.field(default=None, converter=_blank_to_none)
    price: Optional[float] = None
    assigned_name: str = DEFAULT_HOLDER_NAME
    section_name: Optional[str] = None
    side_label: Optional[str] = None
    ticket_url: Optional[str] = None
    purchase_type: Optional[str] = None

    @property
    def is_parent(self) -> bool:
        return self.type is not None and self.type.is_parent

    @property
    def is_child(self) -> bool:
        return self.type == TicketType.CHILD

    @property
    def section_side_label(self) -> str:
        """'Section - Side' label used by the section filter; empty when neither is known."""
        section = (self.section_name or '').strip()
        side = (self.side_label or '').strip()
        if section and side:
            return f'{section} - {side}'
        return section or side

    def with_status(self, status: TicketStatus) -> 'Ticket':
        return attrs.evolve(self, status=status)
