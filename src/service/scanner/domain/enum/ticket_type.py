from enum import StrEnum
from typing import Any, Optional


class TicketType(StrEnum):
    ADULT = 'adult'
    PRIORITY = 'priority'
    CHILD = 'child'

    @property
    def is_parent(self) -> bool:
        return self in (TicketType.ADULT, TicketType.PRIORITY)

    @classmethod
    def normalize(cls, raw: Any) -> Optional['TicketType']:
        try:
            return cls(str(raw or '').strip().lower())
        except ValueError:
            return None


# Display/tie-break order: adult → priority → child → unknown
TYPE_RANK: dict[TicketType, int] = {
    TicketType.ADULT: 0,
    TicketType.PRIORITY: 1,
    TicketType.CHILD: 2,
}
UNKNOWN_TYPE_RANK = 3
