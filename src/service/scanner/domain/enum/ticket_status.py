from enum import StrEnum
from typing import Any


class TicketStatus(StrEnum):
    PENDING = 'pending'
    ACTIVE = 'active'
    REDEEMED = 'redeemed'
    INVALID = 'invalid'
    EXPIRED = 'expired'

    @classmethod
    def normalize(cls, raw: Any) -> 'TicketStatus':
        """Map a store status onto the scanner lifecycle; cancelled tickets read as expired."""
        value = str(raw or cls.ACTIVE).strip().lower()
        if value in ('cancelled', 'canceled'):
            return cls.EXPIRED
        try:
            return cls(value)
        except ValueError:
            return cls.ACTIVE
