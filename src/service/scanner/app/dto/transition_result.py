"""Transition result DTO."""

from typing import Optional

import attrs

from src.service.scanner.domain.entity.ticket_entity import Ticket


@attrs.define(frozen=True)
class TransitionResult:
    """
    Outcome of a status operation.

    ``tickets`` is the bundle view (or the lone ticket) with the new statuses
    applied locally. ``noop_reason`` is set when nothing needed to change.
    """

    tickets: list[Ticket]
    changed_ticket_ids: list[str] = attrs.field(factory=list)
    noop_reason: Optional[str] = None

    @property
    def is_noop(self) -> bool:
        return self.noop_reason is not None
