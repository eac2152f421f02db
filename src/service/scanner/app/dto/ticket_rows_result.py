"""Ticket rows DTO."""

import attrs

from src.service.scanner.domain.bundle_grouping import TicketRow


@attrs.define(frozen=True)
class TicketRowsResult:
    rows: list[TicketRow]
    available_section_sides: list[str]
    total_tickets: int
