from typing import Optional
from unittest.mock import AsyncMock, Mock

from src.service.scanner.domain.entity.ticket_entity import Ticket
from src.service.scanner.domain.entity.voucher_entity import Voucher
from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.enum.ticket_type import TicketType


def make_ticket(
    ticket_id: str,
    *,
    type: Optional[TicketType] = TicketType.ADULT,
    status: TicketStatus = TicketStatus.ACTIVE,
    bundle_id: Optional[str] = 'B1',
    parent_ticket_id: Optional[str] = None,
    name: Optional[str] = None,
    price: Optional[float] = None,
    section_name: Optional[str] = None,
    side_label: Optional[str] = None,
    purchase_type: Optional[str] = None,
) -> Ticket:
    return Ticket(
        id=ticket_id,
        status=status,
        type=type,
        bundle_id=bundle_id,
        parent_ticket_id=parent_ticket_id,
        price=price,
        assigned_name=name or f'Holder {ticket_id}',
        section_name=section_name,
        side_label=side_label,
        purchase_type=purchase_type,
    )


def parent(ticket_id: str, status: TicketStatus = TicketStatus.ACTIVE, **kwargs) -> Ticket:
    return make_ticket(ticket_id, type=TicketType.ADULT, status=status, **kwargs)


def child(ticket_id: str, status: TicketStatus = TicketStatus.ACTIVE, **kwargs) -> Ticket:
    return make_ticket(ticket_id, type=TicketType.CHILD, status=status, **kwargs)


class TicketStoreMock:
    def __init__(
        self,
        *,
        tickets: list[Ticket] | None = None,
        voucher: Voucher | None = None,
        vouchers: list[Voucher] | None = None,
    ) -> None:
        """
        Initialize a mocked ticket store with test data

        Args:
            tickets: Tickets returned from fetch_tickets
            voucher: Voucher returned from fetch_voucher
            vouchers: Vouchers returned from fetch_vouchers
        """
        self.tickets = tickets or []
        self.store: Mock = AsyncMock()
        self.store.fetch_tickets = AsyncMock(return_value=self.tickets)
        self.store.update_status = AsyncMock(return_value=None)
        self.store.confirm_batch = AsyncMock(return_value=None)
        self.store.cancel_tickets = AsyncMock(return_value=None)
        self.store.fetch_voucher = AsyncMock(return_value=voucher)
        self.store.fetch_vouchers = AsyncMock(return_value=vouchers or [])
        self.store.use_voucher = AsyncMock(return_value=None)
        self.store.resolve_event = AsyncMock()

    def written_statuses(self) -> dict[str, TicketStatus]:
        return {
            call.kwargs['ticket_id']: call.kwargs['status']
            for call in self.store.update_status.await_args_list
        }
