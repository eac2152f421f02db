"""
Ticket Store Interface

Port to the remote ticket-issuing service. The store applies each write
atomically per ticket id but offers no multi-ticket transaction.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.scanner.domain.entity.ticket_entity import Ticket
from src.service.scanner.domain.entity.voucher_entity import Voucher
from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.value_object.scan_context import ScanContext


class ITicketStore(ABC):
    @abstractmethod
    async def fetch_tickets(
        self, *, context: ScanContext, ids: Optional[list[str]] = None
    ) -> list[Ticket]:
        """
        Fetch tickets of one event/season

        Args:
            context: Event/season scope
            ids: Ticket ids to fetch; None or empty means every ticket

        Returns:
            Normalized tickets
        """
        pass

    @abstractmethod
    async def update_status(
        self, *, context: ScanContext, ticket_id: str, status: TicketStatus
    ) -> None:
        """Single-ticket status write"""
        pass

    @abstractmethod
    async def confirm_batch(
        self,
        *,
        context: ScanContext,
        status: TicketStatus,
        ids: Optional[list[str]] = None,
        bundle_id: Optional[str] = None,
    ) -> None:
        """Status write scoped to explicit ids or to a whole bundle"""
        pass

    @abstractmethod
    async def cancel_tickets(
        self,
        *,
        context: ScanContext,
        ids: Optional[list[str]] = None,
        bundle_id: Optional[str] = None,
    ) -> None:
        pass

    @abstractmethod
    async def fetch_vouchers(self, *, context: ScanContext) -> list[Voucher]:
        pass

    @abstractmethod
    async def fetch_voucher(self, *, context: ScanContext, voucher_id: str) -> Voucher | None:
        pass

    @abstractmethod
    async def use_voucher(self, *, context: ScanContext, voucher_id: str, uses: int) -> None:
        pass

    @abstractmethod
    async def resolve_event(self, *, code: str) -> ScanContext:
        """
        Resolve an event code (as printed on a ticket QR) to its event/season pair

        Raises:
            NotFoundError: When the store does not know the code
        """
        pass
