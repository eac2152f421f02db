"""Scanner Domain Enums"""

from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.enum.ticket_type import TicketType

__all__ = ['TicketStatus', 'TicketType']
