from src.service.scanner.app.dto.ticket_rows_result import TicketRowsResult
from src.service.scanner.app.dto.transition_result import TransitionResult

__all__ = ['TicketRowsResult', 'TransitionResult']
