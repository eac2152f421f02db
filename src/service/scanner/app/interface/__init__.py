from src.service.scanner.app.interface.i_ticket_store import ITicketStore

__all__ = ['ITicketStore']
