from src.platform.exception.exceptions import MissingContextError, NotFoundError
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.domain.bundle_grouping import bundle_members
from src.service.scanner.domain.entity.ticket_entity import Ticket
from src.service.scanner.domain.value_object.scan_context import ScanContext


TICKET_NOT_FOUND_MESSAGE = 'Ticket not found'
BUNDLE_NOT_FOUND_MESSAGE = 'No tickets found for this bundle.'


async def load_ticket_with_bundle(
    ticket_store: ITicketStore, *, context: ScanContext, ticket_id: str
) -> tuple[Ticket, list[Ticket]]:
    """Fresh copy of one ticket plus the members of its bundle (empty when un-bundled)."""
    tickets = await ticket_store.fetch_tickets(context=context)
    ticket = next((t for t in tickets if t.id == ticket_id), None)
    if ticket is None:
        raise NotFoundError(TICKET_NOT_FOUND_MESSAGE)
    if not ticket.bundle_id:
        return ticket, []
    return ticket, bundle_members(ticket.bundle_id, tickets)


async def load_bundle(
    ticket_store: ITicketStore, *, context: ScanContext, bundle_id: str
) -> list[Ticket]:
    key = (bundle_id or '').strip()
    if not key:
        raise MissingContextError('Missing bundle id')
    tickets = await ticket_store.fetch_tickets(context=context)
    members = bundle_members(key, tickets)
    if not members:
        raise NotFoundError(BUNDLE_NOT_FOUND_MESSAGE)
    return members
