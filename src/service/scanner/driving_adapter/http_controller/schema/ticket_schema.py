from typing import List, Literal, Optional, Union

from pydantic import BaseModel

from src.service.scanner.app.dto.ticket_rows_result import TicketRowsResult
from src.service.scanner.app.dto.transition_result import TransitionResult
from src.service.scanner.domain.bundle_grouping import SingleRow, TicketRow
from src.service.scanner.domain.entity.ticket_entity import Ticket


class TicketResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 'T-1001',
                'status': 'active',
                'type': 'adult',
                'bundle_id': 'B-77',
                'parent_ticket_id': None,
                'price': 25.0,
                'assigned_name': 'Ana Reyes',
                'section_name': 'North',
                'side_label': 'Home',
                'section_side_label': 'North - Home',
                'ticket_url': None,
                'purchase_type': 'online',
            }
        },
    }

    id: str
    status: str
    type: Optional[str] = None
    bundle_id: Optional[str] = None
    parent_ticket_id: Optional[str] = None
    price: Optional[float] = None
    assigned_name: str
    section_name: Optional[str] = None
    side_label: Optional[str] = None
    section_side_label: str = ''
    ticket_url: Optional[str] = None
    purchase_type: Optional[str] = None

    @classmethod
    def from_entity(cls, ticket: Ticket) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            status=ticket.status.value,
            type=ticket.type.value if ticket.type else None,
            bundle_id=ticket.bundle_id,
            parent_ticket_id=ticket.parent_ticket_id,
            price=ticket.price,
            assigned_name=ticket.assigned_name,
            section_name=ticket.section_name,
            side_label=ticket.side_label,
            section_side_label=ticket.section_side_label,
            ticket_url=ticket.ticket_url,
            purchase_type=ticket.purchase_type,
        )


class SingleRowResponse(BaseModel):
    kind: Literal['single'] = 'single'
    key: str
    ticket: TicketResponse


class BundleRowResponse(BaseModel):
    kind: Literal['bundle'] = 'bundle'
    key: str
    bundle_id: str
    count: int
    status: str
    all_same_status: bool
    price_total: Optional[float] = None
    primary_name: str
    parent_ticket_id: Optional[str] = None
    tickets: List[TicketResponse]


def row_to_response(row: TicketRow) -> Union[SingleRowResponse, BundleRowResponse]:
    if isinstance(row, SingleRow):
        return SingleRowResponse(key=row.key, ticket=TicketResponse.from_entity(row.ticket))
    return BundleRowResponse(
        key=row.key,
        bundle_id=row.bundle_id,
        count=row.count,
        status=row.status.value,
        all_same_status=row.all_same_status,
        price_total=row.price_total,
        primary_name=row.primary_name,
        parent_ticket_id=row.parent_ticket_id,
        tickets=[TicketResponse.from_entity(t) for t in row.tickets],
    )


class TicketRowsResponse(BaseModel):
    rows: List[Union[SingleRowResponse, BundleRowResponse]]
    available_section_sides: List[str]
    total_tickets: int

    @classmethod
    def from_result(cls, result: TicketRowsResult) -> 'TicketRowsResponse':
        return cls(
            rows=[row_to_response(row) for row in result.rows],
            available_section_sides=result.available_section_sides,
            total_tickets=result.total_tickets,
        )


class BundleResponse(BaseModel):
    bundle_id: str
    tickets: List[TicketResponse]


class TransitionResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'tickets': [],
                'changed_ticket_ids': ['T-1001', 'T-1003'],
                'noop_reason': None,
            }
        },
    }

    tickets: List[TicketResponse]
    changed_ticket_ids: List[str]
    noop_reason: Optional[str] = None

    @classmethod
    def from_result(cls, result: TransitionResult) -> 'TransitionResponse':
        return cls(
            tickets=[TicketResponse.from_entity(t) for t in result.tickets],
            changed_ticket_ids=result.changed_ticket_ids,
            noop_reason=result.noop_reason,
        )


class ConfirmTicketsRequest(BaseModel):
    ids: List[str] = []

    class Config:
        json_schema_extra = {'example': {'ids': []}}


class ScanContextResponse(BaseModel):
    event_id: str
    season_id: str


class TicketDetailResponse(BaseModel):
    ticket: TicketResponse
    bundle_tickets: List[TicketResponse]
    guardian: Optional[TicketResponse] = None  # None = un-bundled, or parent not resolvable
