from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.command.cancel_tickets_use_case import CancelTicketsUseCase
from src.service.scanner.app.command.confirm_pending_tickets_use_case import (
    ConfirmPendingTicketsUseCase,
)
from src.service.scanner.app.command.invalidate_ticket_use_case import InvalidateTicketUseCase
from src.service.scanner.app.command.redeem_all_bundle_tickets_use_case import (
    RedeemAllBundleTicketsUseCase,
)
from src.service.scanner.app.command.redeem_ticket_use_case import RedeemTicketUseCase
from src.service.scanner.app.command.revert_all_bundle_tickets_use_case import (
    RevertAllBundleTicketsUseCase,
)
from src.service.scanner.app.command.revert_ticket_to_active_use_case import (
    RevertTicketToActiveUseCase,
)
from src.service.scanner.app.command.use_voucher_use_case import UseVoucherUseCase
from src.service.scanner.app.query.get_bundle_use_case import GetBundleUseCase
from src.service.scanner.app.query.get_ticket_use_case import GetTicketUseCase
from src.service.scanner.app.query.get_voucher_use_case import GetVoucherUseCase
from src.service.scanner.app.query.list_ticket_rows_use_case import ListTicketRowsUseCase
from src.service.scanner.app.query.list_vouchers_use_case import ListVouchersUseCase
from src.service.scanner.app.query.resolve_event_use_case import ResolveEventUseCase
from src.service.scanner.domain.bundle_grouping import find_guardian
from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.ticket_filter import TicketFilter
from src.service.scanner.domain.value_object.scan_context import ScanContext
from src.service.scanner.driving_adapter.http_controller.schema.ticket_schema import (
    BundleResponse,
    ConfirmTicketsRequest,
    ScanContextResponse,
    TicketDetailResponse,
    TicketResponse,
    TicketRowsResponse,
    TransitionResponse,
)
from src.service.scanner.driving_adapter.http_controller.schema.voucher_schema import (
    UseVoucherRequest,
    VoucherResponse,
)


router = APIRouter()


def _split_ids(raw: List[str]) -> List[str]:
    # accepts both ?ids=a&ids=b and ?ids=a,b
    return [part.strip() for item in raw for part in item.split(',') if part.strip()]


@router.get('/resolve-event')
@Logger.io
async def resolve_event(
    code: str = '',
    use_case: ResolveEventUseCase = Depends(ResolveEventUseCase.depends),
) -> ScanContextResponse:
    context = await use_case.execute(code=code)
    return ScanContextResponse(event_id=context.event_id, season_id=context.season_id)


@router.get('/events/{event_id}/tickets')
@Logger.io
async def list_ticket_rows(
    event_id: str,
    season_id: str = '',
    q: str = '',
    status: Optional[TicketStatus] = None,
    section_side: Optional[str] = None,
    purchase_type: Optional[str] = None,
    use_case: ListTicketRowsUseCase = Depends(ListTicketRowsUseCase.depends),
) -> TicketRowsResponse:
    result = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id),
        ticket_filter=TicketFilter(
            query=q, status=status, section_side=section_side, purchase_type=purchase_type
        ),
    )
    return TicketRowsResponse.from_result(result)


@router.get('/events/{event_id}/bundles/{bundle_id}')
@Logger.io
async def get_bundle(
    event_id: str,
    bundle_id: str,
    season_id: str = '',
    parent_ticket_id: Optional[str] = None,
    use_case: GetBundleUseCase = Depends(GetBundleUseCase.depends),
) -> BundleResponse:
    tickets = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id),
        bundle_id=bundle_id,
        parent_ticket_id=parent_ticket_id,
    )
    return BundleResponse(
        bundle_id=bundle_id, tickets=[TicketResponse.from_entity(t) for t in tickets]
    )


@router.get('/events/{event_id}/tickets/{ticket_id}')
@Logger.io
async def get_ticket(
    event_id: str,
    ticket_id: str,
    season_id: str = '',
    use_case: GetTicketUseCase = Depends(GetTicketUseCase.depends),
) -> TicketDetailResponse:
    ticket, bundle_tickets = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id), ticket_id=ticket_id
    )
    guardian = find_guardian(ticket, bundle_tickets) if ticket.is_child else None
    return TicketDetailResponse(
        ticket=TicketResponse.from_entity(ticket),
        bundle_tickets=[TicketResponse.from_entity(t) for t in bundle_tickets],
        guardian=TicketResponse.from_entity(guardian) if guardian else None,
    )


@router.post('/events/{event_id}/tickets/{ticket_id}/redeem')
@Logger.io
async def redeem_ticket(
    event_id: str,
    ticket_id: str,
    season_id: str = '',
    use_case: RedeemTicketUseCase = Depends(RedeemTicketUseCase.depends),
) -> TransitionResponse:
    result = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id), ticket_id=ticket_id
    )
    return TransitionResponse.from_result(result)


@router.post('/events/{event_id}/tickets/{ticket_id}/invalidate')
@Logger.io
async def invalidate_ticket(
    event_id: str,
    ticket_id: str,
    season_id: str = '',
    use_case: InvalidateTicketUseCase = Depends(InvalidateTicketUseCase.depends),
) -> TransitionResponse:
    result = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id), ticket_id=ticket_id
    )
    return TransitionResponse.from_result(result)


@router.post('/events/{event_id}/tickets/{ticket_id}/revert')
@Logger.io
async def revert_ticket_to_active(
    event_id: str,
    ticket_id: str,
    season_id: str = '',
    use_case: RevertTicketToActiveUseCase = Depends(RevertTicketToActiveUseCase.depends),
) -> TransitionResponse:
    result = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id), ticket_id=ticket_id
    )
    return TransitionResponse.from_result(result)


@router.post('/events/{event_id}/bundles/{bundle_id}/redeem-all')
@Logger.io
async def redeem_all_bundle_tickets(
    event_id: str,
    bundle_id: str,
    season_id: str = '',
    use_case: RedeemAllBundleTicketsUseCase = Depends(RedeemAllBundleTicketsUseCase.depends),
) -> TransitionResponse:
    result = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id), bundle_id=bundle_id
    )
    return TransitionResponse.from_result(result)


@router.post('/events/{event_id}/bundles/{bundle_id}/revert-all')
@Logger.io
async def revert_all_bundle_tickets(
    event_id: str,
    bundle_id: str,
    season_id: str = '',
    use_case: RevertAllBundleTicketsUseCase = Depends(RevertAllBundleTicketsUseCase.depends),
) -> TransitionResponse:
    result = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id), bundle_id=bundle_id
    )
    return TransitionResponse.from_result(result)


@router.post('/events/{event_id}/bundles/{bundle_id}/confirm')
@Logger.io
async def confirm_pending_tickets(
    event_id: str,
    bundle_id: str,
    season_id: str = '',
    request: Optional[ConfirmTicketsRequest] = None,
    use_case: ConfirmPendingTicketsUseCase = Depends(ConfirmPendingTicketsUseCase.depends),
) -> TransitionResponse:
    result = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id),
        bundle_id=bundle_id,
        ids=request.ids if request else None,
    )
    return TransitionResponse.from_result(result)


@router.delete('/events/{event_id}/tickets', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def cancel_tickets(
    event_id: str,
    season_id: str = '',
    ids: List[str] = Query(default=[]),
    bundle_id: Optional[str] = None,
    use_case: CancelTicketsUseCase = Depends(CancelTicketsUseCase.depends),
) -> None:
    await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id),
        ids=_split_ids(ids),
        bundle_id=bundle_id,
    )


@router.get('/events/{event_id}/vouchers')
@Logger.io
async def list_vouchers(
    event_id: str,
    season_id: str = '',
    use_case: ListVouchersUseCase = Depends(ListVouchersUseCase.depends),
) -> List[VoucherResponse]:
    vouchers = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id)
    )
    return [VoucherResponse.from_entity(v) for v in vouchers]


@router.get('/events/{event_id}/vouchers/{voucher_id}')
@Logger.io
async def get_voucher(
    event_id: str,
    voucher_id: str,
    season_id: str = '',
    use_case: GetVoucherUseCase = Depends(GetVoucherUseCase.depends),
) -> VoucherResponse:
    voucher = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id), voucher_id=voucher_id
    )
    return VoucherResponse.from_entity(voucher)


@router.post('/events/{event_id}/vouchers/{voucher_id}/use')
@Logger.io
async def use_voucher(
    event_id: str,
    voucher_id: str,
    request: UseVoucherRequest,
    season_id: str = '',
    use_case: UseVoucherUseCase = Depends(UseVoucherUseCase.depends),
) -> VoucherResponse:
    voucher = await use_case.execute(
        context=ScanContext.of(event_id=event_id, season_id=season_id),
        voucher_id=voucher_id,
        uses=request.uses,
    )
    return VoucherResponse.from_entity(voucher)
