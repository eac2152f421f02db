import math
from typing import Any, Optional
from urllib.parse import quote

import httpx
import orjson

from src.platform.exception.exceptions import NotFoundError, RemoteStoreError
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.domain.entity.ticket_entity import DEFAULT_HOLDER_NAME, Ticket
from src.service.scanner.domain.entity.voucher_entity import Voucher
from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.enum.ticket_type import TicketType
from src.service.scanner.domain.value_object.scan_context import ScanContext


def _first(src: dict[str, Any], *keys: str) -> Any:
    """First non-None value among camelCase/snake_case spellings of a field."""
    for key in keys:
        value = src.get(key)
        if value is not None:
            return value
    return None


def _finite_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class TicketStoreHttpImpl(ITicketStore):
    """ITicketStore over the scanner REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        scanner_key: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.scanner_key = scanner_key
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        if not self.scanner_key:
            return {}
        return {
            'x-scanner-key': self.scanner_key,
            'x-api-key': self.scanner_key,
            'authorization': f'Bearer {self.scanner_key}',
        }

    @staticmethod
    def _tickets_path(context: ScanContext) -> str:
        return f'/api/scanner/event-details/{quote(context.event_id, safe="")}/tickets'

    @staticmethod
    def _vouchers_path(context: ScanContext) -> str:
        return f'/api/scanner/event-details/{quote(context.event_id, safe="")}/vouchers'

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, str]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        headers = {'Accept': 'application/json', **self._auth_headers()}
        content: Optional[bytes] = None
        if body is not None:
            headers['Content-Type'] = 'application/json'
            content = orjson.dumps({k: v for k, v in body.items() if v is not None})

        try:
            response = await self.client.request(
                method, f'{self.base_url}{path}', params=params, content=content, headers=headers
            )
        except httpx.HTTPError as e:
            raise RemoteStoreError(f'Ticket store unreachable: {e}') from e

        if response.is_error:
            raise RemoteStoreError(self._error_message(response))

        if not response.content:
            return {}
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise RemoteStoreError('Ticket store returned invalid JSON') from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        message = f'HTTP {response.status_code}'
        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError:
            return message
        if isinstance(payload, dict) and payload.get('error'):
            return str(payload['error'])
        return message

    @staticmethod
    def _to_ticket(src: dict[str, Any]) -> Ticket:
        nested = src.get('ticket') if isinstance(src.get('ticket'), dict) else {}
        purchase_type = _first(src, 'purchaseType', 'purchase_type')
        return Ticket(
            id=str(src['id']),
            status=TicketStatus.normalize(src.get('status')),
            type=TicketType.normalize(src.get('type')),
            bundle_id=_optional_str(_first(src, 'bundleId', 'bundle_id')),
            parent_ticket_id=_optional_str(_first(src, 'parentTicketId', 'parent_ticket_id')),
            price=_finite_number(src.get('price')),
            assigned_name=str(
                _first(src, 'assignedName', 'assigned_name', 'holderName') or DEFAULT_HOLDER_NAME
            ),
            section_name=_first(src, 'sectionName', 'section_name'),
            side_label=_first(src, 'sideLabel', 'side_label'),
            ticket_url=_first(src, 'ticketUrl', 'ticket_url', 'url') or nested.get('ticketUrl'),
            purchase_type=str(purchase_type).lower() if purchase_type else None,
        )

    @staticmethod
    def _to_voucher(src: dict[str, Any], fallback_id: str = '') -> Voucher:
        assigned_to = src.get('assignedTo') if isinstance(src.get('assignedTo'), dict) else {}
        nested = src.get('ticket') if isinstance(src.get('ticket'), dict) else {}
        voucher_id = str(_first(src, 'id', 'voucherId', 'voucher_id', 'code', 'voucherCode') or fallback_id)
        max_uses = _finite_number(_first(src, 'maxUses', 'max_uses', 'maxPax', 'max_pax'))
        used_count = _finite_number(_first(src, 'usedCount', 'used_count', 'uses', 'useCount'))
        return Voucher(
            id=voucher_id,
            code=str(_first(src, 'code', 'voucherCode') or voucher_id),
            status=src.get('status'),
            name=_first(src, 'name', 'voucherName'),
            issuer=_first(src, 'issuer', 'issuedBy', 'issuerName'),
            max_uses=int(max_uses) if max_uses is not None else None,
            used_count=int(used_count) if used_count is not None else 0,
            assigned_name=_first(src, 'assignedName', 'assigned_name') or assigned_to.get('name'),
            assigned_type=_first(src, 'assignedType', 'assigned_type') or assigned_to.get('type'),
            assigned_email=_first(src, 'assignedEmail', 'assigned_email')
            or assigned_to.get('email'),
            ticket_url=_first(nested, 'ticketUrl', 'ticket_url')
            or _first(src, 'ticketUrl', 'ticket_url', 'imageUrl', 'image_url'),
            section_name=_first(src, 'sectionName', 'section_name', 'section'),
            team_side=_first(src, 'teamSide', 'team_side', 'sideLabel', 'side_label'),
            valid_until=_optional_str(_first(src, 'validUntil', 'valid_until', 'expiresAt', 'expires_at')),
            notes=_first(src, 'notes', 'remark', 'remarks'),
        )

    @Logger.io
    async def fetch_tickets(
        self, *, context: ScanContext, ids: Optional[list[str]] = None
    ) -> list[Ticket]:
        params = {'seasonId': context.season_id}
        if ids:
            params['ids'] = ','.join(ids)
        payload = await self._request('GET', self._tickets_path(context), params=params)
        items = payload.get('items') if isinstance(payload, dict) else None
        return [
            self._to_ticket(item)
            for item in items or []
            if isinstance(item, dict) and item.get('id') is not None
        ]

    @Logger.io
    async def update_status(
        self, *, context: ScanContext, ticket_id: str, status: TicketStatus
    ) -> None:
        await self._request(
            'PATCH',
            self._tickets_path(context),
            params={'seasonId': context.season_id},
            body={'ids': [ticket_id], 'status': status.value},
        )

    @Logger.io
    async def confirm_batch(
        self,
        *,
        context: ScanContext,
        status: TicketStatus,
        ids: Optional[list[str]] = None,
        bundle_id: Optional[str] = None,
    ) -> None:
        await self._request(
            'PATCH',
            self._tickets_path(context),
            params={'seasonId': context.season_id},
            body={'ids': ids or None, 'bundleId': bundle_id, 'status': status.value},
        )

    @Logger.io
    async def cancel_tickets(
        self,
        *,
        context: ScanContext,
        ids: Optional[list[str]] = None,
        bundle_id: Optional[str] = None,
    ) -> None:
        params = {'seasonId': context.season_id}
        if bundle_id:
            params['bundleId'] = bundle_id
        if ids:
            params['ids'] = ','.join(ids)
        await self._request('DELETE', self._tickets_path(context), params=params)

    @Logger.io
    async def fetch_vouchers(self, *, context: ScanContext) -> list[Voucher]:
        payload = await self._request(
            'GET', self._vouchers_path(context), params={'seasonId': context.season_id}
        )
        if isinstance(payload, list):
            items = payload
        elif isinstance(payload, dict):
            items = payload.get('items') or payload.get('vouchers') or []
        else:
            items = []
        return [self._to_voucher(item) for item in items if isinstance(item, dict)]

    @Logger.io
    async def fetch_voucher(self, *, context: ScanContext, voucher_id: str) -> Voucher | None:
        payload = await self._request(
            'GET',
            self._vouchers_path(context),
            params={'seasonId': context.season_id, 'voucherId': voucher_id},
        )
        if not isinstance(payload, dict):
            return None
        src = payload.get('item', payload)
        if not isinstance(src, dict) or not src:
            return None
        return self._to_voucher(src, fallback_id=voucher_id)

    @Logger.io
    async def use_voucher(self, *, context: ScanContext, voucher_id: str, uses: int) -> None:
        await self._request(
            'PATCH',
            self._vouchers_path(context),
            params={'seasonId': context.season_id, 'voucherId': voucher_id},
            body={'use': uses},
        )

    @Logger.io
    async def resolve_event(self, *, code: str) -> ScanContext:
        query = (code or '').strip()
        if not query:
            raise NotFoundError('Missing event code')
        payload = await self._request('GET', '/api/scanner/resolve-event', params={'code': query})
        if not isinstance(payload, dict) or not payload.get('ok'):
            raise NotFoundError('Event not found')
        src = payload.get('item') or payload
        return ScanContext.of(
            event_id=str(_first(src, 'eventId', 'id') or query),
            season_id=_optional_str(_first(src, 'seasonId', 'season_id')),
        )
