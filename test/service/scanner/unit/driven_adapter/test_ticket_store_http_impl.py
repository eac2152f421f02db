"""
Unit tests for TicketStoreHttpImpl

Requests are answered by an httpx.MockTransport so the wire format, headers
and error mapping can be asserted without a running ticket store.
"""

from collections.abc import Callable

import httpx
import orjson
import pytest

from src.platform.exception.exceptions import NotFoundError, RemoteStoreError
from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.enum.ticket_type import TicketType
from src.service.scanner.domain.value_object.scan_context import ScanContext
from src.service.scanner.driven_adapter.http.ticket_store_http_impl import TicketStoreHttpImpl


BASE_URL = 'http://ticket-store.test'


class RecordingTransport:
    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


def _store(
    handler: Callable[[httpx.Request], httpx.Response], *, scanner_key: str | None = None
) -> tuple[TicketStoreHttpImpl, RecordingTransport]:
    transport = RecordingTransport(handler)
    client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
    return TicketStoreHttpImpl(base_url=BASE_URL, scanner_key=scanner_key, client=client), transport


def _json(payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=orjson.dumps(payload))


@pytest.fixture
def context() -> ScanContext:
    return ScanContext.of(event_id='evt 1', season_id='s-9')


@pytest.mark.unit
class TestFetchTickets:
    @pytest.mark.asyncio
    async def test_maps_camel_and_snake_case_payloads(self, context) -> None:
        store, transport = _store(
            lambda request: _json(
                {
                    'items': [
                        {
                            'id': 101,
                            'status': 'CANCELLED',
                            'type': 'Adult',
                            'bundleId': 'B1',
                            'price': '12.5',
                            'assignedName': 'Ana',
                            'sectionName': 'North',
                            'sideLabel': 'Home',
                            'purchaseType': 'ONLINE',
                        },
                        {
                            'id': 'C1',
                            'type': 'kid',
                            'bundle_id': ' ',
                            'parent_ticket_id': '101',
                            'price': 'n/a',
                        },
                    ]
                }
            )
        )

        tickets = await store.fetch_tickets(context=context, ids=['101', 'C1'])

        request = transport.requests[0]
        assert request.method == 'GET'
        assert request.url.raw_path.startswith(b'/api/scanner/event-details/evt%201/tickets?')
        assert request.url.params['seasonId'] == 's-9'
        assert request.url.params['ids'] == '101,C1'

        first, second = tickets
        assert first.id == '101'
        assert first.status == TicketStatus.EXPIRED
        assert first.type == TicketType.ADULT
        assert first.price == 12.5
        assert first.section_side_label == 'North - Home'
        assert first.purchase_type == 'online'
        assert second.status == TicketStatus.ACTIVE
        assert second.type is None
        assert second.bundle_id is None
        assert second.parent_ticket_id == '101'
        assert second.price is None
        assert second.assigned_name == 'Guest'

    @pytest.mark.asyncio
    async def test_items_without_id_are_skipped(self, context) -> None:
        store, _ = _store(
            lambda request: _json({'items': [{'status': 'active'}, {'id': None}, {'id': 'T1'}, 'junk']})
        )

        tickets = await store.fetch_tickets(context=context)

        assert [t.id for t in tickets] == ['T1']

    @pytest.mark.asyncio
    async def test_missing_items_is_empty(self, context) -> None:
        store, _ = _store(lambda request: _json({'ok': True}))

        assert await store.fetch_tickets(context=context) == []


@pytest.mark.unit
class TestWrites:
    @pytest.mark.asyncio
    async def test_update_status_sends_patch_with_auth_headers(self, context) -> None:
        store, transport = _store(lambda request: _json({'ok': True}), scanner_key='sk-123')

        await store.update_status(context=context, ticket_id='T1', status=TicketStatus.REDEEMED)

        request = transport.requests[0]
        assert request.method == 'PATCH'
        assert orjson.loads(request.content) == {'ids': ['T1'], 'status': 'redeemed'}
        assert request.headers['x-scanner-key'] == 'sk-123'
        assert request.headers['x-api-key'] == 'sk-123'
        assert request.headers['authorization'] == 'Bearer sk-123'

    @pytest.mark.asyncio
    async def test_no_key_means_no_auth_headers(self, context) -> None:
        store, transport = _store(lambda request: httpx.Response(204))

        await store.confirm_batch(context=context, status=TicketStatus.ACTIVE, bundle_id='B1')

        request = transport.requests[0]
        assert 'authorization' not in request.headers
        assert orjson.loads(request.content) == {'bundleId': 'B1', 'status': 'active'}

    @pytest.mark.asyncio
    async def test_cancel_sends_delete_with_query(self, context) -> None:
        store, transport = _store(lambda request: _json({'ok': True}))

        await store.cancel_tickets(context=context, ids=['T1', 'T2'], bundle_id='B1')

        request = transport.requests[0]
        assert request.method == 'DELETE'
        assert request.url.params['bundleId'] == 'B1'
        assert request.url.params['ids'] == 'T1,T2'


@pytest.mark.unit
class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_error_body_message(self, context) -> None:
        store, _ = _store(lambda request: _json({'error': 'Ticket already redeemed'}, 409))

        with pytest.raises(RemoteStoreError, match='Ticket already redeemed'):
            await store.update_status(context=context, ticket_id='T1', status=TicketStatus.REDEEMED)

    @pytest.mark.asyncio
    async def test_error_without_body_uses_status_code(self, context) -> None:
        store, _ = _store(lambda request: httpx.Response(500, content=b'<html>oops</html>'))

        with pytest.raises(RemoteStoreError, match='HTTP 500'):
            await store.fetch_tickets(context=context)

    @pytest.mark.asyncio
    async def test_transport_error(self, context) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        store, _ = _store(handler)

        with pytest.raises(RemoteStoreError, match='unreachable'):
            await store.fetch_tickets(context=context)


@pytest.mark.unit
class TestVouchersAndEvents:
    @pytest.mark.asyncio
    async def test_fetch_voucher_maps_nested_fields(self, context) -> None:
        store, transport = _store(
            lambda request: _json(
                {
                    'item': {
                        'voucherCode': 'VIP-7',
                        'maxUses': 4,
                        'usedCount': 1,
                        'assignedTo': {'name': 'Rita', 'email': 'rita@example.com'},
                        'ticket': {'ticketUrl': 'https://img.test/v.png'},
                    }
                }
            )
        )

        voucher = await store.fetch_voucher(context=context, voucher_id='V7')

        assert transport.requests[0].url.params['voucherId'] == 'V7'
        assert voucher is not None
        assert voucher.id == 'VIP-7'
        assert voucher.code == 'VIP-7'
        assert voucher.remaining_uses == 3
        assert voucher.assigned_name == 'Rita'
        assert voucher.assigned_email == 'rita@example.com'
        assert voucher.ticket_url == 'https://img.test/v.png'

    @pytest.mark.asyncio
    async def test_empty_voucher_payload_is_none(self, context) -> None:
        store, _ = _store(lambda request: _json({'item': None}))

        assert await store.fetch_voucher(context=context, voucher_id='V7') is None

    @pytest.mark.asyncio
    async def test_use_voucher_body(self, context) -> None:
        store, transport = _store(lambda request: _json({'ok': True}))

        await store.use_voucher(context=context, voucher_id='V7', uses=2)

        assert orjson.loads(transport.requests[0].content) == {'use': 2}

    @pytest.mark.asyncio
    async def test_resolve_event(self) -> None:
        store, transport = _store(
            lambda request: _json({'ok': True, 'item': {'eventId': 'e-1', 'seasonId': 's-1'}})
        )

        context = await store.resolve_event(code=' QR-1 ')

        assert transport.requests[0].url.params['code'] == 'QR-1'
        assert context == ScanContext(event_id='e-1', season_id='s-1')

    @pytest.mark.asyncio
    async def test_resolve_unknown_event(self) -> None:
        store, _ = _store(lambda request: _json({'ok': False}))

        with pytest.raises(NotFoundError):
            await store.resolve_event(code='nope')
