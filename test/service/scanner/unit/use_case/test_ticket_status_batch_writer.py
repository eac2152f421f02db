"""
Unit tests for TicketStatusBatchWriter

A batch fires every write concurrently and waits for all of them; failures
are reported together without cancelling or rolling back the others.
"""

from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import PartialUpdateError, RemoteStoreError
from src.service.scanner.app.command.ticket_status_batch_writer import TicketStatusBatchWriter
from src.service.scanner.domain.bundle_status_policy import StatusChange
from src.service.scanner.domain.enum.ticket_status import TicketStatus


ACTIVE = TicketStatus.ACTIVE
INVALID = TicketStatus.INVALID


def _changes(*ticket_ids: str) -> list[StatusChange]:
    return [StatusChange(ticket_id=tid, from_status=ACTIVE, to_status=INVALID) for tid in ticket_ids]


def _failing_for(*failing_ids: str, error: Exception | None = None) -> AsyncMock:
    async def update_status(*, context, ticket_id, status):
        if ticket_id in failing_ids:
            raise error or RemoteStoreError(f'boom {ticket_id}')

    return AsyncMock(side_effect=update_status)


@pytest.mark.unit
class TestTicketStatusBatchWriter:
    @pytest.mark.asyncio
    async def test_writes_every_change(self, scan_context) -> None:
        store = AsyncMock()
        writer = TicketStatusBatchWriter(ticket_store=store)

        await writer.write(context=scan_context, changes=_changes('P1', 'C1', 'C2'))

        written = {c.kwargs['ticket_id']: c.kwargs['status'] for c in store.update_status.await_args_list}
        assert written == {'P1': INVALID, 'C1': INVALID, 'C2': INVALID}

    @pytest.mark.asyncio
    async def test_empty_batch_makes_no_calls(self, scan_context) -> None:
        store = AsyncMock()

        await TicketStatusBatchWriter(ticket_store=store).write(context=scan_context, changes=[])

        store.update_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_partial_failure_reports_both_sides(self, scan_context) -> None:
        # Given: the store rejects one child write
        store = AsyncMock()
        store.update_status = _failing_for('C1')
        writer = TicketStatusBatchWriter(ticket_store=store)

        # When
        with pytest.raises(PartialUpdateError) as exc_info:
            await writer.write(context=scan_context, changes=_changes('P1', 'C1', 'C2'))

        # Then: siblings still ran to completion
        assert store.update_status.await_count == 3
        assert exc_info.value.succeeded_ticket_ids == ['P1', 'C2']
        assert exc_info.value.failed_ticket_ids == ['C1']
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_single_write_failure_is_plain_remote_error(self, scan_context) -> None:
        store = AsyncMock()
        store.update_status = _failing_for('P1', error=RemoteStoreError('Ticket locked'))

        with pytest.raises(RemoteStoreError) as exc_info:
            await TicketStatusBatchWriter(ticket_store=store).write(
                context=scan_context, changes=_changes('P1')
            )

        assert not isinstance(exc_info.value, PartialUpdateError)
        assert exc_info.value.message == 'Ticket locked'

    @pytest.mark.asyncio
    async def test_non_store_error_propagates_after_siblings_finish(self, scan_context) -> None:
        # Given: one write hits a bug rather than a store failure
        store = AsyncMock()
        store.update_status = _failing_for('C1', error=TypeError('bad argument'))

        # When / Then: the original error surfaces, not a 502 store error
        with pytest.raises(TypeError, match='bad argument'):
            await TicketStatusBatchWriter(ticket_store=store).write(
                context=scan_context, changes=_changes('P1', 'C1', 'C2')
            )
        assert store.update_status.await_count == 3
