from collections.abc import Sequence

import anyio

from src.platform.exception.exceptions import CustomBaseError, PartialUpdateError, RemoteStoreError
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.domain.bundle_status_policy import StatusChange
from src.service.scanner.domain.value_object.scan_context import ScanContext


class TicketStatusBatchWriter:
    """
    Sends one ``update_status`` per change, all at once, and waits for all of them.

    A failing call does not cancel its siblings. When some calls fail the
    writer raises PartialUpdateError listing both sides; succeeded writes are
    kept (the store has no multi-ticket transaction). Every write sets an
    absolute status, so re-sending the failed ids is safe.
    """

    def __init__(self, *, ticket_store: ITicketStore) -> None:
        self.ticket_store = ticket_store

    @Logger.io
    async def write(self, *, context: ScanContext, changes: Sequence[StatusChange]) -> None:
        if not changes:
            return

        succeeded: list[str] = []
        failures: dict[str, CustomBaseError] = {}
        unexpected: list[Exception] = []

        async def _write_one(change: StatusChange) -> None:
            try:
                await self.ticket_store.update_status(
                    context=context, ticket_id=change.ticket_id, status=change.to_status
                )
            except CustomBaseError as e:
                failures[change.ticket_id] = e
            except Exception as e:
                # Not a store failure; surfaced as-is once the siblings finish
                unexpected.append(e)
            else:
                succeeded.append(change.ticket_id)

        async with anyio.create_task_group() as tg:
            for change in changes:
                tg.start_soon(_write_one, change)

        if unexpected:
            raise unexpected[0]
        if not failures:
            return

        ordered_ids = [change.ticket_id for change in changes]
        failed_ids = [tid for tid in ordered_ids if tid in failures]
        succeeded_ids = [tid for tid in ordered_ids if tid in succeeded]
        first_error = failures[failed_ids[0]]
        reason = first_error.message

        if not succeeded_ids and len(failed_ids) == 1:
            if isinstance(first_error, RemoteStoreError):
                raise first_error
            raise RemoteStoreError(reason) from first_error

        Logger.base.warning(
            f'[BATCH] {len(failed_ids)}/{len(ordered_ids)} status writes failed '
            f'for event {context.event_id}: {failed_ids}'
        )
        raise PartialUpdateError(
            f'Failed to update {len(failed_ids)} of {len(ordered_ids)} tickets: {reason}',
            succeeded_ticket_ids=succeeded_ids,
            failed_ticket_ids=failed_ids,
        ) from first_error
