from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import MissingContextError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.scanner.app.interface.i_ticket_store import ITicketStore
from src.service.scanner.domain.entity.voucher_entity import Voucher
from src.service.scanner.domain.value_object.scan_context import ScanContext


class UseVoucherUseCase:
    """
    Consume ``uses`` admissions from a voucher.

    Flow:
    1. Fetch the voucher fresh from the store
    2. Validate the request against its remaining uses
    3. Record the use remotely, return the voucher with the count advanced
    """

    def __init__(self, *, ticket_store: ITicketStore) -> None:
        self.ticket_store = ticket_store

    @classmethod
    @inject
    def depends(
        cls, ticket_store: ITicketStore = Depends(Provide[Container.ticket_store])
    ) -> Self:
        return cls(ticket_store=ticket_store)

    @Logger.io
    async def execute(self, *, context: ScanContext, voucher_id: str, uses: int = 1) -> Voucher:
        key = (voucher_id or '').strip()
        if not key:
            raise MissingContextError('Missing voucher id')

        voucher = await self.ticket_store.fetch_voucher(context=context, voucher_id=key)
        if voucher is None:
            raise NotFoundError('Voucher not found')

        voucher.validate_can_use(uses)
        await self.ticket_store.use_voucher(context=context, voucher_id=voucher.id, uses=uses)
        return voucher.mark_used(uses)
