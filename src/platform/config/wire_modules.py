"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.scanner.app.command import (
    cancel_tickets_use_case,
    confirm_pending_tickets_use_case,
    invalidate_ticket_use_case,
    redeem_all_bundle_tickets_use_case,
    redeem_ticket_use_case,
    revert_all_bundle_tickets_use_case,
    revert_ticket_to_active_use_case,
    use_voucher_use_case,
)
from src.service.scanner.app.query import (
    get_bundle_use_case,
    get_ticket_use_case,
    get_voucher_use_case,
    list_ticket_rows_use_case,
    list_vouchers_use_case,
    resolve_event_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    redeem_ticket_use_case,
    invalidate_ticket_use_case,
    revert_ticket_to_active_use_case,
    redeem_all_bundle_tickets_use_case,
    revert_all_bundle_tickets_use_case,
    confirm_pending_tickets_use_case,
    cancel_tickets_use_case,
    use_voucher_use_case,
    list_ticket_rows_use_case,
    get_bundle_use_case,
    get_ticket_use_case,
    list_vouchers_use_case,
    get_voucher_use_case,
    resolve_event_use_case,
]
