from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger


@attrs.define(frozen=True)
class Voucher:
    id: str
    code: str
    status: Optional[str] = None
    name: Optional[str] = None
    issuer: Optional[str] = None
    max_uses: Optional[int] = None
    used_count: int = 0
    assigned_name: Optional[str] = None
    assigned_type: Optional[str] = None
    assigned_email: Optional[str] = None
    ticket_url: Optional[str] = None
    section_name: Optional[str] = None
    team_side: Optional[str] = None
    valid_until: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_unlimited(self) -> bool:
        return not self.max_uses or self.max_uses <= 0

    @property
    def remaining_uses(self) -> Optional[int]:
        """None means unlimited."""
        if self.is_unlimited:
            return None
        return max(0, (self.max_uses or 0) - self.used_count)

    @property
    def display_status(self) -> str:
        if not self.is_unlimited and self.used_count >= (self.max_uses or 0):
            return 'redeemed'
        return (self.status or 'active').lower()

    @Logger.io
    def validate_can_use(self, uses: int) -> None:
        """
        Raises:
            DomainError: When the requested number of uses cannot be applied
        """
        if uses < 1:
            raise DomainError('Uses must be at least 1')
        remaining = self.remaining_uses
        if remaining is None:
            return
        if remaining <= 0:
            raise DomainError('Voucher has no remaining uses')
        if uses > remaining:
            raise DomainError(f'Only {remaining} uses remaining on this voucher')

    @Logger.io
    def mark_used(self, uses: int) -> 'Voucher':
        return attrs.evolve(self, used_count=self.used_count + uses)
