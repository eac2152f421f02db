from typing import Optional

from pydantic import BaseModel, Field

from src.service.scanner.domain.entity.voucher_entity import Voucher


class VoucherResponse(BaseModel):
    id: str
    code: str
    status: str
    name: Optional[str] = None
    issuer: Optional[str] = None
    max_uses: Optional[int] = None
    used_count: int = 0
    remaining_uses: Optional[int] = None  # None = unlimited
    assigned_name: Optional[str] = None
    assigned_type: Optional[str] = None
    assigned_email: Optional[str] = None
    ticket_url: Optional[str] = None
    section_name: Optional[str] = None
    team_side: Optional[str] = None
    valid_until: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_entity(cls, voucher: Voucher) -> 'VoucherResponse':
        return cls(
            id=voucher.id,
            code=voucher.code,
            status=voucher.display_status,
            name=voucher.name,
            issuer=voucher.issuer,
            max_uses=voucher.max_uses,
            used_count=voucher.used_count,
            remaining_uses=voucher.remaining_uses,
            assigned_name=voucher.assigned_name,
            assigned_type=voucher.assigned_type,
            assigned_email=voucher.assigned_email,
            ticket_url=voucher.ticket_url,
            section_name=voucher.section_name,
            team_side=voucher.team_side,
            valid_until=voucher.valid_until,
            notes=voucher.notes,
        )


class UseVoucherRequest(BaseModel):
    uses: int = Field(default=1)

    class Config:
        json_schema_extra = {'example': {'uses': 2}}
