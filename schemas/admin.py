from typing import Optional

from pydantic import Field, field_validator

from schemas.common import CamelModel


class ClientCreate(CamelModel):
    """Create a client account: identity, profile and blank registration form."""
    email: str = Field(..., max_length=320)
    company_name: str = Field(..., min_length=1, max_length=256)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("email must be a valid address")
        return v


class CreditAccessUpdate(CamelModel):
    enabled: bool


class ClientSummary(CamelModel):
    id: str
    email: str
    company_name: str
    status: str
    credit_request_status: str
    has_credit_access: bool
    reopen_status: Optional[str] = None
    credit_reopen_status: Optional[str] = None
