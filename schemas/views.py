"""View models the dashboards render; built by services.views from the stored records."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from schemas.common import CamelModel


class DocumentSlotView(CamelModel):
    key: str
    label: str
    url: Optional[str] = None
    satisfied: bool
    required: bool = False


class FieldErrorView(CamelModel):
    field: str
    message: str
    step: int


class StepValidationResult(CamelModel):
    step: int
    valid: bool
    errors: list[FieldErrorView]
    next_step: int


class CreditTabView(CamelModel):
    locked: bool
    request_status: str
    request_available: bool
    status: Optional[Literal["draft", "submitted"]] = None
    editable: bool = False
    reopen_pending: bool = False
    reopen_request_available: bool = False
    attested_document: Optional[DocumentSlotView] = None


class ClientDashboardView(CamelModel):
    client_id: str
    company_name: str
    status: str
    view: Literal["form", "submission_received"]
    editable: bool
    steps: list[str]
    reopen_pending: bool
    reopen_request_available: bool
    attested_document: Optional[DocumentSlotView] = None
    registration_documents: list[DocumentSlotView]
    submitted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    credit: CreditTabView


class AdminClientView(CamelModel):
    id: str
    email: str
    company_name: str
    status: str
    credit_request_status: str
    has_credit_access: bool
    reopen_status: Optional[str] = None
    credit_reopen_status: Optional[str] = None
    form: dict[str, Any]
    uploads: dict[str, Any]
    registration_documents: list[DocumentSlotView]
    office_use: Optional[dict[str, Any]] = None
    credit_application: Optional[dict[str, Any]] = None
    credit_application_status: Optional[str] = None
    credit_documents: list[DocumentSlotView]
    credit_attested_document_url: Optional[str] = None
    submitted_at: Optional[datetime] = None
    credit_submitted_at: Optional[datetime] = None


class AdminSummary(CamelModel):
    total_clients: int
    reg_reopen_count: int
    credit_reopen_count: int
