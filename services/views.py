"""
Pure projections from stored records to the dashboard view models.

Nothing here touches the session; callers load the records and pass them in.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from models import (
    CREDIT_REOPEN_PENDING,
    REG_REOPEN_PENDING,
    ClientProfile,
    ClientStatus,
    CreditApplication,
    CreditRequestStatus,
    CreditStatus,
    RegistrationForm,
)
from schemas.views import AdminClientView, AdminSummary, ClientDashboardView, CreditTabView, DocumentSlotView
from services.documents import (
    CREDIT_DOCUMENTS,
    REGISTRATION_DOCUMENTS,
    checklist,
    is_satisfied,
    prepare_credit_snapshot,
)
from services.snapshots import credit_to_snapshot, form_to_snapshot
from services.validation import STEPS


def _attested_slot(key: str, label: str, url: Any) -> DocumentSlotView:
    return DocumentSlotView(
        key=key,
        label=label,
        url=url if is_satisfied(url) else None,
        satisfied=is_satisfied(url),
    )


def form_view_snapshot(form: RegistrationForm, today: date) -> dict[str, Any]:
    """Registration snapshot as shown to the client; an empty signatory date defaults to today."""
    snapshot = form_to_snapshot(form)
    if not snapshot.get("final_signatory_date"):
        snapshot["final_signatory_date"] = today.isoformat()
    return snapshot


def build_credit_tab(profile: ClientProfile, credit: Optional[CreditApplication]) -> CreditTabView:
    locked = not profile.has_credit_access
    tab = CreditTabView(
        locked=locked,
        request_status=profile.credit_request_status,
        request_available=locked and profile.credit_request_status == CreditRequestStatus.NONE.value,
    )
    if locked:
        return tab
    status = credit.status if credit is not None else CreditStatus.DRAFT.value
    submitted = status == CreditStatus.SUBMITTED.value
    reopen_pending = profile.credit_reopen_status == CREDIT_REOPEN_PENDING
    tab.status = status
    tab.editable = not submitted
    tab.reopen_pending = reopen_pending
    tab.reopen_request_available = submitted and not reopen_pending
    if submitted:
        tab.attested_document = _attested_slot(
            "attested_document_url", "Attested Credit Application", credit.attested_document_url
        )
    return tab


def build_client_dashboard(
    profile: ClientProfile, form: RegistrationForm, credit: Optional[CreditApplication]
) -> ClientDashboardView:
    finished = profile.status == ClientStatus.FINISHED.value
    reopen_pending = profile.reopen_status == REG_REOPEN_PENDING
    uploads = form.uploads or {}
    return ClientDashboardView(
        client_id=profile.id,
        company_name=profile.company_name,
        status=profile.status,
        view="submission_received" if finished else "form",
        editable=not finished,
        steps=list(STEPS),
        reopen_pending=reopen_pending,
        reopen_request_available=finished and not reopen_pending,
        attested_document=(
            _attested_slot("attested_document_url", "Attested Registration Form", uploads.get("attested_document_url"))
            if finished
            else None
        ),
        registration_documents=checklist(REGISTRATION_DOCUMENTS, uploads),
        submitted_at=form.submitted_at,
        updated_at=form.updated_at,
        credit=build_credit_tab(profile, credit),
    )


def build_admin_client_view(
    profile: ClientProfile,
    form: Optional[RegistrationForm],
    credit: Optional[CreditApplication],
    today: date,
) -> AdminClientView:
    """
    Admin view of one client.

    Status and flags always come from the profile, never the form. The credit
    application comes only from the credit record; its attested document
    falls back to the copy mirrored onto the registration uploads.
    """
    form_snapshot = form_to_snapshot(form) if form is not None else {}
    uploads = form_snapshot.get("uploads") or {}

    credit_snapshot = None
    credit_documents: dict[str, Any] = {}
    if credit is not None:
        credit_snapshot = prepare_credit_snapshot(credit_to_snapshot(credit), form_snapshot, today)
        credit_documents = credit_snapshot["documents"]

    attested = credit.attested_document_url if credit is not None else None
    if not is_satisfied(attested):
        attested = uploads.get("credit_attested_document_url")

    return AdminClientView(
        id=profile.id,
        email=profile.email,
        company_name=profile.company_name,
        status=profile.status,
        credit_request_status=profile.credit_request_status,
        has_credit_access=bool(profile.has_credit_access),
        reopen_status=profile.reopen_status,
        credit_reopen_status=profile.credit_reopen_status,
        form={k: v for k, v in form_snapshot.items() if k != "uploads"},
        uploads=uploads,
        registration_documents=checklist(REGISTRATION_DOCUMENTS, uploads),
        office_use=form.office_use if form is not None else None,
        credit_application=credit_snapshot,
        credit_application_status=credit.status if credit is not None else None,
        credit_documents=checklist(CREDIT_DOCUMENTS, credit_documents) if credit is not None else [],
        credit_attested_document_url=attested if is_satisfied(attested) else None,
        submitted_at=form.submitted_at if form is not None else None,
        credit_submitted_at=credit.submitted_at if credit is not None else None,
    )


def build_admin_summary(counts: dict[str, int]) -> AdminSummary:
    return AdminSummary(**counts)
