"""
Lifecycle of a client's registration form and credit application.

Registration: CREATED -> CREDENTIALS_SENT -> SENT -> FINISHED, and back to
SENT only through an admin-approved reopen request. The profile and the form
carry the same status and every transition writes both.

Credit application: draft -> submitted, gated by the profile's credit access,
and back to draft only through an admin-approved credit reopen request.

Guards raise; callers own the session and persist whatever these functions
set on the records.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
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
from services.errors import BadRequest, FormLocked, InvalidTransition, PermissionDenied, ValidationFailed
from services.validation import FieldError, redirect_step, validate_all, validate_credit
from utils.case import camel_path

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _set_status(profile: ClientProfile, form: Optional[RegistrationForm], status: ClientStatus, now: datetime) -> None:
    profile.status = status.value
    profile.updated_at = now
    if form is not None:
        form.status = status.value
        form.updated_at = now


def errors_to_details(errors: list[FieldError]) -> dict[str, Any]:
    return {
        "step": redirect_step(errors),
        "errors": [{"field": camel_path(e.field), "message": e.message, "step": e.step} for e in errors],
    }


# --- Registration ---


def mark_credentials_sent(profile: ClientProfile, form: RegistrationForm, now: Optional[datetime] = None) -> None:
    if profile.status != ClientStatus.CREATED.value:
        raise InvalidTransition(f"Credentials can only be marked as sent for a new client (status is {profile.status})")
    _set_status(profile, form, ClientStatus.CREDENTIALS_SENT, now or _utcnow())
    logger.info("Client %s: credentials sent", profile.id)


def open_for_client(profile: ClientProfile, form: RegistrationForm, now: Optional[datetime] = None) -> bool:
    """First load by the client after credentials were issued moves the form to SENT."""
    if profile.status != ClientStatus.CREDENTIALS_SENT.value:
        return False
    _set_status(profile, form, ClientStatus.SENT, now or _utcnow())
    logger.info("Client %s: form opened, status SENT", profile.id)
    return True


def ensure_editable(form: RegistrationForm) -> None:
    if form.status == ClientStatus.FINISHED.value:
        raise FormLocked("Registration form has been submitted and is locked. Request a reopen to edit it.")


def submit_registration(
    profile: ClientProfile,
    form: RegistrationForm,
    snapshot: dict[str, Any],
    confirm: bool,
    now: Optional[datetime] = None,
) -> None:
    ensure_editable(form)
    if profile.status != ClientStatus.SENT.value:
        raise InvalidTransition(f"Registration cannot be submitted while status is {profile.status}")
    errors = validate_all(snapshot)
    if errors:
        raise ValidationFailed("Registration form is incomplete", details=errors_to_details(errors))
    if not confirm:
        raise BadRequest("Submission must be confirmed")
    now = now or _utcnow()
    _set_status(profile, form, ClientStatus.FINISHED, now)
    form.submitted_at = now
    logger.info("Client %s: registration submitted", profile.id)


def request_reopen(profile: ClientProfile, form: RegistrationForm, now: Optional[datetime] = None) -> bool:
    if form.status != ClientStatus.FINISHED.value:
        raise InvalidTransition("Only a submitted registration can be reopened")
    if profile.reopen_status == REG_REOPEN_PENDING:
        return False
    profile.reopen_status = REG_REOPEN_PENDING
    profile.updated_at = now or _utcnow()
    logger.info("Client %s: registration reopen requested", profile.id)
    return True


def approve_reopen(profile: ClientProfile, form: RegistrationForm, now: Optional[datetime] = None) -> None:
    if profile.reopen_status != REG_REOPEN_PENDING:
        raise InvalidTransition("No registration reopen request is pending")
    profile.reopen_status = None
    _set_status(profile, form, ClientStatus.SENT, now or _utcnow())
    logger.info("Client %s: registration reopened", profile.id)


# --- Credit access ---


def request_credit_access(profile: ClientProfile, now: Optional[datetime] = None) -> bool:
    if profile.has_credit_access or profile.credit_request_status != CreditRequestStatus.NONE.value:
        return False
    profile.credit_request_status = CreditRequestStatus.REQUESTED.value
    profile.updated_at = now or _utcnow()
    logger.info("Client %s: credit access requested", profile.id)
    return True


def set_credit_access(profile: ClientProfile, enabled: bool, now: Optional[datetime] = None) -> None:
    profile.has_credit_access = enabled
    if enabled:
        profile.credit_request_status = CreditRequestStatus.APPROVED.value
    elif profile.credit_request_status != CreditRequestStatus.REQUESTED.value:
        profile.credit_request_status = CreditRequestStatus.NONE.value
    profile.updated_at = now or _utcnow()
    logger.info("Client %s: credit access %s", profile.id, "granted" if enabled else "revoked")


def ensure_credit_access(profile: ClientProfile) -> None:
    if not profile.has_credit_access:
        raise PermissionDenied("Credit application is locked. Please request access from Admin.")


# --- Credit application ---


def ensure_credit_editable(credit: CreditApplication) -> None:
    if credit.status == CreditStatus.SUBMITTED.value:
        raise FormLocked("Credit application has been submitted and is locked. Request a reopen to edit it.")


def submit_credit(
    profile: ClientProfile,
    credit: CreditApplication,
    snapshot: dict[str, Any],
    confirm: bool,
    now: Optional[datetime] = None,
) -> None:
    ensure_credit_access(profile)
    ensure_credit_editable(credit)
    errors = validate_credit(snapshot)
    if errors:
        raise ValidationFailed("Credit application is incomplete", details=errors_to_details(errors))
    if not confirm:
        raise BadRequest("Submission must be confirmed")
    now = now or _utcnow()
    credit.status = CreditStatus.SUBMITTED.value
    credit.submitted_at = now
    credit.updated_at = now
    logger.info("Client %s: credit application submitted", profile.id)


def request_credit_reopen(profile: ClientProfile, credit: CreditApplication, now: Optional[datetime] = None) -> bool:
    ensure_credit_access(profile)
    if credit.status != CreditStatus.SUBMITTED.value:
        raise InvalidTransition("Only a submitted credit application can be reopened")
    if profile.credit_reopen_status == CREDIT_REOPEN_PENDING:
        return False
    now = now or _utcnow()
    profile.credit_reopen_status = CREDIT_REOPEN_PENDING
    profile.updated_at = now
    credit.reopen_requested = True
    credit.updated_at = now
    logger.info("Client %s: credit reopen requested", profile.id)
    return True


def approve_credit_reopen(profile: ClientProfile, credit: CreditApplication, now: Optional[datetime] = None) -> None:
    if profile.credit_reopen_status != CREDIT_REOPEN_PENDING:
        raise InvalidTransition("No credit reopen request is pending")
    now = now or _utcnow()
    profile.credit_reopen_status = None
    profile.updated_at = now
    credit.status = CreditStatus.DRAFT.value
    credit.reopen_requested = False
    credit.updated_at = now
    logger.info("Client %s: credit application reopened", profile.id)
