"""
Record-store operations behind the admin and client dashboards.

Each function loads what it needs, applies a lifecycle transition or a draft
save, and flushes; the request-scoped session commits. Profile-level changes
are pushed to live subscribers.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import (
    CREDIT_REOPEN_PENDING,
    REG_REOPEN_PENDING,
    ClientProfile,
    ClientStatus,
    CreditApplication,
    CreditRequestStatus,
    CreditStatus,
    Identity,
    RegistrationForm,
)
from schemas.credit import CreditApplicationDraft
from schemas.registration import OfficeUse, RegistrationFormDraft
from services import lifecycle
from services.documents import (
    CREDIT_SLOTS,
    REGISTRATION_SLOTS,
    blank_registration,
    build_credit_defaults,
    prepare_credit_snapshot,
)
from services.errors import AlreadyExists, NotFound
from services.events import event_hub
from services.snapshots import CREDIT_FIELDS, FORM_FIELDS, apply_snapshot, credit_to_snapshot, form_to_snapshot
from services.storage import BlobStore, client_object_path
from services.validation import FieldError, validate_step
from utils.payload import set_path

logger = logging.getLogger(__name__)

# Scalar registration fields and the value stored when a draft sends null
_FORM_SCALAR_DEFAULTS: dict[str, Any] = {
    "declaration_agreed": False,
    "final_signatory_name": "",
    "final_signatory_designation": "",
    "final_signatory_date": "",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _today() -> date:
    return _utcnow().date()


def _draft_changes(draft: Any) -> dict[str, Any]:
    """Top-level fields the caller actually sent; each sent section is stored whole."""
    changes: dict[str, Any] = {}
    for name in draft.model_fields_set:
        value = getattr(draft, name)
        if isinstance(value, list):
            changes[name] = [v.model_dump() for v in value]
        elif hasattr(value, "model_dump"):
            changes[name] = value.model_dump()
        elif value is None and name in _FORM_SCALAR_DEFAULTS:
            changes[name] = _FORM_SCALAR_DEFAULTS[name]
        elif value is None:
            continue
        else:
            changes[name] = value
    return changes


# --- Loading ---


async def get_profile(db: AsyncSession, client_id: str) -> ClientProfile:
    profile = await db.get(ClientProfile, client_id)
    if profile is None:
        raise NotFound("Client profile not found.")
    return profile


async def get_form(db: AsyncSession, client_id: str) -> RegistrationForm:
    form = await db.get(RegistrationForm, client_id)
    if form is None:
        raise NotFound("Form data not found.")
    return form


async def find_credit(db: AsyncSession, client_id: str) -> Optional[CreditApplication]:
    return await db.get(CreditApplication, client_id)


async def list_clients(db: AsyncSession) -> list[ClientProfile]:
    result = await db.execute(select(ClientProfile).order_by(ClientProfile.updated_at.desc()))
    return list(result.scalars().all())


async def count_summary(db: AsyncSession) -> dict[str, int]:
    total = await db.scalar(select(func.count()).select_from(ClientProfile))
    reg = await db.scalar(
        select(func.count()).select_from(ClientProfile).where(ClientProfile.reopen_status == REG_REOPEN_PENDING)
    )
    credit = await db.scalar(
        select(func.count())
        .select_from(ClientProfile)
        .where(ClientProfile.credit_reopen_status == CREDIT_REOPEN_PENDING)
    )
    return {"total_clients": total or 0, "reg_reopen_count": reg or 0, "credit_reopen_count": credit or 0}


# --- Admin ---


async def create_client(db: AsyncSession, email: str, company_name: str) -> ClientProfile:
    existing = await db.execute(select(Identity).where(Identity.email == email))
    if existing.scalar_one_or_none() is not None:
        raise AlreadyExists("A client with this email already exists")

    client_id = f"cl-{uuid.uuid4().hex[:12]}"
    now = _utcnow()
    db.add(Identity(id=client_id, email=email, created_at=now))
    profile = ClientProfile(
        id=client_id,
        email=email,
        company_name=company_name,
        status=ClientStatus.CREATED.value,
        credit_request_status=CreditRequestStatus.NONE.value,
        has_credit_access=False,
        created_at=now,
        updated_at=now,
    )
    db.add(profile)
    # Profile row first so the form's foreign key resolves
    await db.flush()
    form = RegistrationForm(
        id=client_id,
        status=ClientStatus.CREATED.value,
        declaration_agreed=False,
        final_signatory_name="",
        final_signatory_designation="",
        final_signatory_date="",
        created_at=now,
        updated_at=now,
    )
    apply_snapshot(form, blank_registration(company_name), FORM_FIELDS)
    db.add(form)
    await db.flush()
    logger.info("Created client %s (%s)", client_id, email)
    return profile


async def mark_credentials_sent(db: AsyncSession, client_id: str) -> ClientProfile:
    profile = await get_profile(db, client_id)
    form = await get_form(db, client_id)
    lifecycle.mark_credentials_sent(profile, form)
    await db.flush()
    event_hub.publish_on_commit(db, profile)
    return profile


async def approve_reopen(db: AsyncSession, client_id: str) -> ClientProfile:
    profile = await get_profile(db, client_id)
    form = await get_form(db, client_id)
    lifecycle.approve_reopen(profile, form)
    await db.flush()
    event_hub.publish_on_commit(db, profile)
    return profile


async def set_credit_access(db: AsyncSession, client_id: str, enabled: bool) -> ClientProfile:
    profile = await get_profile(db, client_id)
    lifecycle.set_credit_access(profile, enabled)
    await db.flush()
    event_hub.publish_on_commit(db, profile)
    return profile


async def approve_credit_reopen(db: AsyncSession, client_id: str) -> ClientProfile:
    profile = await get_profile(db, client_id)
    credit = await find_credit(db, client_id)
    if credit is None:
        raise NotFound("Credit application not found.")
    lifecycle.approve_credit_reopen(profile, credit)
    await db.flush()
    event_hub.publish_on_commit(db, profile)
    return profile


async def update_office_use(db: AsyncSession, client_id: str, office_use: OfficeUse) -> RegistrationForm:
    form = await get_form(db, client_id)
    form.office_use = office_use.model_dump()
    form.updated_at = _utcnow()
    await db.flush()
    return form


# --- Client: registration ---


async def open_registration(db: AsyncSession, client_id: str) -> tuple[ClientProfile, RegistrationForm]:
    profile = await get_profile(db, client_id)
    form = await get_form(db, client_id)
    if lifecycle.open_for_client(profile, form):
        await db.flush()
        event_hub.publish_on_commit(db, profile)
    return profile, form


def merged_form_snapshot(form: RegistrationForm, draft: Optional[RegistrationFormDraft]) -> dict[str, Any]:
    snapshot = form_to_snapshot(form)
    if draft is not None:
        snapshot.update(_draft_changes(draft))
    return snapshot


async def save_registration_draft(
    db: AsyncSession, client_id: str, draft: RegistrationFormDraft
) -> RegistrationForm:
    form = await get_form(db, client_id)
    lifecycle.ensure_editable(form)
    apply_snapshot(form, _draft_changes(draft), FORM_FIELDS)
    form.updated_at = _utcnow()
    await db.flush()
    return form


async def check_registration_step(
    db: AsyncSession, client_id: str, step: int, draft: Optional[RegistrationFormDraft]
) -> list[FieldError]:
    form = await get_form(db, client_id)
    return validate_step(merged_form_snapshot(form, draft), step)


async def submit_registration(
    db: AsyncSession, client_id: str, confirm: bool, draft: Optional[RegistrationFormDraft]
) -> tuple[ClientProfile, RegistrationForm]:
    profile = await get_profile(db, client_id)
    form = await get_form(db, client_id)
    lifecycle.ensure_editable(form)
    snapshot = merged_form_snapshot(form, draft)
    lifecycle.submit_registration(profile, form, snapshot, confirm)
    apply_snapshot(form, snapshot, FORM_FIELDS)
    await db.flush()
    event_hub.publish_on_commit(db, profile)
    return profile, form


async def request_reopen(db: AsyncSession, client_id: str) -> ClientProfile:
    profile = await get_profile(db, client_id)
    form = await get_form(db, client_id)
    if lifecycle.request_reopen(profile, form):
        await db.flush()
        event_hub.publish_on_commit(db, profile)
    return profile


async def store_registration_upload(
    db: AsyncSession, store: BlobStore, client_id: str, slot_name: str, data: bytes
) -> str:
    slot = REGISTRATION_SLOTS.get(slot_name)
    if slot is None:
        raise NotFound(f"Unknown upload slot: {slot_name}")
    form = await get_form(db, client_id)
    if not slot.open_when_locked:
        lifecycle.ensure_editable(form)
    url = await store.put(client_object_path(client_id, slot.storage_path), data)
    section = slot.field.split(".", 1)[0]
    setattr(form, section, set_path({section: getattr(form, section)}, slot.field, url)[section])
    form.updated_at = _utcnow()
    await db.flush()
    return url


# --- Client: credit ---


async def request_credit_access(db: AsyncSession, client_id: str) -> ClientProfile:
    profile = await get_profile(db, client_id)
    if lifecycle.request_credit_access(profile):
        await db.flush()
        event_hub.publish_on_commit(db, profile)
    return profile


async def load_credit(
    db: AsyncSession, client_id: str
) -> tuple[ClientProfile, RegistrationForm, CreditApplication]:
    """Credit application for a client with access; created from registration defaults on first use."""
    profile = await get_profile(db, client_id)
    lifecycle.ensure_credit_access(profile)
    form = await get_form(db, client_id)
    credit = await find_credit(db, client_id)
    if credit is None:
        now = _utcnow()
        credit = CreditApplication(
            id=client_id,
            status=CreditStatus.DRAFT.value,
            reopen_requested=False,
            created_at=now,
            updated_at=now,
        )
        apply_snapshot(credit, build_credit_defaults(form_to_snapshot(form), _today()), CREDIT_FIELDS)
        db.add(credit)
        await db.flush()
        logger.info("Client %s: credit application created", client_id)
    return profile, form, credit


def credit_view_snapshot(form: RegistrationForm, credit: CreditApplication) -> dict[str, Any]:
    return prepare_credit_snapshot(credit_to_snapshot(credit), form_to_snapshot(form), _today())


async def save_credit_draft(
    db: AsyncSession, client_id: str, draft: CreditApplicationDraft
) -> CreditApplication:
    _, form, credit = await load_credit(db, client_id)
    lifecycle.ensure_credit_editable(credit)
    snapshot = credit_to_snapshot(credit)
    snapshot.update(_draft_changes(draft))
    snapshot = prepare_credit_snapshot(snapshot, form_to_snapshot(form), _today())
    apply_snapshot(credit, snapshot, CREDIT_FIELDS)
    credit.updated_at = _utcnow()
    await db.flush()
    return credit


async def submit_credit(
    db: AsyncSession, client_id: str, confirm: bool, draft: Optional[CreditApplicationDraft]
) -> CreditApplication:
    profile, form, credit = await load_credit(db, client_id)
    lifecycle.ensure_credit_editable(credit)
    snapshot = credit_to_snapshot(credit)
    if draft is not None:
        snapshot.update(_draft_changes(draft))
    snapshot = prepare_credit_snapshot(snapshot, form_to_snapshot(form), _today())
    lifecycle.submit_credit(profile, credit, snapshot, confirm)
    apply_snapshot(credit, snapshot, CREDIT_FIELDS)
    await db.flush()
    return credit


async def request_credit_reopen(db: AsyncSession, client_id: str) -> ClientProfile:
    profile, _, credit = await load_credit(db, client_id)
    if lifecycle.request_credit_reopen(profile, credit):
        await db.flush()
        event_hub.publish_on_commit(db, profile)
    return profile


async def store_credit_upload(
    db: AsyncSession, store: BlobStore, client_id: str, slot_name: str, data: bytes
) -> str:
    slot = CREDIT_SLOTS.get(slot_name)
    if slot is None:
        raise NotFound(f"Unknown upload slot: {slot_name}")
    _, form, credit = await load_credit(db, client_id)
    if not slot.open_when_locked:
        lifecycle.ensure_credit_editable(credit)
    url = await store.put(client_object_path(client_id, slot.storage_path), data)
    now = _utcnow()
    if slot.field == "attested_document_url":
        credit.attested_document_url = url
        form.uploads = set_path(form.uploads or {}, "credit_attested_document_url", url)
        form.updated_at = now
    else:
        section, rest = slot.field.split(".", 1)
        setattr(credit, section, set_path(getattr(credit, section) or {}, rest, url))
    credit.updated_at = now
    await db.flush()
    return url
