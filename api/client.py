from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_client
from database import get_db
from models import CreditApplication, RegistrationForm
from schemas.credit import CreditApplicationDraft, CreditSubmit
from schemas.registration import RegistrationFormDraft, RegistrationSubmit
from schemas.views import FieldErrorView, StepValidationResult
from services import onboarding
from services.errors import BadRequest
from services.events import event_hub, profile_event
from services.session import SessionContext
from services.storage import BlobStore, get_blob_store
from services.validation import next_step
from services.views import build_client_dashboard, form_view_snapshot
from utils.case import camel_path, dict_keys_to_camel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/me", tags=["client"])

# Seconds between keep-alive comments on an idle event stream
EVENT_KEEPALIVE = 15.0


def _today():
    return datetime.now(timezone.utc).date()


def _form_to_response(form: RegistrationForm) -> dict[str, Any]:
    """Serialize the registration form with camelCase keys for the frontend."""
    return {
        "id": form.id,
        "status": form.status,
        **dict_keys_to_camel(form_view_snapshot(form, _today())),
        "createdAt": form.created_at.isoformat() if form.created_at else None,
        "updatedAt": form.updated_at.isoformat() if form.updated_at else None,
        "submittedAt": form.submitted_at.isoformat() if form.submitted_at else None,
    }


def _credit_to_response(form: RegistrationForm, credit: CreditApplication) -> dict[str, Any]:
    return {
        "id": credit.id,
        "status": credit.status,
        "reopenRequested": bool(credit.reopen_requested),
        "attestedDocumentUrl": credit.attested_document_url,
        **dict_keys_to_camel(onboarding.credit_view_snapshot(form, credit)),
        "createdAt": credit.created_at.isoformat() if credit.created_at else None,
        "updatedAt": credit.updated_at.isoformat() if credit.updated_at else None,
        "submittedAt": credit.submitted_at.isoformat() if credit.submitted_at else None,
    }


async def _read_upload(file: UploadFile) -> bytes:
    data = await file.read()
    if not data:
        raise BadRequest("Uploaded file is empty")
    return data


# --- Dashboard and registration form ---


@router.get("")
async def get_dashboard(
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    profile, form = await onboarding.open_registration(db, session.uid)
    credit = await onboarding.find_credit(db, session.uid)
    view = build_client_dashboard(profile, form, credit)
    return dict_keys_to_camel(view.model_dump(mode="json"))


@router.get("/form")
async def get_form(
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    _, form = await onboarding.open_registration(db, session.uid)
    return _form_to_response(form)


@router.put("/form")
async def save_form(
    body: RegistrationFormDraft,
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    form = await onboarding.save_registration_draft(db, session.uid, body)
    return _form_to_response(form)


@router.post("/form/steps/{step}/validate")
async def validate_form_step(
    step: int,
    body: Optional[RegistrationFormDraft] = None,
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    try:
        errors = await onboarding.check_registration_step(db, session.uid, step, body)
    except ValueError as e:
        raise BadRequest(str(e)) from e
    result = StepValidationResult(
        step=step,
        valid=not errors,
        errors=[FieldErrorView(field=camel_path(e.field), message=e.message, step=e.step) for e in errors],
        next_step=next_step(step, errors),
    )
    return result.model_dump(by_alias=True)


@router.post("/form/submit")
async def submit_form(
    body: RegistrationSubmit,
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    _, form = await onboarding.submit_registration(db, session.uid, body.confirm, body.form)
    return _form_to_response(form)


@router.post("/form/reopen-request")
async def request_reopen(
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    profile = await onboarding.request_reopen(db, session.uid)
    return profile_event(profile)


@router.post("/uploads/{slot}")
async def upload_registration_file(
    slot: str,
    file: UploadFile = File(...),
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    data = await _read_upload(file)
    url = await onboarding.store_registration_upload(db, store, session.uid, slot, data)
    return {"slot": slot, "url": url}


# --- Credit application ---


@router.post("/credit-request")
async def request_credit_access(
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    profile = await onboarding.request_credit_access(db, session.uid)
    return profile_event(profile)


@router.get("/credit")
async def get_credit(
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    _, form, credit = await onboarding.load_credit(db, session.uid)
    return _credit_to_response(form, credit)


@router.put("/credit")
async def save_credit(
    body: CreditApplicationDraft,
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    credit = await onboarding.save_credit_draft(db, session.uid, body)
    form = await onboarding.get_form(db, session.uid)
    return _credit_to_response(form, credit)


@router.post("/credit/submit")
async def submit_credit(
    body: CreditSubmit,
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    credit = await onboarding.submit_credit(db, session.uid, body.confirm, body.application)
    form = await onboarding.get_form(db, session.uid)
    return _credit_to_response(form, credit)


@router.post("/credit/reopen-request")
async def request_credit_reopen(
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    profile = await onboarding.request_credit_reopen(db, session.uid)
    return profile_event(profile)


@router.post("/credit/uploads/{slot}")
async def upload_credit_file(
    slot: str,
    file: UploadFile = File(...),
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    data = await _read_upload(file)
    url = await onboarding.store_credit_upload(db, store, session.uid, slot, data)
    return {"slot": slot, "url": url}


# --- Live profile updates ---


def _sse_frame(event: dict[str, Any]) -> str:
    return f"data: {json.dumps(event)}\n\n"


@router.get("/events")
async def stream_events(
    request: Request,
    session: SessionContext = Depends(require_client),
    db: AsyncSession = Depends(get_db),
):
    """Server-sent events: the current profile state, then every profile-level change."""
    profile = await onboarding.get_profile(db, session.uid)
    initial = profile_event(profile)
    client_id = session.uid
    # The stream never touches the store; end the transaction before it starts
    await db.commit()

    async def event_stream():
        with event_hub.subscribe(client_id) as queue:
            yield _sse_frame(initial)
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=EVENT_KEEPALIVE)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                yield _sse_frame(event)
        logger.debug(
            "Event stream for %s closed, %d subscribers left", client_id, event_hub.subscriber_count(client_id)
        )

    return StreamingResponse(event_stream(), media_type="text/event-stream")
