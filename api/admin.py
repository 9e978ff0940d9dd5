from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_admin
from database import get_db
from models import ClientProfile
from schemas.admin import ClientCreate, ClientSummary, CreditAccessUpdate
from schemas.registration import OfficeUse
from services import onboarding
from services.deletion import delete_client
from services.session import SessionContext
from services.storage import BlobStore, get_blob_store
from services.views import build_admin_client_view, build_admin_summary
from utils.case import dict_keys_to_camel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _profile_to_response(profile: ClientProfile) -> dict[str, Any]:
    summary = ClientSummary(**{name: getattr(profile, name) for name in ClientSummary.model_fields})
    out = summary.model_dump(by_alias=True)
    out["createdAt"] = profile.created_at.isoformat() if profile.created_at else None
    out["updatedAt"] = profile.updated_at.isoformat() if profile.updated_at else None
    return out


async def _client_view(db: AsyncSession, client_id: str) -> dict[str, Any]:
    profile = await onboarding.get_profile(db, client_id)
    form = await onboarding.get_form(db, client_id)
    credit = await onboarding.find_credit(db, client_id)
    view = build_admin_client_view(profile, form, credit, datetime.now(timezone.utc).date())
    return dict_keys_to_camel(view.model_dump(mode="json"))


@router.get("/clients")
async def list_clients(
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    profiles = await onboarding.list_clients(db)
    return [_profile_to_response(p) for p in profiles]


@router.get("/summary")
async def get_summary(
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    summary = build_admin_summary(await onboarding.count_summary(db))
    return summary.model_dump(by_alias=True)


@router.post("/clients", status_code=201)
async def create_client(
    body: ClientCreate,
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    profile = await onboarding.create_client(db, body.email, body.company_name)
    return _profile_to_response(profile)


@router.get("/clients/{client_id}")
async def get_client(
    client_id: str,
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await _client_view(db, client_id)


@router.post("/clients/{client_id}/credentials-sent")
async def mark_credentials_sent(
    client_id: str,
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    profile = await onboarding.mark_credentials_sent(db, client_id)
    return _profile_to_response(profile)


@router.put("/clients/{client_id}/credit-access")
async def set_credit_access(
    client_id: str,
    body: CreditAccessUpdate,
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    profile = await onboarding.set_credit_access(db, client_id, body.enabled)
    return _profile_to_response(profile)


@router.post("/clients/{client_id}/reopen/approve")
async def approve_reopen(
    client_id: str,
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    profile = await onboarding.approve_reopen(db, client_id)
    return _profile_to_response(profile)


@router.post("/clients/{client_id}/credit-reopen/approve")
async def approve_credit_reopen(
    client_id: str,
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    profile = await onboarding.approve_credit_reopen(db, client_id)
    return _profile_to_response(profile)


@router.put("/clients/{client_id}/office-use")
async def update_office_use(
    client_id: str,
    body: OfficeUse,
    _: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await onboarding.update_office_use(db, client_id, body)
    return await _client_view(db, client_id)


@router.delete("/clients/{client_id}")
async def remove_client(
    client_id: str,
    session: SessionContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    logger.info("Admin %s deleting client %s", session.email, client_id)
    return await delete_client(db, store, client_id)
