"""
Privileged deletion of a client and everything stored for it.

Blob cleanup is best effort and never blocks removal of the records; record
deletes run in the request's session so they land in one transaction.
"""
from __future__ import annotations

import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from models import ClientProfile, CreditApplication, Identity, RegistrationForm
from services.errors import NotFound
from services.storage import BlobStore, client_prefix

logger = logging.getLogger(__name__)


async def delete_client(db: AsyncSession, store: BlobStore, client_id: str) -> dict[str, bool]:
    profile = await db.get(ClientProfile, client_id)
    if profile is None:
        raise NotFound("Client not found")

    try:
        await store.delete_prefix(client_prefix(client_id))
    except Exception as e:
        logger.warning("Blob cleanup for client %s failed: %s", client_id, e)

    await db.execute(delete(CreditApplication).where(CreditApplication.id == client_id))
    await db.execute(delete(RegistrationForm).where(RegistrationForm.id == client_id))
    await db.delete(profile)

    identity = await db.get(Identity, client_id)
    if identity is None:
        logger.info("Client %s had no identity record", client_id)
    else:
        await db.delete(identity)

    await db.flush()
    logger.info("Deleted client %s", client_id)
    return {"ok": True}
