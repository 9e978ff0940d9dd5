from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db
from services.errors import PermissionDenied
from services.session import SessionContext, resolve_session


async def get_session(
    x_user_id: Optional[str] = Header(default=None),
    x_user_email: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> SessionContext:
    """Caller identity as asserted by the authentication front (X-User-Id / X-User-Email)."""
    return await resolve_session(db, x_user_id, x_user_email, settings.admin_allow_list)


async def require_admin(session: SessionContext = Depends(get_session)) -> SessionContext:
    if not session.is_admin:
        raise PermissionDenied("Admin access required.")
    return session


async def require_client(session: SessionContext = Depends(get_session)) -> SessionContext:
    if session.is_admin:
        raise PermissionDenied("This area is only available to client accounts.")
    return session
