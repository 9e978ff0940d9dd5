"""
Session context and the admin policy.

The session is re-derived from the identity headers on every request; nothing
about the caller's role is cached between requests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models import ClientProfile, Role
from services.errors import AuthenticationError, PermissionDenied


@dataclass(frozen=True)
class SessionContext:
    uid: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def is_admin(email: Optional[str], allow_list: Iterable[str]) -> bool:
    """Single admin policy shared by every surface; allow-list comes from configuration."""
    if not isinstance(email, str) or not email.strip():
        return False
    return email.strip().lower() in {e.lower() for e in allow_list}


async def resolve_session(
    db: AsyncSession,
    uid: Optional[str],
    email: Optional[str],
    allow_list: Iterable[str],
) -> SessionContext:
    uid = (uid or "").strip()
    email = (email or "").strip().lower()
    if not uid or not email:
        raise AuthenticationError("Authentication required.")
    # Admin policy is checked before any record lookup
    if is_admin(email, allow_list):
        return SessionContext(uid=uid, email=email, role=Role.ADMIN)
    profile = await db.get(ClientProfile, uid)
    if profile is None or profile.email.lower() != email:
        raise PermissionDenied("Access Denied: You do not have permission to access the system.")
    return SessionContext(uid=uid, email=email, role=Role.CLIENT)
