"""
In-process push channel for profile-level changes (status, access flags).

Each subscriber gets a bounded asyncio.Queue; when a subscriber falls behind,
its oldest pending event is dropped so publishers never block. Changes made
inside a request are queued on the session and only published once it commits.
"""
from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from config import settings
from models import ClientProfile

logger = logging.getLogger(__name__)

# Session.info key holding events that wait for the commit
_PENDING_EVENTS = "pending_profile_events"


def profile_event(profile: ClientProfile) -> dict[str, Any]:
    return {
        "clientId": profile.id,
        "status": profile.status,
        "hasCreditAccess": bool(profile.has_credit_access),
        "creditRequestStatus": profile.credit_request_status,
        "reopenStatus": profile.reopen_status,
        "creditReopenStatus": profile.credit_reopen_status,
    }


class ProfileEventHub:
    def __init__(self, queue_size: int = 16):
        self._queue_size = queue_size
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)

    @contextmanager
    def subscribe(self, client_id: str) -> Iterator[asyncio.Queue]:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers[client_id].add(queue)
        try:
            yield queue
        finally:
            subscribers = self._subscribers.get(client_id)
            if subscribers is not None:
                subscribers.discard(queue)
                if not subscribers:
                    del self._subscribers[client_id]

    def subscriber_count(self, client_id: str) -> int:
        return len(self._subscribers.get(client_id, ()))

    def publish(self, client_id: str, event: dict[str, Any]) -> int:
        delivered = 0
        for queue in list(self._subscribers.get(client_id, ())):
            if queue.full():
                queue.get_nowait()
                logger.debug("Dropped stale profile event for %s", client_id)
            queue.put_nowait(event)
            delivered += 1
        return delivered

    def publish_on_commit(self, db: AsyncSession, profile: ClientProfile) -> None:
        """Snapshot the profile now; deliver it only if the session's transaction commits."""
        db.info.setdefault(_PENDING_EVENTS, []).append((self, profile.id, profile_event(profile)))


@event.listens_for(Session, "after_commit")
def _publish_committed(session: Session) -> None:
    for hub, client_id, payload in session.info.pop(_PENDING_EVENTS, []):
        hub.publish(client_id, payload)


@event.listens_for(Session, "after_rollback")
def _discard_rolled_back(session: Session) -> None:
    dropped = session.info.pop(_PENDING_EVENTS, [])
    if dropped:
        logger.debug("Discarded %d profile events after rollback", len(dropped))


event_hub = ProfileEventHub(settings.event_queue_size)
