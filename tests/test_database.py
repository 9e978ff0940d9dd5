"""
Tests for the request-scoped session: commit, failure mapping and commit-time profile events.
Run from the project root: python -m pytest tests/test_database.py -v
"""
import unittest
import uuid
from unittest import mock

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import AsyncSessionLocal, dispose_db, get_db, init_db
from models import ClientProfile, ClientStatus, Identity
from services.errors import StoreError
from services.events import ProfileEventHub


def _profile():
    return ClientProfile(
        id=f"cl-{uuid.uuid4().hex[:12]}",
        email="ops@acme.test",
        company_name="Acme Trading LLC",
        status=ClientStatus.SENT.value,
    )


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        await init_db()

    async def asyncTearDown(self):
        await dispose_db()


class TestRequestSession(DatabaseTestCase):
    async def test_commits_on_success(self):
        gen = get_db()
        session = await gen.__anext__()
        session.add(Identity(id="cl-commit", email="commit@acme.test"))
        with self.assertRaises(StopAsyncIteration):
            await gen.__anext__()

        async with AsyncSessionLocal() as check:
            self.assertIsNotNone(await check.get(Identity, "cl-commit"))

    async def test_store_failure_is_rolled_back_and_mapped(self):
        gen = get_db()
        session = await gen.__anext__()
        session.add(Identity(id="cl-failed", email="failed@acme.test"))
        await session.flush()

        failing = mock.AsyncMock(side_effect=SQLAlchemyError("disk I/O error"))
        with mock.patch.object(AsyncSession, "commit", failing):
            with self.assertLogs("database", "ERROR"):
                with self.assertRaises(StoreError) as ctx:
                    await gen.__anext__()

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.content["errcode"], "E00.500")
        self.assertIn("disk I/O error", str(ctx.exception.content))
        async with AsyncSessionLocal() as check:
            self.assertIsNone(await check.get(Identity, "cl-failed"))


class TestCommitTimeEvents(DatabaseTestCase):
    async def test_delivered_only_after_commit(self):
        hub = ProfileEventHub()
        profile = _profile()
        with hub.subscribe(profile.id) as queue:
            async with AsyncSessionLocal() as session:
                session.add(profile)
                await session.flush()
                hub.publish_on_commit(session, profile)
                self.assertTrue(queue.empty())
                await session.commit()
            event = queue.get_nowait()
        self.assertEqual(event["clientId"], profile.id)
        self.assertEqual(event["status"], "SENT")

    async def test_dropped_on_rollback(self):
        hub = ProfileEventHub()
        profile = _profile()
        with hub.subscribe(profile.id) as queue:
            async with AsyncSessionLocal() as session:
                session.add(profile)
                await session.flush()
                hub.publish_on_commit(session, profile)
                await session.rollback()
                self.assertEqual(session.info.get("pending_profile_events", []), [])
                await session.commit()
            self.assertTrue(queue.empty())

    async def test_failed_request_publishes_nothing(self):
        hub = ProfileEventHub()
        profile = _profile()
        gen = get_db()
        session = await gen.__anext__()
        session.add(profile)
        await session.flush()
        hub.publish_on_commit(session, profile)

        with hub.subscribe(profile.id) as queue:
            failing = mock.AsyncMock(side_effect=SQLAlchemyError("database is locked"))
            with mock.patch.object(AsyncSession, "commit", failing):
                with self.assertLogs("database", "ERROR"):
                    with self.assertRaises(StoreError):
                        await gen.__anext__()
            self.assertTrue(queue.empty())


if __name__ == "__main__":
    unittest.main()
