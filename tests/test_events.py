"""
Tests for the in-process profile event hub.
Run from the project root: python -m pytest tests/test_events.py -v
"""
import asyncio
import unittest

from models import ClientProfile, ClientStatus, CreditRequestStatus
from services.events import ProfileEventHub, profile_event


def _profile():
    return ClientProfile(
        id="cl-events",
        email="ops@acme.test",
        company_name="Acme Trading LLC",
        status=ClientStatus.SENT.value,
        credit_request_status=CreditRequestStatus.REQUESTED.value,
        has_credit_access=False,
        reopen_status=None,
        credit_reopen_status=None,
    )


class TestProfileEvent(unittest.TestCase):
    def test_profile_level_fields_only(self):
        event = profile_event(_profile())
        self.assertEqual(
            event,
            {
                "clientId": "cl-events",
                "status": "SENT",
                "hasCreditAccess": False,
                "creditRequestStatus": "requested",
                "reopenStatus": None,
                "creditReopenStatus": None,
            },
        )


class TestProfileEventHub(unittest.IsolatedAsyncioTestCase):
    async def test_subscriber_receives_published_profile(self):
        hub = ProfileEventHub()
        with hub.subscribe("cl-events") as queue:
            self.assertEqual(hub.publish("cl-events", profile_event(_profile())), 1)
            event = await asyncio.wait_for(queue.get(), timeout=1)
        self.assertEqual(event["status"], "SENT")

    async def test_events_are_scoped_to_client(self):
        hub = ProfileEventHub()
        with hub.subscribe("someone-else") as queue:
            self.assertEqual(hub.publish("cl-events", profile_event(_profile())), 0)
            self.assertTrue(queue.empty())

    async def test_unsubscribe_on_exit(self):
        hub = ProfileEventHub()
        with hub.subscribe("cl-events"):
            with hub.subscribe("cl-events"):
                self.assertEqual(hub.subscriber_count("cl-events"), 2)
            self.assertEqual(hub.subscriber_count("cl-events"), 1)
        self.assertEqual(hub.subscriber_count("cl-events"), 0)
        self.assertEqual(hub.publish("cl-events", {"status": "SENT"}), 0)

    async def test_full_queue_drops_oldest(self):
        hub = ProfileEventHub(queue_size=2)
        with hub.subscribe("cl-events") as queue:
            for n in range(3):
                hub.publish("cl-events", {"n": n})
            self.assertEqual(queue.qsize(), 2)
            self.assertEqual(queue.get_nowait(), {"n": 1})
            self.assertEqual(queue.get_nowait(), {"n": 2})


if __name__ == "__main__":
    unittest.main()
