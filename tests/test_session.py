"""
Tests for the admin policy and session resolution.
Run from the project root: python -m pytest tests/test_session.py -v
"""
import unittest

from models import ClientProfile, Role
from services.errors import AuthenticationError, PermissionDenied
from services.session import is_admin, resolve_session

ALLOW_LIST = frozenset({"admin@example.com"})


class _ProfileLookup:
    """Stands in for the session: only db.get is used, and counts calls."""

    def __init__(self, *profiles):
        self.profiles = {p.id: p for p in profiles}
        self.calls = 0

    async def get(self, model, key):
        self.calls += 1
        return self.profiles.get(key)


def _profile():
    return ClientProfile(id="cl-session", email="ops@acme.test", company_name="Acme", status="SENT")


class TestAdminPolicy(unittest.TestCase):
    def test_case_insensitive(self):
        self.assertTrue(is_admin("Admin@Example.com", ALLOW_LIST))
        self.assertTrue(is_admin(" admin@example.com ", ["ADMIN@example.com"]))

    def test_non_admin(self):
        self.assertFalse(is_admin("ops@acme.test", ALLOW_LIST))
        self.assertFalse(is_admin("", ALLOW_LIST))
        self.assertFalse(is_admin(None, ALLOW_LIST))
        self.assertFalse(is_admin("admin@example.com", []))


class TestResolveSession(unittest.IsolatedAsyncioTestCase):
    async def test_missing_identity(self):
        with self.assertRaises(AuthenticationError):
            await resolve_session(_ProfileLookup(), None, "ops@acme.test", ALLOW_LIST)
        with self.assertRaises(AuthenticationError):
            await resolve_session(_ProfileLookup(), "cl-session", "  ", ALLOW_LIST)

    async def test_admin_resolved_without_profile_lookup(self):
        db = _ProfileLookup()
        session = await resolve_session(db, "admin-uid", "ADMIN@example.com", ALLOW_LIST)
        self.assertEqual(session.role, Role.ADMIN)
        self.assertTrue(session.is_admin)
        self.assertEqual(db.calls, 0)

    async def test_client_with_matching_profile(self):
        session = await resolve_session(_ProfileLookup(_profile()), "cl-session", "Ops@Acme.test", ALLOW_LIST)
        self.assertEqual(session.role, Role.CLIENT)
        self.assertEqual(session.email, "ops@acme.test")
        self.assertFalse(session.is_admin)

    async def test_unknown_user_is_denied(self):
        with self.assertRaises(PermissionDenied):
            await resolve_session(_ProfileLookup(), "cl-missing", "ops@acme.test", ALLOW_LIST)

    async def test_email_mismatch_is_denied(self):
        with self.assertRaises(PermissionDenied):
            await resolve_session(_ProfileLookup(_profile()), "cl-session", "other@acme.test", ALLOW_LIST)


if __name__ == "__main__":
    unittest.main()
