"""
Tests for document checklists, credit document fallbacks and credit defaults.
Run from the project root: python -m pytest tests/test_documents.py -v
"""
import unittest
from datetime import date

from services.documents import (
    CREDIT_SLOTS,
    REGISTRATION_DOCUMENTS,
    REGISTRATION_SLOTS,
    blank_registration,
    build_credit_defaults,
    checklist,
    is_satisfied,
    prepare_credit_snapshot,
    resolve_credit_documents,
)

TODAY = date(2026, 10, 19)


class TestChecklist(unittest.TestCase):
    def test_satisfied_means_non_empty_string(self):
        self.assertTrue(is_satisfied("/files/clients/c1/docs/tradeLicense"))
        self.assertFalse(is_satisfied(""))
        self.assertFalse(is_satisfied(None))
        self.assertFalse(is_satisfied(True))

    def test_registration_checklist(self):
        items = checklist(REGISTRATION_DOCUMENTS, {"trade_license_url": "u1", "chamber_cert_url": ""})
        by_key = {i.key: i for i in items}
        self.assertEqual(len(items), len(REGISTRATION_DOCUMENTS))
        self.assertTrue(by_key["trade_license_url"].satisfied)
        self.assertEqual(by_key["trade_license_url"].url, "u1")
        self.assertFalse(by_key["vat_certificate_url"].satisfied)
        self.assertTrue(by_key["vat_certificate_url"].required)
        self.assertFalse(by_key["chamber_cert_url"].satisfied)
        self.assertIsNone(by_key["chamber_cert_url"].url)
        self.assertFalse(by_key["chamber_cert_url"].required)

    def test_missing_uploads_mapping(self):
        self.assertFalse(any(i.satisfied for i in checklist(REGISTRATION_DOCUMENTS, None)))


class TestCreditDocumentFallbacks(unittest.TestCase):
    def test_fallback_from_registration(self):
        uploads = {
            "trade_license_url": "reg-tl",
            "emirates_id_owners_url": "reg-eid",
            "visa_owners_url": "reg-visa",
            "bank_statement_url": "reg-bank",
        }
        resolved = resolve_credit_documents({}, uploads)
        self.assertEqual(resolved["trade_license_url"], "reg-tl")
        self.assertEqual(resolved["emirates_id_url"], "reg-eid")
        self.assertEqual(resolved["visa_copy_url"], "reg-visa")
        self.assertEqual(resolved["bank_statement_url"], "reg-bank")
        self.assertIsNone(resolved["vat_certificate_url"])
        self.assertIsNone(resolved["passport_copy_url"])

    def test_own_upload_wins(self):
        resolved = resolve_credit_documents({"trade_license_url": "credit-tl"}, {"trade_license_url": "reg-tl"})
        self.assertEqual(resolved["trade_license_url"], "credit-tl")

    def test_passport_precedence(self):
        both = {"passport_owners_url": "owners", "sponsor_passport_url": "sponsor"}
        self.assertEqual(resolve_credit_documents({}, both)["passport_copy_url"], "owners")
        sponsor_only = {"passport_owners_url": "", "sponsor_passport_url": "sponsor"}
        self.assertEqual(resolve_credit_documents({}, sponsor_only)["passport_copy_url"], "sponsor")


class TestCreditSnapshot(unittest.TestCase):
    def _form(self):
        return {
            "section_a": {
                "company_name": "Acme Trading LLC",
                "location": "Al Quoz",
                "emirate": "Dubai",
                "email": "ops@acme.test",
                "nature_of_business": "Building materials",
            },
            "section_c": [{"name": "Omar", "designation": "GM", "signature_url": "sig-lpo-1"}],
            "section_d": [],
            "section_h": [
                {"company_name": "Gulf Steel", "since": "2019", "tel_no": "04-111"},
                {"company_name": "", "since": "", "tel_no": ""},
                {"company_name": "Third Co", "since": "", "tel_no": ""},
            ],
            "uploads": {"final_signature_url": "sig-final", "trade_license_url": "reg-tl"},
        }

    def test_defaults_from_registration(self):
        defaults = build_credit_defaults(self._form(), TODAY)
        self.assertEqual(defaults["company_info"]["company_name"], "Acme Trading LLC")
        self.assertEqual(defaults["company_info"]["office_address"], "Al Quoz")
        self.assertEqual(defaults["company_info"]["city"], "Dubai")
        self.assertEqual(defaults["business_details"]["authorized_signatory_name"], "Omar")
        self.assertEqual(defaults["documents"]["trade_license_url"], "reg-tl")
        self.assertEqual(defaults["declaration"]["date"], "2026-10-19")
        self.assertFalse(defaults["declaration"]["agreed"])

    def test_trade_references_take_first_two(self):
        refs = build_credit_defaults(self._form(), TODAY)["trade_references"]
        self.assertEqual(len(refs), 2)
        self.assertEqual(refs[0]["company_name"], "Gulf Steel")
        self.assertEqual(refs[0]["contact_person"], "Gulf Steel Contact")
        self.assertEqual(refs[0]["mobile"], "04-111")
        self.assertEqual(refs[1]["contact_person"], "")

    def test_empty_registration_gets_two_blank_references(self):
        refs = build_credit_defaults({}, TODAY)["trade_references"]
        self.assertEqual(len(refs), 2)
        self.assertTrue(all(r["company_name"] == "" for r in refs))

    def test_reused_registration_signature_is_cleared(self):
        credit = {"declaration": {"signature_url": "sig-final", "date": "2026-01-01"}}
        prepared = prepare_credit_snapshot(credit, self._form(), TODAY)
        self.assertEqual(prepared["declaration"]["signature_url"], "")
        self.assertEqual(prepared["declaration"]["date"], "2026-01-01")

        credit = {"declaration": {"signature_url": "sig-lpo-1"}}
        self.assertEqual(prepare_credit_snapshot(credit, self._form(), TODAY)["declaration"]["signature_url"], "")

    def test_own_signature_is_kept_and_date_defaults(self):
        credit = {"declaration": {"signature_url": "credit-sig", "date": ""}}
        prepared = prepare_credit_snapshot(credit, self._form(), TODAY)
        self.assertEqual(prepared["declaration"]["signature_url"], "credit-sig")
        self.assertEqual(prepared["declaration"]["date"], "2026-10-19")

    def test_prepare_does_not_mutate_input(self):
        credit = {"documents": {}, "declaration": {"signature_url": "sig-final"}}
        prepare_credit_snapshot(credit, self._form(), TODAY)
        self.assertEqual(credit, {"documents": {}, "declaration": {"signature_url": "sig-final"}})


class TestBlankRegistration(unittest.TestCase):
    def test_layout(self):
        blank = blank_registration("Acme Trading LLC")
        self.assertEqual(blank["section_a"]["company_name"], "Acme Trading LLC")
        self.assertEqual(len(blank["section_b"]), 4)
        self.assertEqual([o["is_general_manager"] for o in blank["section_b"]], [False, False, False, True])
        self.assertEqual(len(blank["section_c"]), 2)
        self.assertEqual(len(blank["section_d"]), 2)
        self.assertEqual(len(blank["section_g"]), 2)
        self.assertEqual(len(blank["section_h"]), 2)
        self.assertEqual(blank["uploads"], {})


class TestUploadSlots(unittest.TestCase):
    def test_signature_slots_target_list_entries(self):
        slot = REGISTRATION_SLOTS["cheque-2"]
        self.assertEqual(slot.storage_path, "signatures/cheque-2")
        self.assertEqual(slot.field, "section_d.1.signature_url")

    def test_attested_slots_stay_open(self):
        self.assertTrue(REGISTRATION_SLOTS["attestedDocument"].open_when_locked)
        self.assertTrue(CREDIT_SLOTS["attestedDocument"].open_when_locked)
        self.assertFalse(REGISTRATION_SLOTS["tradeLicense"].open_when_locked)
        self.assertFalse(CREDIT_SLOTS["declarationSignature"].open_when_locked)


if __name__ == "__main__":
    unittest.main()
