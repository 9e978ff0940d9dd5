"""
Tests for step-gated validation: per-step required fields, redirect step, credit checks.
Run from the project root: python -m pytest tests/test_validation.py -v
"""
import unittest

from services.validation import (
    REVIEW_STEP,
    STEPS,
    next_step,
    redirect_step,
    step_for_path,
    validate_all,
    validate_credit,
    validate_step,
)


def _complete_form():
    return {
        "section_a": {"company_name": "Acme Trading LLC", "email": "ops@acme.test", "trade_license_no": "TL-001"},
        "section_b": [],
        "uploads": {
            "trade_license_url": "/files/clients/c1/docs/tradeLicense",
            "vat_certificate_url": "/files/clients/c1/docs/vatCertificate",
            "emirates_id_owners_url": "/files/clients/c1/docs/emiratesIdOwners",
            "visa_owners_url": "/files/clients/c1/docs/visaOwners",
            "passport_owners_url": "/files/clients/c1/docs/passportOwners",
        },
        "declaration_agreed": True,
        "final_signatory_name": "Sara Ali",
        "final_signatory_designation": "Managing Director",
        "final_signatory_date": "2026-10-19",
    }


class TestStepValidation(unittest.TestCase):
    def test_complete_form_passes_every_step(self):
        form = _complete_form()
        for step in range(len(STEPS)):
            self.assertEqual(validate_step(form, step), [], STEPS[step])
        self.assertEqual(validate_all(form), [])

    def test_step_only_checks_its_own_fields(self):
        """Missing documents do not block the company step."""
        form = _complete_form()
        form["uploads"] = {}
        self.assertEqual(validate_step(form, 0), [])
        errors = validate_step(form, 5)
        self.assertEqual(len(errors), 5)
        self.assertTrue(all(e.step == 5 for e in errors))

    def test_steps_without_required_fields_always_pass(self):
        for step in (1, 2, 3, 4):
            self.assertEqual(validate_step({}, step), [])

    def test_blank_values_fail(self):
        form = _complete_form()
        form["section_a"]["email"] = ""
        form["declaration_agreed"] = False
        form["final_signatory_name"] = None
        fields = [e.field for e in validate_all(form)]
        self.assertEqual(fields, ["section_a.email", "declaration_agreed", "final_signatory_name"])

    def test_out_of_range_step_raises(self):
        with self.assertRaises(ValueError):
            validate_step({}, -1)
        with self.assertRaises(ValueError):
            validate_step({}, REVIEW_STEP + 1)

    def test_redirect_is_step_of_first_failing_field(self):
        form = _complete_form()
        form["uploads"]["visa_owners_url"] = ""
        form["final_signatory_designation"] = ""
        self.assertEqual(redirect_step(validate_all(form)), 5)

        form["section_a"]["trade_license_no"] = ""
        self.assertEqual(redirect_step(validate_all(form)), 0)

    def test_redirect_without_errors_is_none(self):
        self.assertIsNone(redirect_step([]))

    def test_next_step_advances_only_when_clean(self):
        form = _complete_form()
        self.assertEqual(next_step(0, validate_step(form, 0)), 1)
        form["section_a"]["company_name"] = ""
        self.assertEqual(next_step(0, validate_step(form, 0)), 0)
        self.assertEqual(next_step(REVIEW_STEP, []), REVIEW_STEP)


class TestStepForPath(unittest.TestCase):
    def test_prefixes(self):
        self.assertEqual(step_for_path("section_a.company_name"), 0)
        self.assertEqual(step_for_path("section_b.0.name"), 1)
        self.assertEqual(step_for_path("section_d.1.signature_url"), 2)
        self.assertEqual(step_for_path("section_f.email"), 3)
        self.assertEqual(step_for_path("section_h.0.tel_no"), 4)
        self.assertEqual(step_for_path("uploads.vat_certificate_url"), 5)
        self.assertEqual(step_for_path("final_signatory_name"), 6)
        self.assertEqual(step_for_path("declaration_agreed"), 6)

    def test_unknown_path_has_no_step(self):
        self.assertIsNone(step_for_path("office_use.credit_period"))
        self.assertIsNone(step_for_path(None))


class TestCreditValidation(unittest.TestCase):
    def test_requires_company_and_declaration(self):
        errors = validate_credit({"company_info": {}, "declaration": {"agreed": False}})
        self.assertEqual(
            [e.field for e in errors],
            [
                "company_info.company_name",
                "declaration.agreed",
                "declaration.name",
                "declaration.designation",
                "declaration.date",
            ],
        )
        self.assertTrue(all(e.step is None for e in errors))

    def test_complete_credit_passes(self):
        data = {
            "company_info": {"company_name": "Acme Trading LLC"},
            "declaration": {"agreed": True, "name": "Sara Ali", "designation": "MD", "date": "2026-10-19"},
        }
        self.assertEqual(validate_credit(data), [])


if __name__ == "__main__":
    unittest.main()
