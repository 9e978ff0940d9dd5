"""
Step-gated validation for the registration form.

The editing surface is split into ordered steps; each step owns a fixed set of
required field paths. Advancing past a step checks only that step's fields,
submitting checks all of them, and the first failing field decides which step
the user is sent back to.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from utils.payload import get_path, is_blank

STEPS = ["Company", "Owners", "LPO & Cheques", "Invoice & Finance", "References", "Documents", "Review"]
REVIEW_STEP = len(STEPS) - 1

# step index -> (field path, message)
STEP_REQUIRED_FIELDS: dict[int, list[tuple[str, str]]] = {
    0: [
        ("section_a.company_name", "Company name is required"),
        ("section_a.email", "Email is required"),
        ("section_a.trade_license_no", "Trade license number is required"),
    ],
    5: [
        ("uploads.trade_license_url", "Trade License is required"),
        ("uploads.vat_certificate_url", "VAT Certificate is required"),
        ("uploads.emirates_id_owners_url", "Emirates ID Copy is required"),
        ("uploads.visa_owners_url", "Visa Copy is required"),
        ("uploads.passport_owners_url", "Passport Copy is required"),
    ],
    6: [
        ("declaration_agreed", "Please confirm the declaration"),
        ("final_signatory_date", "Date is required"),
        ("final_signatory_name", "Name is required"),
        ("final_signatory_designation", "Designation is required"),
    ],
}

# Ordered: first matching prefix wins
_STEP_PREFIXES: list[tuple[tuple[str, ...], int]] = [
    (("section_a",), 0),
    (("section_b",), 1),
    (("section_c", "section_d"), 2),
    (("section_e", "section_f"), 3),
    (("section_g", "section_h"), 4),
    (("uploads",), 5),
    (("final", "declaration"), 6),
]

CREDIT_REQUIRED_FIELDS: list[tuple[str, str]] = [
    ("company_info.company_name", "Company name is required"),
    ("declaration.agreed", "Please confirm the declaration"),
    ("declaration.name", "Name is required"),
    ("declaration.designation", "Designation is required"),
    ("declaration.date", "Date is required"),
]


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    step: Optional[int] = None


def step_for_path(path: Optional[str]) -> Optional[int]:
    """Owning step of a field path, or None when no step claims it."""
    if not path:
        return None
    for prefixes, step in _STEP_PREFIXES:
        if path.startswith(prefixes):
            return step
    return None


def _check(data: Mapping[str, Any], fields: list[tuple[str, str]], stepped: bool = True) -> list[FieldError]:
    return [
        FieldError(field=path, message=message, step=step_for_path(path) if stepped else None)
        for path, message in fields
        if is_blank(get_path(data, path))
    ]


def validate_step(data: Mapping[str, Any], step: int) -> list[FieldError]:
    if step < 0 or step > REVIEW_STEP:
        raise ValueError(f"step must be between 0 and {REVIEW_STEP}")
    return _check(data, STEP_REQUIRED_FIELDS.get(step, []))


def validate_all(data: Mapping[str, Any]) -> list[FieldError]:
    errors: list[FieldError] = []
    for step in sorted(STEP_REQUIRED_FIELDS):
        errors.extend(_check(data, STEP_REQUIRED_FIELDS[step]))
    return errors


def next_step(step: int, errors: list[FieldError]) -> int:
    """Stay on the step while it has errors, otherwise advance (capped at Review)."""
    if errors:
        return step
    return min(step + 1, REVIEW_STEP)


def redirect_step(errors: list[FieldError]) -> Optional[int]:
    if not errors:
        return None
    return step_for_path(errors[0].field)


def validate_credit(data: Mapping[str, Any]) -> list[FieldError]:
    return _check(data, CREDIT_REQUIRED_FIELDS, stepped=False)
