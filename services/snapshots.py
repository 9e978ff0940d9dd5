"""Plain-dict snapshots of stored records (snake_case), and writes back from drafts."""
from __future__ import annotations

from typing import Any

from models import CreditApplication, RegistrationForm
from utils.payload import sanitize_for_store

FORM_FIELDS = (
    "section_a",
    "section_b",
    "section_c",
    "section_d",
    "section_e",
    "section_f",
    "section_g",
    "section_h",
    "uploads",
    "declaration_agreed",
    "final_signatory_name",
    "final_signatory_designation",
    "final_signatory_date",
)

CREDIT_FIELDS = (
    "company_info",
    "business_details",
    "credit_request",
    "bank_details",
    "trade_references",
    "documents",
    "questionnaire",
    "declaration",
)


def form_to_snapshot(form: RegistrationForm) -> dict[str, Any]:
    snapshot = {name: sanitize_for_store(getattr(form, name)) for name in FORM_FIELDS}
    for name in ("section_a", "section_e", "section_f", "uploads"):
        if snapshot[name] is None:
            snapshot[name] = {}
    for name in ("section_b", "section_c", "section_d", "section_g", "section_h"):
        if snapshot[name] is None:
            snapshot[name] = []
    return snapshot


def credit_to_snapshot(credit: CreditApplication) -> dict[str, Any]:
    snapshot = {name: sanitize_for_store(getattr(credit, name)) for name in CREDIT_FIELDS}
    for name in CREDIT_FIELDS:
        if snapshot[name] is None:
            snapshot[name] = [] if name == "trade_references" else {}
    return snapshot


def apply_snapshot(record: Any, snapshot: dict[str, Any], fields: tuple[str, ...]) -> None:
    """Write the given fields onto the record; keys absent from the snapshot are left alone."""
    for name in fields:
        if name in snapshot:
            setattr(record, name, sanitize_for_store(snapshot[name]))
