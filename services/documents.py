"""
Document slots, the credit-document fallback table and credit defaults.

A slot counts as received purely by holding a non-empty URL string; nothing
looks at the content behind the URL.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from schemas.views import DocumentSlotView
from utils.payload import sanitize_for_store

# key, label, required
REGISTRATION_DOCUMENTS: list[tuple[str, str, bool]] = [
    ("trade_license_url", "Trade License", True),
    ("vat_certificate_url", "VAT Certificate", True),
    ("emirates_id_owners_url", "Emirates ID (Owners/Partners)", True),
    ("visa_owners_url", "Visa Copy (Owners/Partners)", True),
    ("passport_owners_url", "Passport Copy (Owners/Partners)", True),
    ("chamber_cert_url", "Chamber of Commerce Certificate", False),
    ("sponsor_passport_url", "Sponsor Passport", False),
    ("auth_passport_url", "Authorized Signatory Passport", False),
    ("attested_signature_url", "Attested Signature", False),
    ("security_cheque_url", "Security Cheque", False),
    ("advance_cheque_url", "Advance Cheque", False),
    ("bank_statement_url", "Bank Statement", False),
    ("company_stamp_url", "Company Stamp", False),
    ("final_signature_url", "Authorized Signature", False),
]

CREDIT_DOCUMENTS: list[tuple[str, str, bool]] = [
    ("trade_license_url", "Trade License", True),
    ("vat_certificate_url", "VAT Certificate", True),
    ("emirates_id_url", "Emirates ID", True),
    ("visa_copy_url", "Visa Copy", True),
    ("passport_copy_url", "Passport Copy", True),
    ("bank_statement_url", "Bank Statement", True),
]

# credit document key -> registration upload keys, in precedence order
CREDIT_DOCUMENT_FALLBACKS: dict[str, tuple[str, ...]] = {
    "trade_license_url": ("trade_license_url",),
    "vat_certificate_url": ("vat_certificate_url",),
    "emirates_id_url": ("emirates_id_owners_url",),
    "visa_copy_url": ("visa_owners_url",),
    "passport_copy_url": ("passport_owners_url", "sponsor_passport_url"),
    "bank_statement_url": ("bank_statement_url",),
}


def is_satisfied(url: Any) -> bool:
    return isinstance(url, str) and url != ""


def checklist(entries: list[tuple[str, str, bool]], docs: Optional[Mapping[str, Any]]) -> list[DocumentSlotView]:
    docs = docs or {}
    out = []
    for key, label, required in entries:
        url = docs.get(key)
        out.append(
            DocumentSlotView(
                key=key,
                label=label,
                url=url if is_satisfied(url) else None,
                satisfied=is_satisfied(url),
                required=required,
            )
        )
    return out


def resolve_credit_documents(
    documents: Optional[Mapping[str, Any]], uploads: Optional[Mapping[str, Any]]
) -> dict[str, Any]:
    """Credit documents with empty slots filled from the registration uploads."""
    resolved = dict(documents or {})
    uploads = uploads or {}
    for key, sources in CREDIT_DOCUMENT_FALLBACKS.items():
        if is_satisfied(resolved.get(key)):
            continue
        fallback = next((uploads[s] for s in sources if is_satisfied(uploads.get(s))), None)
        resolved[key] = fallback
    return resolved


def registration_signatures(form: Mapping[str, Any]) -> set[str]:
    uploads = form.get("uploads") or {}
    found = {uploads.get("final_signature_url"), uploads.get("company_stamp_url")}
    for section in ("section_c", "section_d"):
        for entry in form.get(section) or []:
            if isinstance(entry, dict):
                found.add(entry.get("signature_url"))
    return {s for s in found if is_satisfied(s)}


def prepare_credit_snapshot(credit: dict[str, Any], form: Mapping[str, Any], today: date) -> dict[str, Any]:
    """
    Bring a stored credit snapshot in line with the registration it belongs to:
    documents fall back to registration uploads, a declaration signature that
    is just a copy of a registration signature is dropped, and an empty
    declaration date defaults to today.
    """
    out = sanitize_for_store(credit)
    out["documents"] = resolve_credit_documents(out.get("documents"), form.get("uploads"))
    declaration = dict(out.get("declaration") or {})
    if declaration.get("signature_url") in registration_signatures(form):
        declaration["signature_url"] = ""
    if not declaration.get("date"):
        declaration["date"] = today.isoformat()
    out["declaration"] = declaration
    return out


def _blank_credit_reference() -> dict[str, str]:
    return {"company_name": "", "contact_person": "", "mobile": "", "email": ""}


def build_credit_defaults(form: Mapping[str, Any], today: date) -> dict[str, Any]:
    """Initial credit application derived from the client's registration form."""
    section_a = form.get("section_a") or {}
    first_lpo = next(iter(form.get("section_c") or []), None) or {}

    trade_references = [
        {
            "company_name": ref.get("company_name") or "",
            "contact_person": f"{ref['company_name']} Contact" if ref.get("company_name") else "",
            "mobile": ref.get("tel_no") or "",
            "email": "",
        }
        for ref in (form.get("section_h") or [])[:2]
        if isinstance(ref, dict)
    ]
    if not trade_references:
        trade_references = [_blank_credit_reference(), _blank_credit_reference()]

    return {
        "company_info": {
            "company_name": section_a.get("company_name") or "",
            "trading_name": "",
            "office_address": section_a.get("location") or "",
            "city": section_a.get("emirate") or "",
            "po_box": section_a.get("po_box") or "",
            "landline": section_a.get("telephone") or "",
            "mobile": section_a.get("contact_no") or "",
            "email": section_a.get("email") or "",
            "website": "",
        },
        "business_details": {
            "type_of_business": section_a.get("nature_of_business") or "",
            "year_established": section_a.get("period_in_uae") or "",
            "number_of_employees": "",
            "nature_of_business": section_a.get("nature_of_business") or "",
            "authorized_signatory_name": first_lpo.get("name") or "",
            "designation": first_lpo.get("designation") or "",
            "mobile": first_lpo.get("contact_no") or "",
            "email": "",
        },
        "credit_request": {
            "credit_limit_aed": "",
            "preferred_payment_terms": "",
            "estimated_monthly_purchases": "",
        },
        "bank_details": {
            "bank_name": "",
            "branch": "",
            "account_name": "",
            "account_number": "",
            "iban": "",
        },
        "trade_references": trade_references,
        "documents": resolve_credit_documents({}, form.get("uploads")),
        "questionnaire": {
            "has_credit_facilities": None,
            "credit_facilities_details": "",
            "has_defaulted_payments": None,
            "defaulted_payments_details": "",
            "purchase_orders_before_delivery": None,
            "financially_stable": None,
            "preferred_communication": "",
        },
        "declaration": {
            "agreed": False,
            "name": "",
            "designation": "",
            "signature_url": "",
            "date": today.isoformat(),
        },
    }


def blank_registration(company_name: str) -> dict[str, Any]:
    """Registration sections for a newly created client."""
    return {
        "section_a": {"company_name": company_name},
        "section_b": [
            {"name": "", "nationality": "", "position": "", "is_general_manager": i == 3, "contact_no": ""}
            for i in range(4)
        ],
        "section_c": [{"name": "", "designation": "", "signature_url": ""} for _ in range(2)],
        "section_d": [{"name": "", "designation": "", "signature_url": ""} for _ in range(2)],
        "section_e": {},
        "section_f": {},
        "section_g": [{"bank_name": "", "account_no": "", "tel_no": ""} for _ in range(2)],
        "section_h": [{"company_name": "", "since": "", "tel_no": ""} for _ in range(2)],
        "uploads": {},
    }


@dataclass(frozen=True)
class UploadSlot:
    name: str
    storage_path: str
    field: str
    # Slots still writable after the owning form is locked
    open_when_locked: bool = False


def _doc_slot(name: str, field: str, prefix: str = "docs") -> UploadSlot:
    return UploadSlot(name=name, storage_path=f"{prefix}/{name}", field=field)


REGISTRATION_SLOTS: dict[str, UploadSlot] = {
    s.name: s
    for s in [
        _doc_slot("tradeLicense", "uploads.trade_license_url"),
        _doc_slot("vatCertificate", "uploads.vat_certificate_url"),
        _doc_slot("emiratesIdOwners", "uploads.emirates_id_owners_url"),
        _doc_slot("visaOwners", "uploads.visa_owners_url"),
        _doc_slot("passportOwners", "uploads.passport_owners_url"),
        _doc_slot("chamberCert", "uploads.chamber_cert_url"),
        _doc_slot("sponsorPassport", "uploads.sponsor_passport_url"),
        _doc_slot("authPassport", "uploads.auth_passport_url"),
        _doc_slot("attestedSignature", "uploads.attested_signature_url"),
        _doc_slot("securityCheque", "uploads.security_cheque_url"),
        _doc_slot("advanceCheque", "uploads.advance_cheque_url"),
        _doc_slot("bankStatement", "uploads.bank_statement_url"),
        _doc_slot("companyStamp", "uploads.company_stamp_url"),
        _doc_slot("finalSignature", "uploads.final_signature_url"),
        _doc_slot("lpo-1", "section_c.0.signature_url", prefix="signatures"),
        _doc_slot("lpo-2", "section_c.1.signature_url", prefix="signatures"),
        _doc_slot("cheque-1", "section_d.0.signature_url", prefix="signatures"),
        _doc_slot("cheque-2", "section_d.1.signature_url", prefix="signatures"),
        UploadSlot("attestedDocument", "attestedDocument", "uploads.attested_document_url", open_when_locked=True),
    ]
}

CREDIT_SLOTS: dict[str, UploadSlot] = {
    s.name: s
    for s in [
        _doc_slot("tradeLicense", "documents.trade_license_url", prefix="credit"),
        _doc_slot("vatCertificate", "documents.vat_certificate_url", prefix="credit"),
        _doc_slot("emiratesId", "documents.emirates_id_url", prefix="credit"),
        _doc_slot("visaCopy", "documents.visa_copy_url", prefix="credit"),
        _doc_slot("passportCopy", "documents.passport_copy_url", prefix="credit"),
        _doc_slot("bankStatement", "documents.bank_statement_url", prefix="credit"),
        _doc_slot("declarationSignature", "declaration.signature_url", prefix="credit"),
        UploadSlot("attestedDocument", "credit/attestedDocument", "attested_document_url", open_when_locked=True),
    ]
}
