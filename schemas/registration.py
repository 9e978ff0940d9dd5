from __future__ import annotations

from typing import Optional

from pydantic import Field

from schemas.common import CamelModel


class SectionA(CamelModel):
    """Company information."""

    company_name: Optional[str] = ""
    division: Optional[str] = ""
    po_box: Optional[str] = ""
    emirate: Optional[str] = ""
    location: Optional[str] = ""
    telephone: Optional[str] = ""
    fax: Optional[str] = ""
    email: Optional[str] = ""
    nature_of_business: Optional[str] = ""
    period_in_uae: Optional[str] = ""
    legal_status: Optional[str] = ""
    trade_license_no: Optional[str] = ""
    trade_license_expiry: Optional[str] = ""
    sponsor_name: Optional[str] = ""
    contact_no: Optional[str] = ""


class OwnerEntry(CamelModel):
    name: Optional[str] = ""
    nationality: Optional[str] = ""
    position: Optional[str] = ""
    is_general_manager: Optional[bool] = False
    contact_no: Optional[str] = ""


class Signatory(CamelModel):
    name: Optional[str] = ""
    designation: Optional[str] = ""
    signature_url: Optional[str] = ""
    contact_no: Optional[str] = None
    po_box: Optional[str] = None
    emirate: Optional[str] = None
    location: Optional[str] = None


class ContactBlock(CamelModel):
    """Invoice contact (section E) and finance head (section F)."""

    name: Optional[str] = ""
    designation: Optional[str] = ""
    po_box: Optional[str] = ""
    emirate: Optional[str] = ""
    location: Optional[str] = ""
    contact_no: Optional[str] = ""
    fax: Optional[str] = ""
    email: Optional[str] = ""


class BankReference(CamelModel):
    bank_name: Optional[str] = ""
    account_no: Optional[str] = ""
    tel_no: Optional[str] = ""


class TradeReference(CamelModel):
    company_name: Optional[str] = ""
    since: Optional[str] = ""
    tel_no: Optional[str] = ""


class Uploads(CamelModel):
    trade_license_url: Optional[str] = None
    chamber_cert_url: Optional[str] = None
    sponsor_passport_url: Optional[str] = None
    attested_signature_url: Optional[str] = None
    auth_passport_url: Optional[str] = None
    security_cheque_url: Optional[str] = None
    advance_cheque_url: Optional[str] = None
    company_stamp_url: Optional[str] = None
    final_signature_url: Optional[str] = None
    attested_document_url: Optional[str] = None
    credit_attested_document_url: Optional[str] = None
    vat_certificate_url: Optional[str] = None
    emirates_id_owners_url: Optional[str] = None
    visa_owners_url: Optional[str] = None
    passport_owners_url: Optional[str] = None
    bank_statement_url: Optional[str] = None


class OfficeUse(CamelModel):
    sales_comments: Optional[str] = ""
    sales_staff_name: Optional[str] = ""
    sales_date: Optional[str] = ""
    division_manager_comments: Optional[str] = ""
    division_manager_name: Optional[str] = ""
    division_manager_date: Optional[str] = ""
    finance_manager_comments: Optional[str] = ""
    approved_credit_limit: Optional[str] = ""
    credit_period: Optional[str] = ""


class RegistrationFormDraft(CamelModel):
    """Partial registration payload; sections left out are not touched on save."""

    section_a: Optional[SectionA] = None
    section_b: Optional[list[OwnerEntry]] = None
    section_c: Optional[list[Signatory]] = None
    section_d: Optional[list[Signatory]] = None
    section_e: Optional[ContactBlock] = None
    section_f: Optional[ContactBlock] = None
    section_g: Optional[list[BankReference]] = None
    section_h: Optional[list[TradeReference]] = None
    uploads: Optional[Uploads] = None
    declaration_agreed: Optional[bool] = None
    final_signatory_name: Optional[str] = Field(None, max_length=256)
    final_signatory_designation: Optional[str] = Field(None, max_length=256)
    final_signatory_date: Optional[str] = Field(None, max_length=32)


class RegistrationSubmit(CamelModel):
    confirm: bool = Field(False, description="Explicit confirmation of the final submission")
    form: Optional[RegistrationFormDraft] = None
