from __future__ import annotations

from typing import Optional

from pydantic import Field

from schemas.common import CamelModel


class CompanyInfo(CamelModel):
    company_name: Optional[str] = ""
    trading_name: Optional[str] = ""
    office_address: Optional[str] = ""
    city: Optional[str] = ""
    po_box: Optional[str] = ""
    landline: Optional[str] = ""
    mobile: Optional[str] = ""
    email: Optional[str] = ""
    website: Optional[str] = ""


class BusinessDetails(CamelModel):
    type_of_business: Optional[str] = ""
    year_established: Optional[str] = ""
    number_of_employees: Optional[str] = ""
    nature_of_business: Optional[str] = ""
    authorized_signatory_name: Optional[str] = ""
    designation: Optional[str] = ""
    mobile: Optional[str] = ""
    email: Optional[str] = ""


class CreditRequestBlock(CamelModel):
    credit_limit_aed: Optional[str] = ""
    preferred_payment_terms: Optional[str] = ""
    estimated_monthly_purchases: Optional[str] = ""


class BankDetails(CamelModel):
    bank_name: Optional[str] = ""
    branch: Optional[str] = ""
    account_name: Optional[str] = ""
    account_number: Optional[str] = ""
    iban: Optional[str] = ""


class CreditTradeReference(CamelModel):
    company_name: Optional[str] = ""
    contact_person: Optional[str] = ""
    mobile: Optional[str] = ""
    email: Optional[str] = ""


class CreditDocuments(CamelModel):
    trade_license_url: Optional[str] = None
    vat_certificate_url: Optional[str] = None
    emirates_id_url: Optional[str] = None
    visa_copy_url: Optional[str] = None
    passport_copy_url: Optional[str] = None
    bank_statement_url: Optional[str] = None


class Questionnaire(CamelModel):
    has_credit_facilities: Optional[bool] = None
    credit_facilities_details: Optional[str] = ""
    has_defaulted_payments: Optional[bool] = None
    defaulted_payments_details: Optional[str] = ""
    purchase_orders_before_delivery: Optional[bool] = None
    financially_stable: Optional[bool] = None
    preferred_communication: Optional[str] = ""


class CreditDeclaration(CamelModel):
    agreed: Optional[bool] = False
    name: Optional[str] = ""
    designation: Optional[str] = ""
    signature_url: Optional[str] = ""
    date: Optional[str] = ""


# Up to this many trade references are kept on a credit application
MAX_CREDIT_TRADE_REFERENCES = 5


class CreditApplicationDraft(CamelModel):
    company_info: Optional[CompanyInfo] = None
    business_details: Optional[BusinessDetails] = None
    credit_request: Optional[CreditRequestBlock] = None
    bank_details: Optional[BankDetails] = None
    trade_references: Optional[list[CreditTradeReference]] = Field(None, max_length=MAX_CREDIT_TRADE_REFERENCES)
    documents: Optional[CreditDocuments] = None
    questionnaire: Optional[Questionnaire] = None
    declaration: Optional[CreditDeclaration] = None


class CreditSubmit(CamelModel):
    confirm: bool = False
    application: Optional[CreditApplicationDraft] = None
