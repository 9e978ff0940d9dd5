from schemas.admin import ClientCreate, ClientSummary, CreditAccessUpdate
from schemas.common import CamelModel
from schemas.credit import (
    BankDetails,
    BusinessDetails,
    CompanyInfo,
    CreditApplicationDraft,
    CreditDeclaration,
    CreditDocuments,
    CreditRequestBlock,
    CreditSubmit,
    CreditTradeReference,
    Questionnaire,
)
from schemas.registration import (
    BankReference,
    ContactBlock,
    OfficeUse,
    OwnerEntry,
    RegistrationFormDraft,
    RegistrationSubmit,
    SectionA,
    Signatory,
    TradeReference,
    Uploads,
)
from schemas.views import (
    AdminClientView,
    AdminSummary,
    ClientDashboardView,
    CreditTabView,
    DocumentSlotView,
    FieldErrorView,
    StepValidationResult,
)

__all__ = [
    "CamelModel",
    "ClientCreate",
    "ClientSummary",
    "CreditAccessUpdate",
    "BankDetails",
    "BusinessDetails",
    "CompanyInfo",
    "CreditApplicationDraft",
    "CreditDeclaration",
    "CreditDocuments",
    "CreditRequestBlock",
    "CreditSubmit",
    "CreditTradeReference",
    "Questionnaire",
    "BankReference",
    "ContactBlock",
    "OfficeUse",
    "OwnerEntry",
    "RegistrationFormDraft",
    "RegistrationSubmit",
    "SectionA",
    "Signatory",
    "TradeReference",
    "Uploads",
    "AdminClientView",
    "AdminSummary",
    "ClientDashboardView",
    "CreditTabView",
    "DocumentSlotView",
    "FieldErrorView",
    "StepValidationResult",
]
