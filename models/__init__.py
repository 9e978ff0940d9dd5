from models.client import ClientProfile
from models.credit import CreditApplication
from models.identity import Identity
from models.registration import RegistrationForm
from models.status import (
    CREDIT_REOPEN_PENDING,
    REG_REOPEN_PENDING,
    ClientStatus,
    CreditRequestStatus,
    CreditStatus,
    Role,
)

__all__ = [
    "ClientProfile",
    "CreditApplication",
    "Identity",
    "RegistrationForm",
    "ClientStatus",
    "CreditRequestStatus",
    "CreditStatus",
    "Role",
    "REG_REOPEN_PENDING",
    "CREDIT_REOPEN_PENDING",
]
