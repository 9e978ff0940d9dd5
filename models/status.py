"""
Status values shared by the SQLAlchemy models and the pydantic schemas.
"""
import enum


class ClientStatus(str, enum.Enum):
    CREATED = "CREATED"
    CREDENTIALS_SENT = "CREDENTIALS_SENT"
    SENT = "SENT"
    FINISHED = "FINISHED"


class CreditRequestStatus(str, enum.Enum):
    NONE = "none"
    REQUESTED = "requested"
    APPROVED = "approved"


class CreditStatus(str, enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"


REG_REOPEN_PENDING = "REG_REOPEN_PENDING"
CREDIT_REOPEN_PENDING = "CREDIT_REOPEN_PENDING"


class Role(str, enum.Enum):
    ADMIN = "admin"
    CLIENT = "client"
