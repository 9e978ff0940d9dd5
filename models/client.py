from sqlalchemy import Boolean, Column, DateTime, String, func

from database import Base
from models.status import ClientStatus, CreditRequestStatus


class ClientProfile(Base):
    __tablename__ = "clients"

    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(320), nullable=False, index=True)
    company_name = Column(String(256), nullable=False, default="")
    status = Column(String(32), nullable=False, default=ClientStatus.CREATED.value, index=True)
    credit_request_status = Column(String(16), nullable=False, default=CreditRequestStatus.NONE.value)
    has_credit_access = Column(Boolean, nullable=False, default=False)
    # Pending flags; null when nothing is pending
    reopen_status = Column(String(32), nullable=True)
    credit_reopen_status = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
