from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Text, func

from database import Base
from models.status import CreditStatus


class CreditApplication(Base):
    __tablename__ = "credit_applications"

    id = Column(String(64), ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True, index=True)
    status = Column(String(16), nullable=False, default=CreditStatus.DRAFT.value, index=True)
    company_info = Column(JSON, nullable=False, default=dict)
    business_details = Column(JSON, nullable=False, default=dict)
    credit_request = Column(JSON, nullable=False, default=dict)
    bank_details = Column(JSON, nullable=False, default=dict)
    trade_references = Column(JSON, nullable=False, default=list)
    documents = Column(JSON, nullable=False, default=dict)
    questionnaire = Column(JSON, nullable=False, default=dict)
    declaration = Column(JSON, nullable=False, default=dict)
    reopen_requested = Column(Boolean, nullable=False, default=False)
    attested_document_url = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
