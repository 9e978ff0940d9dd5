from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, func

from database import Base
from models.status import ClientStatus


class RegistrationForm(Base):
    __tablename__ = "client_forms"

    # Same identifier as the owning ClientProfile
    id = Column(String(64), ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True, index=True)
    status = Column(String(32), nullable=False, default=ClientStatus.CREATED.value, index=True)
    # Sections are stored snake_case, one JSON column each
    section_a = Column(JSON, nullable=False, default=dict)
    section_b = Column(JSON, nullable=False, default=list)
    section_c = Column(JSON, nullable=False, default=list)
    section_d = Column(JSON, nullable=False, default=list)
    section_e = Column(JSON, nullable=False, default=dict)
    section_f = Column(JSON, nullable=False, default=dict)
    section_g = Column(JSON, nullable=False, default=list)
    section_h = Column(JSON, nullable=False, default=list)
    uploads = Column(JSON, nullable=False, default=dict)
    declaration_agreed = Column(Boolean, nullable=False, default=False)
    final_signatory_name = Column(String(256), nullable=False, default="")
    final_signatory_designation = Column(String(256), nullable=False, default="")
    final_signatory_date = Column(String(32), nullable=False, default="")
    office_use = Column(JSON, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
