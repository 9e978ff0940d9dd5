from sqlalchemy import Column, DateTime, String, func

from database import Base


class Identity(Base):
    """Local record of an Identity Provider account issued to a client."""

    __tablename__ = "identities"

    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
