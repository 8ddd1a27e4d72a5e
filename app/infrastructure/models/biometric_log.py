"""SQLAlchemy model for biometric access attempts."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from app.infrastructure.database import Base
from app.utils import now_naive_utc


class BiometricLogModel(Base):
    __tablename__ = "biometric_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    success = Column(Boolean, nullable=False)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(255), nullable=True)
    access_time = Column(DateTime(), nullable=False, default=now_naive_utc)


__all__ = ["BiometricLogModel"]
