"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.sql import expression

from app.infrastructure.database import Base


class UserModel(Base):
    """Database representation of the system user."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    department = Column(String(100), nullable=False)
    email = Column(String(120), nullable=True)
    password = Column(String(255), nullable=False)
    is_admin = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    email_notifications = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    in_app_notifications = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
