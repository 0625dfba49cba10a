# backend/modules/auth/models/admin_models.py

from sqlalchemy import Boolean, Column, String

from core.database import Base
from core.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class AdminUser(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Administrator account able to own suggestion boxes"""
    __tablename__ = "administrators"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
