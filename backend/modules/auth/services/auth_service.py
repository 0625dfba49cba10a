# backend/modules/auth/services/auth_service.py

from datetime import timedelta
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.auth import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    create_access_token,
    get_password_hash,
    verify_password,
)
from core.exceptions import StoreError, ValidationError
from modules.auth.models.admin_models import AdminUser
from modules.auth.schemas.auth_schemas import AdminUserResponse, SignupRequest, Token

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "A user with this email address has already been registered"


class AuthService:
    """Administrator accounts: registration, sign-in and token issue"""

    def __init__(self, db: Session):
        self.db = db

    def register_administrator(self, signup: SignupRequest) -> AdminUserResponse:
        email = signup.email.lower()

        existing = self.db.query(AdminUser).filter(AdminUser.email == email).first()
        if existing:
            raise ValidationError(DUPLICATE_EMAIL_MESSAGE)

        account = AdminUser(
            email=email,
            name=signup.name,
            hashed_password=get_password_hash(signup.password),
        )

        try:
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same address
            self.db.rollback()
            raise ValidationError(DUPLICATE_EMAIL_MESSAGE)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error registering administrator: {e}")
            raise StoreError() from e

        logger.info(f"Registered administrator {account.id}")
        return AdminUserResponse.model_validate(account)

    def authenticate(self, email: str, password: str) -> Optional[AdminUser]:
        account = (
            self.db.query(AdminUser).filter(AdminUser.email == email.lower()).first()
        )
        if not account or not account.is_active:
            return None
        if not verify_password(password, account.hashed_password):
            return None
        return account

    def issue_token(
        self, account: AdminUser, expires_delta: Optional[timedelta] = None
    ) -> Token:
        access_token = create_access_token(
            {"sub": account.id, "email": account.email}, expires_delta=expires_delta
        )
        expires_in = (
            int(expires_delta.total_seconds())
            if expires_delta
            else ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )
        return Token(
            access_token=access_token,
            expires_in=expires_in,
            user=AdminUserResponse.model_validate(account),
        )

    def get_account(self, admin_id: str) -> Optional[AdminUser]:
        return self.db.query(AdminUser).filter(AdminUser.id == admin_id).first()
