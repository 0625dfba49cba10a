"""
Authentication for the suggestion box API.

Administrators authenticate with a JWT bearer token. Every request is
resolved to an actor: ``Administrator`` when the token is valid and belongs
to an active account, ``Anonymous`` otherwise. Resolving the actor never
fails; operations that need an administrator reject anonymous actors
themselves.
"""

import secrets
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

SECRET_KEY = settings.jwt_secret_key
ALGORITHM = settings.jwt_algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.jwt_access_token_expire_minutes

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
security = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    """Token payload data."""

    user_id: Optional[str] = None
    email: Optional[str] = None
    token_id: Optional[str] = None


class Anonymous(BaseModel):
    """Caller without a valid administrator token."""

    model_config = ConfigDict(frozen=True)

    @property
    def is_administrator(self) -> bool:
        return False


class Administrator(BaseModel):
    """Caller holding a valid token for an active administrator account."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None

    @property
    def is_administrator(self) -> bool:
        return True


Actor = Union[Anonymous, Administrator]

ANONYMOUS = Anonymous()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def generate_token_id() -> str:
    """Generate a unique token ID for tracking."""
    return secrets.token_urlsafe(32)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT access token."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode.update(
        {
            "exp": expire,
            "type": "access",
            "jti": generate_token_id(),
            "iat": now,
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
        }
    )

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str, token_type: str = "access") -> Optional[TokenData]:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        token_type: Expected token type

    Returns:
        TokenData if valid, None otherwise
    """
    jwt_options = {
        "verify_signature": True,
        "verify_exp": True,
        "verify_iat": True,
        "verify_iss": True,
        "verify_aud": True,
        "require_exp": True,
        "require_iat": True,
    }

    try:
        payload = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            options={**jwt_options, "leeway": settings.jwt_leeway_seconds},
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        return None
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    if payload.get("type") != token_type:
        logger.warning(
            f"Token type mismatch: expected {token_type}, got {payload.get('type')}"
        )
        return None

    sub = payload.get("sub")
    if not sub:
        return None

    return TokenData(
        user_id=str(sub),
        email=payload.get("email"),
        token_id=payload.get("jti"),
    )


def resolve_actor(token: Optional[str], db: Session) -> Actor:
    """Map a raw bearer token to an actor, consulting the account store."""
    from modules.auth.models.admin_models import AdminUser

    if not token:
        return ANONYMOUS

    token_data = verify_token(token)
    if token_data is None:
        return ANONYMOUS

    account = db.query(AdminUser).filter(AdminUser.id == token_data.user_id).first()
    if account is None or not account.is_active:
        logger.warning(f"Token for unknown or inactive administrator {token_data.user_id}")
        return ANONYMOUS

    return Administrator(id=account.id, email=account.email)


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Actor:
    """Resolve the caller; anonymous when no usable token is presented."""
    token = credentials.credentials if credentials else None
    return resolve_actor(token, db)


async def require_administrator(actor: Actor = Depends(get_current_actor)) -> Administrator:
    """Reject anonymous callers before the request body is examined."""
    if not actor.is_administrator:
        raise AuthenticationError()
    return actor
