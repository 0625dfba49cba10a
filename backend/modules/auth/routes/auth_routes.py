"""
Authentication routes for administrators.

Sign-up creates an administrator account, sign-in exchanges email and
password for a bearer token, and ``/auth/me`` echoes the current account.
"""

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from core.auth import Administrator, require_administrator
from core.database import get_db
from core.exceptions import AuthenticationError
from modules.auth.schemas.auth_schemas import (
    AdminUserEnvelope,
    AdminUserResponse,
    SignupRequest,
    Token,
)
from modules.auth.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=AdminUserEnvelope)
async def signup(signup_data: SignupRequest, db: Session = Depends(get_db)):
    """
    Register a new administrator.

    ## Request Body
    - **email**: Login address, unique per administrator
    - **password**: At least 6 characters
    - **name**: Display name
    """
    user = AuthService(db).register_administrator(signup_data)
    return AdminUserEnvelope(user=user)


@router.post("/login", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)
):
    """
    Authenticate an administrator and return a JWT access token.

    ## Request Body (Form Data)
    - **username**: Email address used at sign-up
    - **password**: Password

    ## Example
    ```bash
    curl -X POST "http://localhost:8000/auth/login" \\
         -H "Content-Type: application/x-www-form-urlencoded" \\
         -d "username=admin@example.com&password=secret"
    ```
    """
    auth_service = AuthService(db)
    account = auth_service.authenticate(form_data.username, form_data.password)
    if not account:
        raise AuthenticationError("Incorrect email or password")

    return auth_service.issue_token(account)


@router.get("/me", response_model=AdminUserEnvelope)
async def read_current_administrator(
    actor: Administrator = Depends(require_administrator),
    db: Session = Depends(get_db),
):
    """Get the authenticated administrator's account."""
    account = AuthService(db).get_account(actor.id)
    if account is None:
        raise AuthenticationError()
    return AdminUserEnvelope(user=AdminUserResponse.model_validate(account))
