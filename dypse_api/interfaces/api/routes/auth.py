"""Sign up and token login."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from dypse_api.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    record_login,
    register_user,
)
from dypse_api.config import get_settings
from dypse_api.domain.entities import User
from dypse_api.infrastructure.database import get_db
from dypse_api.infrastructure.security import create_access_token, password_signature
from dypse_api.interfaces.api.schemas import RegisterRequest, Token, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

_LOGIN_ERRORS = {
    AuthenticationStatus.INVALID_CREDENTIALS: (
        status.HTTP_401_UNAUTHORIZED,
        "Incorrect email or password",
    ),
    AuthenticationStatus.INACTIVE: (status.HTTP_403_FORBIDDEN, "Inactive user"),
}


def _issue_token(user: User) -> Token:
    lifetime = timedelta(minutes=get_settings().access_token_expire_minutes)
    access_token = create_access_token(
        data={
            "sub": user.email,
            "role": user.role.alias,
            "pwd_sig": password_signature(user),
        },
        expires_delta=lifetime,
    )
    return Token(
        access_token=access_token,
        role=user.role.alias,
        expires_in=int(lifetime.total_seconds()),
    )


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> UserRead:
    """Create a youth or employer account."""

    try:
        user = register_user(
            db,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            password=payload.password,
            role_alias=payload.role,
            phone=payload.phone,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Registered %s account %s", user.role.alias, user.id)
    return UserRead.model_validate(user)


# OAuth2PasswordRequestForm names the email field "username".
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """Exchange email and password for a bearer token and log the login."""

    result = authenticate_user(db, email=form_data.username, password=form_data.password)
    if not result.ok:
        status_code, detail = _LOGIN_ERRORS[result.status]
        raise HTTPException(
            status_code=status_code,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = _issue_token(result.user)
    record_login(db, user=result.user)
    return token


__all__ = ["router"]
