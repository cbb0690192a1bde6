"""Credential check behind ``POST /auth/token``."""

from dataclasses import dataclass
from enum import Enum, auto

from sqlalchemy.orm import Session

from dypse_api.domain.entities import User
from dypse_api.infrastructure.repositories import UserRepository
from dypse_api.infrastructure.security import verify_password


class AuthenticationStatus(Enum):
    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


@dataclass(frozen=True)
class AuthenticationResult:
    status: AuthenticationStatus
    user: User | None = None

    @property
    def ok(self) -> bool:
        return self.status is AuthenticationStatus.SUCCESS


def authenticate_user(session: Session, *, email: str, password: str) -> AuthenticationResult:
    """Check ``password`` for the account registered under ``email``.

    Unknown emails and wrong passwords are reported the same way. A deactivated
    account is only reported as such once the password matched.
    """

    user = UserRepository(session).get_by_email(email)
    if user is None or not verify_password(password, user.password):
        return AuthenticationResult(AuthenticationStatus.INVALID_CREDENTIALS)
    if not user.is_active:
        return AuthenticationResult(AuthenticationStatus.INACTIVE, user)
    return AuthenticationResult(AuthenticationStatus.SUCCESS, user)
