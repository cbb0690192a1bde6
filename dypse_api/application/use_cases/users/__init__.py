"""Account registration and login."""

from .authenticate_user import AuthenticationResult, AuthenticationStatus, authenticate_user
from .record_login import record_login
from .register_user import register_user

__all__ = [
    "AuthenticationResult",
    "AuthenticationStatus",
    "authenticate_user",
    "record_login",
    "register_user",
]
