"""Self-service sign up for youth and employer accounts."""

from sqlalchemy.orm import Session

from dypse_api.application.use_cases.activity_events import record_account_created
from dypse_api.domain.entities import ROLE_YOUTH, User
from dypse_api.infrastructure.repositories import (
    ProfileRepository,
    RoleRepository,
    UserRepository,
)
from dypse_api.infrastructure.security import get_password_hash


def register_user(
    session: Session,
    *,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    role_alias: str = ROLE_YOUTH,
    phone: str | None = None,
) -> User:
    """Create the account, an empty profile for youth, and the welcome activity.

    Raises ``ValueError`` for a taken email, a blank name, or a role that
    cannot sign up on its own (admin, verifier).
    """

    first_name, last_name = first_name.strip(), last_name.strip()
    if not first_name or not last_name:
        raise ValueError("First and last name are required")

    users = UserRepository(session)
    if users.email_exists(email):
        raise ValueError("Email is already registered")

    role = RoleRepository(session).get_by_alias(role_alias)
    if role is None or not role.can_self_register:
        raise ValueError("Role not allowed for self registration")

    created = users.create(
        User(
            id=None,
            role=role,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=get_password_hash(password),
            phone=(phone or "").strip() or None,
            last_login=None,
            created_at=None,
            updated_at=None,
            is_active=True,
        )
    )
    if created.is_youth():
        ProfileRepository(session).get_or_create(created.id)
    record_account_created(session, user_id=created.id)
    return created
