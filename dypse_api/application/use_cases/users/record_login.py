"""Bookkeeping performed after a successful token login."""

from sqlalchemy.orm import Session

from dypse_api.application.use_cases.activity_events import record_login_activity
from dypse_api.domain.entities import User
from dypse_api.infrastructure.repositories import UserRepository
from dypse_api.utils import now_in_app_timezone


def record_login(session: Session, *, user: User) -> None:
    """Stamp ``last_login`` and append a ``login`` activity for ``user``."""

    UserRepository(session).set_last_login(user.id, now_in_app_timezone())
    record_login_activity(session, user_id=user.id)
