"""Persistence layer for platform accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from dypse_api.domain.entities import User
from dypse_api.infrastructure.models import UserModel
from dypse_api.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .role_repository import RoleRepository


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Store accounts; emails are kept lowercase and compared case-insensitively."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == _normalize_email(email))
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def email_exists(self, email: str) -> bool:
        query = self.session.query(UserModel.id).filter(
            func.lower(UserModel.email) == _normalize_email(email)
        )
        return self.session.query(query.exists()).scalar()

    def create(self, user: User) -> User:
        model = UserModel(
            role_id=user.role.id,
            email=_normalize_email(user.email),
            password=user.password,
            is_active=user.is_active,
            created_at=ensure_app_naive_datetime(user.created_at or now_in_app_timezone()),
        )
        self._apply_contact_fields(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        """Persist the editable contact fields of ``user``."""

        model = self._require(user.id)
        self._apply_contact_fields(model, user)
        model.updated_at = ensure_app_naive_datetime(user.updated_at or now_in_app_timezone())
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_last_login(self, user_id: int, when: datetime) -> None:
        model = self._require(user_id)
        model.last_login = ensure_app_naive_datetime(when)
        self.session.commit()

    def _require(self, user_id: int | None) -> UserModel:
        model = self.session.get(UserModel, user_id) if user_id is not None else None
        if model is None:
            raise LookupError(f"User {user_id} not found")
        return model

    @staticmethod
    def _apply_contact_fields(model: UserModel, user: User) -> None:
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.phone = user.phone

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        if model.role is None:
            raise ValueError(f"User {model.id} has no role")
        return User(
            id=model.id,
            role=RoleRepository.to_entity(model.role),
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            password=model.password,
            phone=model.phone,
            last_login=ensure_app_timezone(model.last_login),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            is_active=model.is_active,
        )


__all__ = ["UserRepository"]
