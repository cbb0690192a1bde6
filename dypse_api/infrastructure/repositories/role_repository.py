"""Persistence layer for account roles."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from dypse_api.domain.entities import Role, normalize_role_alias
from dypse_api.infrastructure.models import RoleModel


class RoleRepository:
    """Look up roles by alias and seed the built-in ones."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_alias(self, alias: str) -> Role | None:
        model = (
            self.session.query(RoleModel)
            .filter(RoleModel.alias == normalize_role_alias(alias))
            .one_or_none()
        )
        return self.to_entity(model) if model else None

    def list_aliases(self) -> set[str]:
        return {alias for (alias,) in self.session.query(RoleModel.alias)}

    def add_missing(self, roles: Iterable[tuple[str, str]]) -> int:
        """Insert every ``(name, alias)`` pair whose alias is not stored yet."""

        existing = self.list_aliases()
        missing = [
            RoleModel(name=name, alias=normalize_role_alias(alias))
            for name, alias in roles
            if normalize_role_alias(alias) not in existing
        ]
        if missing:
            self.session.add_all(missing)
            self.session.commit()
        return len(missing)

    @staticmethod
    def to_entity(model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name, alias=model.alias)


__all__ = ["RoleRepository"]
