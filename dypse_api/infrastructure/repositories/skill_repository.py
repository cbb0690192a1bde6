"""Persistence layer for the skill catalog and user skills."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from dypse_api.domain.entities import UserSkill
from dypse_api.infrastructure.models import SkillModel, UserSkillModel


class SkillRepository:
    """Maintain the skill catalog and the skills attached to each user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_or_create_skill_id(self, name: str) -> int:
        normalized = " ".join(name.split())
        model = (
            self.session.query(SkillModel)
            .filter(func.lower(SkillModel.name) == normalized.lower())
            .first()
        )
        if model is None:
            model = SkillModel(name=normalized)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return model.id

    def upsert_user_skill(self, user_id: int, skill_id: int, level: str | None) -> UserSkill:
        model = self._get_user_skill_model(user_id, skill_id)
        if model is None:
            model = UserSkillModel(user_id=user_id, skill_id=skill_id)
        model.level = level
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def remove_user_skill(self, user_id: int, skill_id: int) -> UserSkill | None:
        """Delete the user's skill and return what was removed, if anything."""

        model = self._get_user_skill_model(user_id, skill_id)
        if model is None:
            return None
        removed = self._to_entity(model)
        self.session.delete(model)
        self.session.commit()
        return removed

    def _get_user_skill_model(self, user_id: int, skill_id: int) -> UserSkillModel | None:
        return (
            self.session.query(UserSkillModel)
            .filter(UserSkillModel.user_id == user_id)
            .filter(UserSkillModel.skill_id == skill_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: UserSkillModel) -> UserSkill:
        return UserSkill(
            skill_id=model.skill_id,
            skill_name=model.skill.name,
            level=model.level,
        )


__all__ = ["SkillRepository"]
