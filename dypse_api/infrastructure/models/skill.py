"""SQLAlchemy models for the skill catalog and user skill levels."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from dypse_api.infrastructure.database import Base


class SkillModel(Base):
    """Catalog entry for a named skill."""

    __tablename__ = "skill"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(80), nullable=False, unique=True, index=True)


class UserSkillModel(Base):
    """Skill held by a user, with an optional proficiency level."""

    __tablename__ = "user_skill"
    __table_args__ = (UniqueConstraint("user_id", "skill_id", name="uq_user_skill"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    skill_id = Column(Integer, ForeignKey("skill.id"), nullable=False)
    level = Column(String(30), nullable=True)

    skill = relationship("SkillModel", lazy="joined")


__all__ = ["SkillModel", "UserSkillModel"]
