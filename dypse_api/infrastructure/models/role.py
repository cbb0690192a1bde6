"""SQLAlchemy model for account roles."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from dypse_api.infrastructure.database import Base


class RoleModel(Base):
    """One of the seeded roles; ``alias`` is the lowercase key used in tokens."""

    __tablename__ = "role"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    alias = Column(String(20), nullable=False, unique=True, index=True)
    users = relationship("UserModel", back_populates="role")


__all__ = ["RoleModel"]
