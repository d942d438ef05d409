"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from cookai.database import Base
from cookai.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Account that owns recipes, grocery lists and one taste profile."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)

    # Relationships
    taste_profile = relationship(
        "TasteProfileRecord", uselist=False, cascade="all, delete-orphan", backref="user"
    )
