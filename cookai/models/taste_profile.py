"""Persisted taste profile model."""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String

from cookai.database import Base
from cookai.models.mixins import TimestampMixin


class TasteProfileRecord(Base, TimestampMixin):
    """Serialized taste profile, one row per user.

    `data` holds TasteProfile.to_dict() as-is; last write wins.
    """

    __tablename__ = "taste_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    storage_key = Column(String(100), nullable=False)
    data = Column(JSON, nullable=False)
