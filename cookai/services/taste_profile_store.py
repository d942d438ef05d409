"""Load and save taste profiles: the persistence boundary of the aggregator."""

import logging

from sqlalchemy.orm import Session

from cookai.config import get_settings
from cookai.models.taste_profile import TasteProfileRecord
from cookai.services.taste_profile import TasteProfile, TasteProfileAggregator

logger = logging.getLogger(__name__)


class TasteProfileStore:
    """Database-backed storage for per-user taste profiles."""

    def __init__(self, db: Session):
        self.db = db
        self.storage_key = get_settings().taste_profile_storage_key

    def load(self, user_id: int) -> TasteProfile:
        """Get the user's profile, creating a default one on first access."""
        record = self._get_record(user_id)
        if record is None:
            profile = TasteProfile()
            self.save(user_id, profile)
            logger.info(f"Created default taste profile for user {user_id}")
            return profile
        return TasteProfile.from_dict(record.data)

    def aggregator(self, user_id: int) -> TasteProfileAggregator:
        """Get an aggregator bound to the user's stored profile."""
        return TasteProfileAggregator(self.load(user_id))

    def save(self, user_id: int, profile: TasteProfile) -> None:
        """Persist the profile as-is, replacing whatever was stored."""
        record = self._get_record(user_id)
        data = profile.to_dict()
        if record is None:
            record = TasteProfileRecord(user_id=user_id, storage_key=self.storage_key, data=data)
            self.db.add(record)
        else:
            # Assign a new dict so the JSON column is flagged dirty
            record.data = data
            record.storage_key = self.storage_key
        self.db.commit()

    def reset(self, user_id: int) -> TasteProfile:
        """Overwrite the user's profile with defaults."""
        profile = TasteProfile()
        self.save(user_id, profile)
        logger.info(f"Reset taste profile for user {user_id}")
        return profile

    def _get_record(self, user_id: int) -> TasteProfileRecord | None:
        return (
            self.db.query(TasteProfileRecord)
            .filter(TasteProfileRecord.user_id == user_id)
            .first()
        )
