"""Shared column mixins."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func


def _timestamp_column(**kwargs) -> Column:
    return Column(DateTime(timezone=True), server_default=func.now(), nullable=False, **kwargs)


class TimestampMixin:
    """created_at / updated_at maintained by the database."""

    created_at = _timestamp_column()
    updated_at = _timestamp_column(onupdate=func.now())


class SoftDeleteMixin:
    """Rows stay in the table with deleted_at set; queries filter on not_deleted()."""

    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @classmethod
    def not_deleted(cls):
        return cls.deleted_at.is_(None)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = datetime.now(UTC)
