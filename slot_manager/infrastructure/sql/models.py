#slot_manager\infrastructure\sql\models.py
"""SQLAlchemy ORM models for database tables."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, JSON, String

from slot_manager.infrastructure.sql.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SettingsORM(Base):
    """
    Extension settings table - one opaque JSON blob per extension name.
    """

    __tablename__ = "extension_settings"

    name = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<SettingsORM(name={self.name}, updated_at={self.updated_at})>"
