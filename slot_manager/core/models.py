#slot_manager\core\models.py

"""Slot value model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Slot:
    """A single numbered slot: either free or occupied by one key."""

    slot_id: int
    key: Optional[str] = None
    last_used: Optional[datetime] = None

    def is_free(self) -> bool:
        """Check if slot is available."""
        return self.key is None

    def bind(self, key: str, when: datetime) -> None:
        """Assign key to this slot and stamp its last use."""
        self.key = key
        self.last_used = when

    def release(self) -> None:
        """Release slot."""
        self.key = None
        self.last_used = None

    def __repr__(self) -> str:
        status = "free" if self.is_free() else f"occupied({self.key})"
        return f"<Slot(id={self.slot_id}, {status})>"
