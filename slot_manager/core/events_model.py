"""Event models for the slot pool."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SlotEvent:
    """Change notification emitted after every pool mutation."""

    event_type: str
    capacity: int
    slot_index: Optional[int] = None
    key: Optional[str] = None
    timestamp: datetime = field(default_factory=_now)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def slots_resized(capacity: int, previous_capacity: int):
        """Pool capacity set (grown, shrunk or unchanged)."""
        return SlotEvent(
            event_type="slots.resized",
            capacity=capacity,
            metadata={
                "previous_capacity": previous_capacity,
            }
        )

    @staticmethod
    def slot_acquired(
        capacity: int,
        index: int,
        key: str,
        reused: bool,
        evicted: Optional[str] = None,
    ):
        """Key bound to a slot."""
        return SlotEvent(
            event_type="slot.acquired",
            capacity=capacity,
            slot_index=index,
            key=key,
            metadata={
                "reused": reused,
                "evicted": evicted,
            }
        )

    @staticmethod
    def slot_released(capacity: int, index: int, key: Optional[str]):
        """Single slot cleared. ``key`` is None when it was already free."""
        return SlotEvent(
            event_type="slot.released",
            capacity=capacity,
            slot_index=index,
            key=key,
        )

    @staticmethod
    def slots_released_all(capacity: int, released: int):
        """Every slot cleared in one step."""
        return SlotEvent(
            event_type="slots.released_all",
            capacity=capacity,
            metadata={
                "released": released,
            }
        )
