# slot_manager/core/pool.py
"""Fixed-capacity slot pool with least-recently-used eviction."""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from slot_manager.core.errors import (
    SlotCapacityExhaustedError,
    SlotInvalidArgumentError,
    SlotOutOfRangeError,
)
from slot_manager.core.events import EventEmitter, NullEventEmitter
from slot_manager.core.events_model import SlotEvent
from slot_manager.core.models import Slot

logger = logging.getLogger(__name__)

DEFAULT_SLOTS = 2


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SlotPool:
    """
    Assigns numbered slots to string keys.

    - A key that already owns a slot keeps it.
    - Otherwise the lowest-index free slot is claimed.
    - Otherwise the slot with the oldest ``last_used`` is evicted
      (ties go to the lowest index).

    Every public operation runs under one lock. Events are emitted after
    the lock is released, so emitters may read the pool back.
    """

    def __init__(
        self,
        *,
        emitter: Optional[EventEmitter] = None,
        clock: Callable[[], datetime] = utcnow,
        default_slots: int = DEFAULT_SLOTS,
    ):
        _validate_capacity(default_slots)

        self._slots: List[Slot] = []
        self._lock = threading.RLock()
        self._emitter = emitter or NullEventEmitter()
        self._clock = clock
        self.default_slots = default_slots

    # -------------------------
    # RESIZE
    # -------------------------

    def resize(self, total_slots: Optional[int] = None) -> None:
        """
        Set the number of slots.

        Slots below ``min(old, new)`` are left untouched; new slots start
        free and the tail is discarded when shrinking.
        """
        if total_slots is None:
            total_slots = self.default_slots
        _validate_capacity(total_slots)

        with self._lock:
            previous = len(self._slots)
            if total_slots < previous:
                del self._slots[total_slots:]
            else:
                self._slots.extend(Slot(i) for i in range(previous, total_slots))
            event = SlotEvent.slots_resized(total_slots, previous)

        logger.debug(f"[slot_pool] {total_slots} slots available")
        self._emit(event)

    # -------------------------
    # ACQUIRE
    # -------------------------

    def acquire(self, key: str) -> int:
        """Return the slot index for ``key``, claiming or evicting one if needed."""
        if not isinstance(key, str) or not key:
            raise SlotInvalidArgumentError("key must be a non-empty string")

        with self._lock:
            if not self._slots:
                raise SlotCapacityExhaustedError("Cannot acquire a slot: pool has no slots")

            index = self._find_index(key)
            reused = index is not None
            if index is None:
                index = self._first_free_index()
            if index is None:
                index = self._least_recent_index()

            slot = self._slots[index]
            evicted = None if reused or slot.is_free() else slot.key
            slot.bind(key, self._clock())
            event = SlotEvent.slot_acquired(len(self._slots), index, key, reused, evicted)

        if evicted is not None:
            logger.info(f"[slot_pool] Evicting {evicted} from slot {index}")
        logger.debug(f"[slot_pool] Acquiring slot {index} for {key}")
        self._emit(event)
        return index

    # -------------------------
    # RELEASE
    # -------------------------

    def release(self, index: int) -> None:
        """Free one slot. Releasing a free slot is a no-op."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise SlotInvalidArgumentError(f"Slot index must be an integer, got {index!r}")

        with self._lock:
            if not 0 <= index < len(self._slots):
                raise SlotOutOfRangeError(
                    f"Slot {index} out of range [0, {len(self._slots)})"
                )
            slot = self._slots[index]
            key = slot.key
            slot.release()
            event = SlotEvent.slot_released(len(self._slots), index, key)

        logger.debug(f"[slot_pool] Releasing slot {index}")
        self._emit(event)

    def release_all(self) -> None:
        """Free every slot; capacity is unchanged."""
        with self._lock:
            released = self._used_count()
            for slot in self._slots:
                slot.release()
            event = SlotEvent.slots_released_all(len(self._slots), released)

        logger.debug("[slot_pool] Releasing all slots")
        self._emit(event)

    # -------------------------
    # QUERIES
    # -------------------------

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def occupants(self) -> List[Optional[str]]:
        with self._lock:
            return [s.key for s in self._slots]

    @property
    def last_used(self) -> List[Optional[datetime]]:
        with self._lock:
            return [s.last_used for s in self._slots]

    def used_count(self) -> int:
        with self._lock:
            return self._used_count()

    def available_count(self) -> int:
        with self._lock:
            return len(self._slots) - self._used_count()

    def occupied(self) -> List[Tuple[int, str]]:
        """(index, key) pairs for every occupied slot, by index."""
        with self._lock:
            return [(s.slot_id, s.key) for s in self._slots if not s.is_free()]

    def snapshot(self) -> List[Slot]:
        """Detached copies of every slot."""
        with self._lock:
            return [replace(s) for s in self._slots]

    def slot_for(self, key: str) -> Optional[int]:
        """Index currently held by ``key`` (no side effects)."""
        with self._lock:
            return self._find_index(key)

    # -------------------------
    # SETTINGS (de)serialization
    # -------------------------

    def to_settings(self) -> Dict[str, Any]:
        """Settings blob: ``{"slots": [...], "slotsUsage": [...]}``."""
        with self._lock:
            return {
                "slots": [s.key for s in self._slots],
                "slotsUsage": [
                    s.last_used.isoformat() if s.last_used else None
                    for s in self._slots
                ],
            }

    def load_settings(self, data: Optional[Dict[str, Any]]) -> None:
        """Replace the whole pool state with a previously saved blob."""
        slots = slots_from_settings(data)

        with self._lock:
            previous = len(self._slots)
            self._slots = slots
            event = SlotEvent.slots_resized(len(slots), previous)

        logger.info(f"[slot_pool] Restored {len(slots)} slots ({self.used_count()} in use)")
        self._emit(event)

    @classmethod
    def from_settings(cls, data: Optional[Dict[str, Any]], **kwargs) -> "SlotPool":
        """Build a pool from a saved blob without emitting events."""
        pool = cls(**kwargs)
        pool._slots = slots_from_settings(data)
        return pool

    # -------------------------
    # INTERNAL
    # -------------------------

    def _find_index(self, key: str) -> Optional[int]:
        for slot in self._slots:
            if slot.key == key:
                return slot.slot_id
        return None

    def _first_free_index(self) -> Optional[int]:
        for slot in self._slots:
            if slot.is_free():
                return slot.slot_id
        return None

    def _least_recent_index(self) -> int:
        # Strict "<" keeps the first minimum, so lower indices win ties.
        # A missing stamp only comes from restored settings; it ranks oldest.
        oldest: Optional[Slot] = None
        for slot in self._slots:
            if slot.last_used is None:
                return slot.slot_id
            if oldest is None or slot.last_used < oldest.last_used:
                oldest = slot
        return oldest.slot_id

    def _used_count(self) -> int:
        return sum(1 for s in self._slots if not s.is_free())

    def _emit(self, event: SlotEvent) -> None:
        self._emitter.emit([event])

    def __repr__(self) -> str:
        return (
            f"<SlotPool(total={self.capacity}, "
            f"used={self.used_count()}, "
            f"available={self.available_count()})>"
        )


def _validate_capacity(total_slots: Any) -> None:
    if isinstance(total_slots, bool) or not isinstance(total_slots, int):
        raise SlotInvalidArgumentError(f"Slot count must be an integer, got {total_slots!r}")
    if total_slots < 0:
        raise SlotInvalidArgumentError(f"Slot count must not be negative, got {total_slots}")


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning(f"[slot_pool] Ignoring unreadable slot timestamp {value!r}")
            return None
    else:
        logger.warning(f"[slot_pool] Ignoring unreadable slot timestamp {value!r}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def slots_from_settings(data: Optional[Dict[str, Any]]) -> List[Slot]:
    """
    Rebuild slots from a settings blob.

    Absent entries default to free. Non-string occupants are treated as
    free, and a key seen twice keeps only its first index.
    """
    if not data:
        return []

    keys = data.get("slots") or []
    usage = data.get("slotsUsage") or []
    if not isinstance(keys, list) or not isinstance(usage, list):
        raise SlotInvalidArgumentError("'slots' and 'slotsUsage' must be lists")

    slots: List[Slot] = []
    seen = set()
    for index, key in enumerate(keys):
        if not isinstance(key, str) or not key:
            slots.append(Slot(index))
            continue
        if key in seen:
            logger.warning(f"[slot_pool] Dropping duplicate key {key} at slot {index}")
            slots.append(Slot(index))
            continue

        seen.add(key)
        stamp = _parse_timestamp(usage[index]) if index < len(usage) else None
        slots.append(Slot(index, key, stamp))

    return slots
