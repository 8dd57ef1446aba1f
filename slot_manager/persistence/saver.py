# slot_manager/persistence/saver.py
"""
Debounced settings saver.

Subscribes to pool events, marks the settings dirty and writes them to the
store after a quiet period. ``close()`` flushes whatever is still pending.
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, Optional

from slot_manager.core.events import EventEmitter, validate_event
from slot_manager.core.events_model import SlotEvent
from slot_manager.core.repository import SettingsRepository

logger = logging.getLogger(__name__)


class DebouncedSettingsSaver(EventEmitter):
    """Coalesces bursts of pool changes into one settings write."""

    def __init__(
        self,
        *,
        repository: SettingsRepository,
        name: str,
        snapshot: Callable[[], Dict[str, Any]],
        delay_seconds: float = 1.0,
    ):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")

        self._repo = repository
        self._name = name
        self._snapshot = snapshot
        self._delay = delay_seconds

        self._lock = threading.RLock()
        self._save_lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._dirty = False
        self._closed = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    def emit(self, events: Iterable[SlotEvent]) -> None:
        for event in events:
            validate_event(event)
        self.mark_dirty()

    def mark_dirty(self) -> None:
        """Schedule a save unless one is already pending. Never writes inline."""
        with self._lock:
            self._dirty = True
            if self._timer is None:
                delay = 0 if self._closed else self._delay
                self._timer = threading.Timer(delay, self.flush)
                self._timer.daemon = True
                self._timer.start()

    def flush(self) -> bool:
        """
        Write pending settings now.

        Returns True if something was saved. A failed write is logged and
        the saver stays dirty so the next flush tries again.
        """
        # Writers queue on _save_lock; _lock is only held for bookkeeping
        with self._save_lock:
            with self._lock:
                if self._timer is not None:
                    self._timer.cancel()
                    self._timer = None

                if not self._dirty:
                    return False

                data = self._snapshot()
                self._dirty = False

            try:
                self._repo.save(self._name, data)
            except Exception as e:
                with self._lock:
                    self._dirty = True
                logger.error(f"[saver] Failed to save '{self._name}': {e}", exc_info=True)
                return False

        logger.debug(f"[saver] Flushed '{self._name}'")
        return True

    def close(self) -> None:
        """Flush pending changes; later changes are saved without delay."""
        with self._lock:
            self._closed = True
        self.flush()
        logger.info(f"[saver] Closed '{self._name}'")
