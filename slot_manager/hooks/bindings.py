# slot_manager/hooks/bindings.py
"""Wires host events to slot pool operations."""

import logging
from typing import Any, Dict, Optional

from slot_manager.core.errors import SlotInvalidArgumentError
from slot_manager.core.pool import SlotPool
from slot_manager.hooks.dispatcher import EventDispatcher, HostEventType

logger = logging.getLogger(__name__)

SLOT_PARAM = "id_slot"


class SlotManagerHooks:
    """
    Event handlers for the slot pool.

    - app ready / update count -> resize to the default slot count
    - before prompt assembly -> acquire a slot for the character
    - completion settings ready -> put that slot into ``id_slot``
    - release / release all -> free slots
    """

    def __init__(self, pool: SlotPool, default_slots: Optional[int] = None):
        self._pool = pool
        self._default_slots = default_slots
        self.current_slot: Optional[int] = None

    def register(self, dispatcher: EventDispatcher) -> None:
        dispatcher.on(HostEventType.APP_READY, self.on_app_ready)
        dispatcher.on(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, self.on_generate)
        dispatcher.on(HostEventType.TEXT_COMPLETION_SETTINGS_READY, self.on_completion_settings)
        dispatcher.on(HostEventType.UPDATE_SLOT_COUNT, self.on_update_count)
        dispatcher.on(HostEventType.RELEASE_SLOT, self.on_release)
        dispatcher.on(HostEventType.RELEASE_ALL_SLOTS, self.on_release_all)

    # -------------------------
    # LIFECYCLE
    # -------------------------

    def on_app_ready(self, _payload: Any = None) -> None:
        self._pool.resize(self._default_slots)
        self._forget_stale_slot()

    def on_update_count(self, payload: Any = None) -> None:
        total = None
        if isinstance(payload, dict):
            total = payload.get("total_slots")
        self._pool.resize(total if total is not None else self._default_slots)
        self._forget_stale_slot()

    def _forget_stale_slot(self) -> None:
        if self.current_slot is not None and self.current_slot >= self._pool.capacity:
            logger.debug(f"[hooks] Slot {self.current_slot} no longer exists, clearing it")
            self.current_slot = None

    # -------------------------
    # GENERATION
    # -------------------------

    def on_generate(self, data: Dict[str, Any]) -> int:
        if not isinstance(data, dict) or "char" not in data:
            raise SlotInvalidArgumentError("Generation payload must carry 'char'")
        self.current_slot = self._pool.acquire(data["char"])
        return self.current_slot

    def on_completion_settings(self, params: Dict[str, Any]) -> Dict[str, Any]:
        # Settings restored behind our back can shrink the pool too
        self._forget_stale_slot()
        if self.current_slot is None:
            logger.debug("[hooks] No slot acquired yet, leaving id_slot unset")
            return params
        params[SLOT_PARAM] = self.current_slot
        return params

    # -------------------------
    # MANUAL ACTIONS
    # -------------------------

    def on_release(self, payload: Any) -> None:
        index = payload.get("slot") if isinstance(payload, dict) else payload
        if isinstance(index, str):
            try:
                index = int(index)
            except ValueError:
                raise SlotInvalidArgumentError(f"Invalid slot index {index!r}")
        self._pool.release(index)
        if index == self.current_slot:
            self.current_slot = None

    def on_release_all(self, _payload: Any = None) -> None:
        self._pool.release_all()
        self.current_slot = None
