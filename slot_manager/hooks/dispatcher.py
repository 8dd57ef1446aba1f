# slot_manager/hooks/dispatcher.py
"""Named-event subscription and synchronous dispatch."""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List, Union

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]


class HostEventType(Enum):
    """Host application events the slot manager listens to."""

    APP_READY = "app_ready"
    GENERATE_BEFORE_COMBINE_PROMPTS = "generate_before_combine_prompts"
    TEXT_COMPLETION_SETTINGS_READY = "text_completion_settings_ready"

    # Manual actions from the settings panel
    UPDATE_SLOT_COUNT = "update_slot_count"
    RELEASE_SLOT = "release_slot"
    RELEASE_ALL_SLOTS = "release_all_slots"


EventName = Union[HostEventType, str]


def _event_name(event: EventName) -> str:
    return event.value if isinstance(event, HostEventType) else event


class EventDispatcher:
    """
    Calls every handler registered for an event, in registration order.

    Handlers run to completion before ``dispatch`` returns; exceptions
    propagate to the caller.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def on(self, event: EventName, handler: Handler) -> None:
        self._handlers[_event_name(event)].append(handler)

    def off(self, event: EventName, handler: Handler) -> None:
        handlers = self._handlers.get(_event_name(event), [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers(self, event: EventName) -> List[Handler]:
        return list(self._handlers.get(_event_name(event), []))

    def dispatch(self, event: EventName, payload: Any = None) -> List[Any]:
        """Run handlers for ``event`` and return their results."""
        name = _event_name(event)
        handlers = self.handlers(name)
        if not handlers:
            logger.debug(f"[dispatcher] No handlers for {name}")
            return []
        return [handler(payload) for handler in handlers]
