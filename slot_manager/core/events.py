"""Event emitters for the slot pool."""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List

from slot_manager.core.events_model import SlotEvent

logger = logging.getLogger(__name__)


ALLOWED_EVENTS = {
    "slots.resized",
    "slot.acquired",
    "slot.released",
    "slots.released_all",
}


def validate_event(event: SlotEvent) -> None:
    if event.event_type not in ALLOWED_EVENTS:
        raise ValueError(f"Invalid event type: {event.event_type}")
    if event.capacity < 0:
        raise ValueError("Event capacity must not be negative")


class EventEmitter(ABC):
    """Abstract event emitter."""

    @abstractmethod
    def emit(self, events: Iterable[SlotEvent]) -> None:
        """Emit one or more events."""
        pass


class LoggingEventEmitter(EventEmitter):
    """Writes every event to the debug log."""

    def emit(self, events: Iterable[SlotEvent]) -> None:
        for event in events:
            validate_event(event)
            logger.debug(
                f"[EVENT] {event.event_type} | capacity={event.capacity} "
                f"slot={event.slot_index} key={event.key} {event.metadata}"
            )


class RecordingEventEmitter(EventEmitter):
    """Keeps events in memory."""

    def __init__(self):
        self.events: List[SlotEvent] = []

    def emit(self, events: Iterable[SlotEvent]) -> None:
        for event in events:
            validate_event(event)
            self.events.append(event)

    def event_types(self) -> List[str]:
        return [e.event_type for e in self.events]


class MultiEventEmitter(EventEmitter):
    """Fan-out to multiple emitters."""

    def __init__(self, emitters: Iterable[EventEmitter] = ()):
        self._emitters = list(emitters)

    def add(self, emitter: EventEmitter) -> None:
        """Subscribe another emitter."""
        self._emitters.append(emitter)

    def remove(self, emitter: EventEmitter) -> None:
        """Unsubscribe an emitter; unknown emitters are ignored."""
        if emitter in self._emitters:
            self._emitters.remove(emitter)

    def emit(self, events: Iterable[SlotEvent]) -> None:
        """Emit to all emitters."""
        events = list(events)
        for emitter in self._emitters:
            emitter.emit(events)


class NullEventEmitter(EventEmitter):
    """No-op emitter (used when events are not needed)."""

    def emit(self, events: Iterable[SlotEvent]) -> None:
        """Do nothing."""
        pass
