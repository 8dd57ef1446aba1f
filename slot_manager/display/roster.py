# slot_manager/display/roster.py
"""Character roster shown next to the slot counts."""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional
from urllib.parse import quote

from slot_manager.core.events import EventEmitter, validate_event
from slot_manager.core.events_model import SlotEvent
from slot_manager.core.pool import SlotPool

logger = logging.getLogger(__name__)

NO_AVATAR = "none"


@dataclass(frozen=True)
class Character:
    name: str
    avatar: str = NO_AVATAR


@dataclass(frozen=True)
class SlotRosterEntry:
    slot: int
    name: str
    avatar: str


@dataclass
class SlotRoster:
    used: int = 0
    available: int = 0
    characters: List[SlotRosterEntry] = field(default_factory=list)


class CharacterDirectory(ABC):
    """Lookup of character identities by name."""

    @abstractmethod
    def find(self, name: str) -> Optional[Character]:
        raise NotImplementedError


class InMemoryCharacterDirectory(CharacterDirectory):
    def __init__(self, characters: Iterable[Character] = ()):
        self._characters = {c.name: c for c in characters}

    def add(self, character: Character) -> None:
        self._characters[character.name] = character

    def find(self, name: str) -> Optional[Character]:
        return self._characters.get(name)


def thumbnail_url(avatar: str) -> str:
    return f"/thumbnail?type=avatar&file={quote(avatar)}"


def resolve_avatar(
    directory: CharacterDirectory,
    name: str,
    default_avatar: str,
) -> str:
    """Avatar thumbnail for ``name``; lookup problems fall back to the default."""
    try:
        character = directory.find(name)
    except Exception as e:
        logger.warning(f"[roster] Avatar lookup failed for {name}: {e}")
        return default_avatar

    if character is None or not character.avatar or character.avatar == NO_AVATAR:
        return default_avatar
    return thumbnail_url(character.avatar)


def build_roster(
    pool: SlotPool,
    directory: CharacterDirectory,
    default_avatar: str,
) -> SlotRoster:
    occupied = pool.occupied()
    capacity = pool.capacity

    return SlotRoster(
        used=len(occupied),
        available=capacity - len(occupied),
        characters=[
            SlotRosterEntry(
                slot=index,
                name=name,
                avatar=resolve_avatar(directory, name, default_avatar),
            )
            for index, name in occupied
        ],
    )


class RosterEventEmitter(EventEmitter):
    """
    Re-renders the roster after every pool change.

    The last rendering is kept in ``latest``; ``on_render`` listeners get
    each new one. Listener errors are logged, never raised back into the
    pool operation that triggered them.
    """

    def __init__(
        self,
        *,
        pool: SlotPool,
        directory: CharacterDirectory,
        default_avatar: str,
    ):
        self._pool = pool
        self._directory = directory
        self._default_avatar = default_avatar
        self._listeners: List[Callable[[SlotRoster], None]] = []
        self._lock = threading.Lock()
        self.latest = SlotRoster()

    def on_render(self, listener: Callable[[SlotRoster], None]) -> None:
        self._listeners.append(listener)

    def render(self) -> SlotRoster:
        roster = build_roster(self._pool, self._directory, self._default_avatar)
        with self._lock:
            self.latest = roster

        logger.debug(f"[roster] Rendering character list: {roster}")
        for listener in list(self._listeners):
            try:
                listener(roster)
            except Exception as e:
                logger.error(f"[roster] Listener failed: {e}", exc_info=True)
        return roster

    def emit(self, events: Iterable[SlotEvent]) -> None:
        for event in events:
            validate_event(event)
        self.render()
