"""Test character roster rendering."""

from slot_manager.core.events import MultiEventEmitter
from slot_manager.core.pool import SlotPool
from slot_manager.display.roster import (
    Character,
    CharacterDirectory,
    InMemoryCharacterDirectory,
    RosterEventEmitter,
    build_roster,
    resolve_avatar,
    thumbnail_url,
)

DEFAULT = "img/ai4.png"


class BrokenDirectory(CharacterDirectory):
    def find(self, name):
        raise RuntimeError("character list not loaded")


class TestResolveAvatar:
    """Test avatar lookup and fallbacks."""

    def test_known_character(self):
        directory = InMemoryCharacterDirectory([Character("Seraphina", "Seraphina.png")])

        assert resolve_avatar(directory, "Seraphina", DEFAULT) == thumbnail_url("Seraphina.png")

    def test_unknown_character(self):
        assert resolve_avatar(InMemoryCharacterDirectory(), "Nobody", DEFAULT) == DEFAULT

    def test_character_without_avatar(self):
        directory = InMemoryCharacterDirectory([Character("Plain")])

        assert resolve_avatar(directory, "Plain", DEFAULT) == DEFAULT

    def test_lookup_failure_falls_back(self):
        assert resolve_avatar(BrokenDirectory(), "Anyone", DEFAULT) == DEFAULT

    def test_thumbnail_url_is_quoted(self):
        assert thumbnail_url("My Char.png") == "/thumbnail?type=avatar&file=My%20Char.png"


class TestRoster:
    """Test roster building and re-rendering."""

    def test_build_roster(self, pool):
        directory = InMemoryCharacterDirectory([Character("alice", "alice.png")])
        pool.resize(3)
        pool.acquire("alice")
        pool.acquire("bob")
        pool.release(0)
        pool.acquire("carol")

        roster = build_roster(pool, directory, DEFAULT)

        assert roster.used == 2
        assert roster.available == 1
        assert [(e.slot, e.name) for e in roster.characters] == [(0, "carol"), (1, "bob")]
        assert all(e.avatar == DEFAULT for e in roster.characters)

    def test_emitter_rerenders_on_change(self, clock):
        emitters = MultiEventEmitter()
        pool = SlotPool(emitter=emitters, clock=clock)
        directory = InMemoryCharacterDirectory([Character("alice", "alice.png")])
        roster = RosterEventEmitter(pool=pool, directory=directory, default_avatar=DEFAULT)
        emitters.add(roster)
        rendered = []
        roster.on_render(rendered.append)

        pool.resize(2)
        pool.acquire("alice")

        assert len(rendered) == 2
        assert roster.latest.used == 1
        assert roster.latest.characters[0].avatar == thumbnail_url("alice.png")

    def test_broken_directory_never_fails_pool(self, clock):
        emitters = MultiEventEmitter()
        pool = SlotPool(emitter=emitters, clock=clock)
        emitters.add(RosterEventEmitter(pool=pool, directory=BrokenDirectory(), default_avatar=DEFAULT))
        pool.resize(1)

        assert pool.acquire("alice") == 0

    def test_failing_listener_is_contained(self, clock):
        emitters = MultiEventEmitter()
        pool = SlotPool(emitter=emitters, clock=clock)
        roster = RosterEventEmitter(pool=pool, directory=InMemoryCharacterDirectory(), default_avatar=DEFAULT)
        emitters.add(roster)

        def explode(_roster):
            raise RuntimeError("template missing")

        roster.on_render(explode)
        pool.resize(1)

        assert roster.latest.available == 1
