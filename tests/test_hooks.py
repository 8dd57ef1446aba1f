"""Test host event dispatch and slot bindings."""

import pytest

from slot_manager.core.errors import SlotInvalidArgumentError, SlotOutOfRangeError
from slot_manager.hooks.bindings import SlotManagerHooks
from slot_manager.hooks.dispatcher import EventDispatcher, HostEventType


@pytest.fixture
def dispatcher(pool):
    dispatcher = EventDispatcher()
    SlotManagerHooks(pool, default_slots=2).register(dispatcher)
    return dispatcher


class TestEventDispatcher:
    """Test subscription and dispatch."""

    def test_dispatch_in_registration_order(self):
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.on("ping", lambda p: calls.append(("first", p)))
        dispatcher.on("ping", lambda p: calls.append(("second", p)))

        dispatcher.dispatch("ping", 1)

        assert calls == [("first", 1), ("second", 1)]

    def test_enum_and_string_names_match(self):
        dispatcher = EventDispatcher()
        dispatcher.on(HostEventType.APP_READY, lambda p: "ready")

        assert dispatcher.dispatch("app_ready") == ["ready"]

    def test_dispatch_without_handlers(self):
        assert EventDispatcher().dispatch("nothing") == []

    def test_off(self):
        dispatcher = EventDispatcher()
        handler = lambda p: p
        dispatcher.on("ping", handler)

        dispatcher.off("ping", handler)
        dispatcher.off("ping", handler)

        assert dispatcher.handlers("ping") == []

    def test_handler_errors_propagate(self):
        dispatcher = EventDispatcher()

        def fail(_payload):
            raise RuntimeError("boom")

        dispatcher.on("ping", fail)

        with pytest.raises(RuntimeError):
            dispatcher.dispatch("ping")


class TestSlotManagerHooks:
    """Test event to pool wiring."""

    def test_app_ready_resizes_to_default(self, dispatcher, pool):
        dispatcher.dispatch(HostEventType.APP_READY)

        assert pool.capacity == 2

    def test_slot_threaded_into_completion_params(self, dispatcher):
        dispatcher.dispatch(HostEventType.APP_READY)
        dispatcher.dispatch(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, {"char": "alice"})
        dispatcher.dispatch(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, {"char": "bob"})
        params = {"prompt": "Hello", "n_predict": 16}

        dispatcher.dispatch(HostEventType.TEXT_COMPLETION_SETTINGS_READY, params)

        assert params["id_slot"] == 1

    def test_params_untouched_before_any_generation(self, dispatcher):
        dispatcher.dispatch(HostEventType.APP_READY)
        params = {"prompt": "Hello"}

        dispatcher.dispatch(HostEventType.TEXT_COMPLETION_SETTINGS_READY, params)

        assert "id_slot" not in params

    def test_generation_payload_requires_char(self, dispatcher):
        dispatcher.dispatch(HostEventType.APP_READY)

        with pytest.raises(SlotInvalidArgumentError):
            dispatcher.dispatch(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, {})

    def test_update_count(self, dispatcher, pool):
        dispatcher.dispatch(HostEventType.UPDATE_SLOT_COUNT, {"total_slots": 5})
        assert pool.capacity == 5

        dispatcher.dispatch(HostEventType.UPDATE_SLOT_COUNT)
        assert pool.capacity == 2

    def test_release_slot_from_panel(self, dispatcher, pool):
        dispatcher.dispatch(HostEventType.APP_READY)
        dispatcher.dispatch(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, {"char": "alice"})

        dispatcher.dispatch(HostEventType.RELEASE_SLOT, {"slot": "0"})

        assert pool.used_count() == 0
        params = {}
        dispatcher.dispatch(HostEventType.TEXT_COMPLETION_SETTINGS_READY, params)
        assert params == {}

    def test_release_bad_index(self, dispatcher):
        dispatcher.dispatch(HostEventType.APP_READY)

        with pytest.raises(SlotOutOfRangeError):
            dispatcher.dispatch(HostEventType.RELEASE_SLOT, {"slot": 7})
        with pytest.raises(SlotInvalidArgumentError):
            dispatcher.dispatch(HostEventType.RELEASE_SLOT, {"slot": "first"})

    def test_release_all(self, dispatcher, pool):
        dispatcher.dispatch(HostEventType.APP_READY)
        dispatcher.dispatch(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, {"char": "alice"})

        dispatcher.dispatch(HostEventType.RELEASE_ALL_SLOTS)

        assert pool.used_count() == 0
        assert pool.capacity == 2

    def test_shrinking_resize_forgets_vanished_slot(self, dispatcher, pool):
        dispatcher.dispatch(HostEventType.UPDATE_SLOT_COUNT, {"total_slots": 4})
        for char in ("x", "y", "z"):
            dispatcher.dispatch(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, {"char": char})

        dispatcher.dispatch(HostEventType.UPDATE_SLOT_COUNT, {"total_slots": 1})
        params = {}
        dispatcher.dispatch(HostEventType.TEXT_COMPLETION_SETTINGS_READY, params)

        assert pool.capacity == 1
        assert "id_slot" not in params

    def test_shrinking_resize_keeps_surviving_slot(self, dispatcher):
        dispatcher.dispatch(HostEventType.UPDATE_SLOT_COUNT, {"total_slots": 4})
        dispatcher.dispatch(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, {"char": "x"})

        dispatcher.dispatch(HostEventType.UPDATE_SLOT_COUNT, {"total_slots": 2})
        params = {}
        dispatcher.dispatch(HostEventType.TEXT_COMPLETION_SETTINGS_READY, params)

        assert params["id_slot"] == 0

    def test_restored_settings_cannot_leak_stale_slot(self, dispatcher, pool):
        dispatcher.dispatch(HostEventType.UPDATE_SLOT_COUNT, {"total_slots": 3})
        for char in ("x", "y", "z"):
            dispatcher.dispatch(HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS, {"char": char})

        pool.load_settings({"slots": ["x"]})
        params = {}
        dispatcher.dispatch(HostEventType.TEXT_COMPLETION_SETTINGS_READY, params)

        assert "id_slot" not in params
