#slot_manager\container.py

"""Dependency injection container - wires all services together."""

import logging
from dataclasses import dataclass
from typing import Optional

from slot_manager.client.llama_client import LlamaCppClient
from slot_manager.config import SlotManagerSettings, settings
from slot_manager.core.errors import SlotError
from slot_manager.core.events import LoggingEventEmitter, MultiEventEmitter
from slot_manager.core.pool import SlotPool
from slot_manager.core.repository import SettingsRepository
from slot_manager.display.roster import (
    CharacterDirectory,
    InMemoryCharacterDirectory,
    RosterEventEmitter,
)
from slot_manager.hooks.bindings import SlotManagerHooks
from slot_manager.hooks.dispatcher import EventDispatcher, HostEventType
from slot_manager.infrastructure.sql.database import (
    create_db_engine,
    get_session_factory,
    init_db,
)
from slot_manager.infrastructure.sql.repository import SqlSettingsRepository
from slot_manager.persistence.saver import DebouncedSettingsSaver

logger = logging.getLogger(__name__)


@dataclass
class Container:
    config: SlotManagerSettings
    repository: SettingsRepository
    emitters: MultiEventEmitter
    pool: SlotPool
    saver: DebouncedSettingsSaver
    roster: RosterEventEmitter
    dispatcher: EventDispatcher
    hooks: SlotManagerHooks
    llama_client: LlamaCppClient

    def start(self) -> None:
        """Rehydrate the pool from the store, then fire the ready event."""
        try:
            data = self.repository.load(self.config.settings_key)
            if data:
                self.pool.load_settings(data)
        except SlotError as e:
            logger.error(f"[container] Could not restore slots, starting empty: {e}")

        self.dispatcher.dispatch(HostEventType.APP_READY)

    def shutdown(self) -> None:
        self.saver.close()


def create_container(
    config: SlotManagerSettings = settings,
    *,
    repository: Optional[SettingsRepository] = None,
    directory: Optional[CharacterDirectory] = None,
) -> Container:
    # ============================================
    # REPOSITORIES
    # ============================================
    if repository is None:
        engine = create_db_engine(config.database_url, echo=config.echo_sql)
        init_db(engine)
        repository = SqlSettingsRepository(get_session_factory(engine))

    # ============================================
    # POOL + EVENTS
    # ============================================
    emitters = MultiEventEmitter([LoggingEventEmitter()])
    pool = SlotPool(emitter=emitters, default_slots=config.default_slots)

    saver = DebouncedSettingsSaver(
        repository=repository,
        name=config.settings_key,
        snapshot=pool.to_settings,
        delay_seconds=config.save_debounce_seconds,
    )
    roster = RosterEventEmitter(
        pool=pool,
        directory=directory or InMemoryCharacterDirectory(),
        default_avatar=config.default_avatar,
    )
    emitters.add(saver)
    emitters.add(roster)

    # ============================================
    # HOOKS
    # ============================================
    dispatcher = EventDispatcher()
    hooks = SlotManagerHooks(pool, default_slots=config.default_slots)
    hooks.register(dispatcher)

    return Container(
        config=config,
        repository=repository,
        emitters=emitters,
        pool=pool,
        saver=saver,
        roster=roster,
        dispatcher=dispatcher,
        hooks=hooks,
        llama_client=LlamaCppClient(config.llama_server_url, timeout=config.request_timeout),
    )
