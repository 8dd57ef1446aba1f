#slot_manager\infrastructure\sql\repository.py

"""SQL settings repository implementation using SQLAlchemy."""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from slot_manager.core.errors import SlotPersistenceError
from slot_manager.core.repository import SettingsRepository
from slot_manager.infrastructure.sql.database import session_scope
from slot_manager.infrastructure.sql.models import SettingsORM

logger = logging.getLogger(__name__)


class SqlSettingsRepository(SettingsRepository):
    """SQL implementation of the settings store."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(SettingsORM, name)
                if row is None:
                    return None
                return copy.deepcopy(row.data)
        except SQLAlchemyError as e:
            raise SlotPersistenceError(f"Failed to load settings '{name}': {e}") from e

    def save(self, name: str, data: Dict[str, Any]) -> None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(SettingsORM, name)
                if row is None:
                    session.add(SettingsORM(name=name, data=copy.deepcopy(data)))
                else:
                    # New object so the JSON column is flagged dirty
                    row.data = copy.deepcopy(data)
                    row.updated_at = datetime.now(timezone.utc)
            logger.debug(f"[settings] Saved '{name}'")
        except SQLAlchemyError as e:
            raise SlotPersistenceError(f"Failed to save settings '{name}': {e}") from e

    def delete(self, name: str) -> bool:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(SettingsORM, name)
                if row is None:
                    return False
                session.delete(row)
                return True
        except SQLAlchemyError as e:
            raise SlotPersistenceError(f"Failed to delete settings '{name}': {e}") from e
