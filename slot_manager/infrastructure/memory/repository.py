# slot_manager/infrastructure/memory/repository.py

import copy
from threading import Lock
from typing import Any, Dict, Optional

from slot_manager.core.repository import SettingsRepository


class InMemorySettingsRepository(SettingsRepository):
    def __init__(self):
        self._store: dict[str, Dict[str, Any]] = {}
        self._lock = Lock()
        self.save_count = 0

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._store.get(name)
            return copy.deepcopy(data) if data is not None else None

    def save(self, name: str, data: Dict[str, Any]) -> None:
        with self._lock:
            self._store[name] = copy.deepcopy(data)
            self.save_count += 1

    def delete(self, name: str) -> bool:
        with self._lock:
            return self._store.pop(name, None) is not None
