# slot_manager/core/repository.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class SettingsRepository(ABC):
    """
    Persistence contract for the host's key-value settings store.
    """

    @abstractmethod
    def load(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the settings blob stored under ``name``.
        Returns None if nothing was saved yet.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, name: str, data: Dict[str, Any]) -> None:
        """
        Store ``data`` under ``name``, replacing any previous blob.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, name: str) -> bool:
        """
        Remove the blob stored under ``name``.
        Returns True if something was deleted.
        """
        raise NotImplementedError
