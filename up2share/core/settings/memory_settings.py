"""
In-memory settings storage.

Non-persistent storage for testing and temporary use.
"""
from typing import Any, Dict, Optional

from .base import BaseSettings


class MemorySettings(BaseSettings):
    """
    In-memory settings storage.

    Data is lost when the object is destroyed.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Optional[Dict[str, Any]] = dict(initial) if initial is not None else None

    def load(self) -> Dict[str, Any]:
        return dict(self._data or {})

    def save(self, data: Dict[str, Any]) -> None:
        self._data = dict(data)

    def exists(self) -> bool:
        return self._data is not None
