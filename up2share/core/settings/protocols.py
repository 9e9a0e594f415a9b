"""
Settings storage protocols.

Defines the interface for persisted application settings.
"""
from typing import Protocol, Optional, Any, Dict, runtime_checkable


@runtime_checkable
class SettingsStorage(Protocol):
    """
    Protocol for settings storage implementations.

    Implementations can use a JSON file, memory, or any other backend.
    """

    def load(self) -> Dict[str, Any]:
        """
        Load all settings.

        Returns:
            Settings dictionary (empty if nothing is stored)
        """
        ...

    def save(self, data: Dict[str, Any]) -> None:
        """
        Replace all settings.

        Raises:
            SettingsError: If settings cannot be written
        """
        ...

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def exists(self) -> bool:
        ...
