"""Typed accessors shared by every settings backend."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


API_KEY = 'apiKey'
STARTUP = 'startup'
CONTEXT_MENU = 'contextMenu'


class BaseSettings(ABC):
    """
    Application settings on top of load()/save().

    Keys match the stored `app_config.json`: `apiKey`, `startup`,
    `contextMenu`.
    """

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        """Load all settings (empty dict if nothing is stored)."""
        pass

    @abstractmethod
    def save(self, data: Dict[str, Any]) -> None:
        """Replace all settings."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        pass

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self.load()
        data[key] = value
        self.save(data)

    def is_configured(self, key: str) -> bool:
        """True if the key has been stored at least once."""
        return self.exists() and key in self.load()

    # API key

    def load_api_key(self) -> Optional[str]:
        return self.get(API_KEY) or None

    def save_api_key(self, api_key: str) -> None:
        if not api_key or not api_key.strip():
            raise ValueError("API key cannot be empty")
        self.set(API_KEY, api_key.strip())

    # Startup

    def is_startup_configured(self) -> bool:
        return self.is_configured(STARTUP)

    def load_startup_status(self) -> bool:
        return bool(self.get(STARTUP, False))

    def save_startup_status(self, status: bool) -> None:
        self.set(STARTUP, bool(status))

    # Context menu

    def is_context_menu_configured(self) -> bool:
        return self.is_configured(CONTEXT_MENU)

    def load_context_menu_status(self) -> bool:
        return bool(self.get(CONTEXT_MENU, False))

    def save_context_menu_status(self, status: bool) -> None:
        self.set(CONTEXT_MENU, bool(status))
