"""
JSON file settings storage.

Stores settings in `app_config.json` under the user config directory.
"""
import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .base import BaseSettings
from ..exceptions import SettingsError
from ..logging import get_logger


def default_config_dir() -> Path:
    """~/.config/up2share"""
    return Path.home() / ".config" / "up2share"


class JSONSettings(BaseSettings):
    """
    JSON-file settings storage.

    Every write is a read-modify-write of the whole file, pretty printed.
    An unreadable file loads as empty settings (logged) but refuses to be
    overwritten by a partial update.

    Example:
        >>> settings = JSONSettings()
        >>> settings.save_api_key("abc123")
        >>> settings.load_api_key()
        'abc123'
    """

    FILENAME = 'app_config.json'

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize JSON settings storage.

        Args:
            path: File path, or a directory holding app_config.json
                  (defaults to ~/.config/up2share)
        """
        self._lock = threading.Lock()
        self._logger = get_logger('up2share.settings')

        if path is None:
            self._path = default_config_dir() / self.FILENAME
        else:
            path = Path(path)
            self._path = path / self.FILENAME if path.suffix != '.json' else path

    @property
    def path(self) -> Path:
        """Get settings file path."""
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def _read(self) -> Dict[str, Any]:
        with open(self._path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings root must be an object")
        return data

    def load(self) -> Dict[str, Any]:
        with self._lock:
            if not self.exists():
                return {}
            try:
                return self._read()
            except (OSError, ValueError) as e:
                self._logger.error(f"Error loading settings from {self._path}: {e}")
                return {}

    def _write(self, data: Dict[str, Any]) -> None:
        """Write the whole file; callers hold the lock."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            self._logger.error(f"Error saving settings to {self._path}: {e}")
            raise SettingsError(f"Error saving settings: {e}") from e

    def save(self, data: Dict[str, Any]) -> None:
        with self._lock:
            self._write(data)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data: Dict[str, Any] = {}
            if self.exists():
                try:
                    data = self._read()
                except (OSError, ValueError) as e:
                    raise SettingsError(
                        f"Refusing to overwrite unreadable settings file {self._path}: {e}"
                    ) from e
            data[key] = value
            self._write(data)
