"""Typed notification channel (Observer Pattern)."""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type


@dataclass(frozen=True)
class ProgressNotification:
    """A chunk was accepted; progress is a percentage of total bytes."""
    progress: float
    chunk_start: int
    chunk_end: int


@dataclass(frozen=True)
class CompletedNotification:
    """The upload finished and the server assigned `file_id`."""
    filename: str
    file_id: str


@dataclass(frozen=True)
class ErrorNotification:
    """A fatal error; `message` equals the message of the raised exception."""
    message: str


@dataclass(frozen=True)
class ShareCreatedNotification:
    """A share was created for a file."""
    share: Dict[str, Any]


class NotificationChannel:
    """
    Dispatches notifications to callbacks registered per notification type.

    Example:
        >>> channel = NotificationChannel()
        >>> channel.on(ProgressNotification, lambda n: print(n.progress))
        >>> channel.emit(ProgressNotification(50.0, 0, 99))
        50.0
    """

    def __init__(self):
        self._listeners: Dict[Type, List[Callable[[Any], None]]] = {}

    def on(self, kind: Type, callback: Callable[[Any], None]) -> 'NotificationChannel':
        """Registers a callback for one notification type."""
        self._listeners.setdefault(kind, []).append(callback)
        return self

    def off(self, kind: Type, callback: Optional[Callable] = None) -> 'NotificationChannel':
        """Removes one callback, or every callback of a type."""
        if kind not in self._listeners:
            return self

        if callback is None:
            del self._listeners[kind]
        else:
            self._listeners[kind] = [cb for cb in self._listeners[kind] if cb != callback]

        return self

    def has_listeners(self, kind: Type) -> bool:
        return bool(self._listeners.get(kind))

    def emit(self, notification: Any) -> None:
        """Delivers a notification to the callbacks of its type."""
        for callback in list(self._listeners.get(type(notification), ())):
            callback(notification)
