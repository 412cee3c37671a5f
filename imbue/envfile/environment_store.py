import os
import threading
from abc import ABC
from abc import abstractmethod

from pydantic import PrivateAttr

from imbue.envfile.data_types import MutableModel


class EnvironmentStoreInterface(MutableModel, ABC):
    """A process-wide style key/value store that env file entries are written into."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for key, or None if it is not set."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Set key to value, replacing any existing value."""
        ...


class OsEnvironmentStore(EnvironmentStoreInterface):
    """Reads and writes the real process environment via os.environ.

    Writes from several threads race exactly like direct os.environ writes; callers
    that load overlapping files concurrently must serialize themselves.
    """

    def get(self, key: str) -> str | None:
        return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value


class InMemoryEnvironmentStore(EnvironmentStoreInterface):
    """A lock-guarded dict, for loading env files without touching the process environment."""

    _values: dict[str, str] = PrivateAttr(default_factory=dict)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def snapshot(self) -> dict[str, str]:
        """Return a copy of everything stored so far."""
        with self._lock:
            return dict(self._values)
