from abc import ABC, abstractmethod
import json
from pathlib import Path
from typing import Any, Generic, Iterable, TypeVar
from databind.json import load as deser, dump as ser
from loguru import logger

from cfswitch.tools.fs import write_text_atomic


T = TypeVar("T")
Value = dict[str, Any] | list[Any] | str | int | float | bool | None


class KvStore(ABC):
    """A simple key-value store interface that can store JSON-like data."""

    @abstractmethod
    def get(self, key: str) -> Value:
        """Get the value for a key."""

    @abstractmethod
    def set(self, key: str, value: Value) -> None:
        """Save a value for a key."""

    @abstractmethod
    def list(self) -> Iterable[str]:
        """List all keys."""

    @abstractmethod
    def clear(self) -> None:
        """Discard all keys, including any that could not be loaded."""

    @abstractmethod
    def flush(self) -> None:
        """Persist pending changes."""


class JsonFileKvStore(KvStore):
    """
    A key-value store that keeps all keys as the members of a single JSON object in a file. The file is read lazily
    on first access and only written when #flush() is called after a modification. Writes replace the whole file
    atomically.

    If the file contains invalid JSON or something other than an object, the error is raised on first access and
    repeated on every access until #clear() is called.
    """

    def __init__(self, file: Path) -> None:
        self._path = file
        self._data: dict[str, Value] = {}
        self._loaded = False
        self._dirty = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._path})"

    def __str__(self) -> str:
        return str(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if self._loaded:
            return

        if self._path.exists():
            logger.debug("Loading '{}'", self._path)
            data = json.loads(self._path.read_text())
            if not isinstance(data, dict):
                raise ValueError(f"Expected a JSON object in '{self._path}', got {type(data).__name__}")
            self._data = data
        self._loaded = True

    def _save(self) -> None:
        logger.debug("Saving '{}'", self._path)
        write_text_atomic(self._path, json.dumps(self._data, indent=2, sort_keys=True) + "\n")

    def get(self, key: str) -> Value:
        assert isinstance(key, str), f"Key must be a string, not {type(key)}"
        self._load()
        return self._data[key]

    def set(self, key: str, value: Value) -> None:
        assert isinstance(key, str), f"Key must be a string, not {type(key)}"
        self._load()
        self._data[key] = value
        self._dirty = True

    def list(self) -> Iterable[str]:
        self._load()
        return self._data.keys()

    def clear(self) -> None:
        self._data = {}
        self._loaded = True
        self._dirty = True

    def flush(self) -> None:
        if self._dirty:
            self._save()
            self._dirty = False


class MemoryKvStore(KvStore):
    """
    A key-value store that lives only in memory. Values are round-tripped through JSON on #set() so that what is
    stored is exactly what a #JsonFileKvStore would persist.
    """

    def __init__(self, data: dict[str, Value] | None = None) -> None:
        self.data: dict[str, Value] = dict(data or {})
        self.flushes = 0

    def get(self, key: str) -> Value:
        return self.data[key]

    def set(self, key: str, value: Value) -> None:
        self.data[key] = json.loads(json.dumps(value))

    def list(self) -> Iterable[str]:
        return self.data.keys()

    def clear(self) -> None:
        self.data = {}

    def flush(self) -> None:
        self.flushes += 1


class SerializingStore(Generic[T]):
    """
    Store values of a specific type in a key-value store. Values are serialized and deserialized using the
    [databind.json] module.
    """

    def __init__(self, value_type: type[T] | Any, store: KvStore) -> None:
        self._value_type = value_type
        self._store = store

    def get(self, key: str) -> T:
        value = self._store.get(key)
        return deser(value, self._value_type, filename=str(self._store))

    def set(self, key: str, value: T) -> None:
        self._store.set(key, ser(value, self._value_type, filename=str(self._store)))
