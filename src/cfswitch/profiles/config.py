from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from databind.core import ConversionError
from loguru import logger

from cfswitch.errors import ConfigCorruptError, ConfigReadError, ConfigWriteError, DanglingCurrentError
from cfswitch.tools.kvstore import JsonFileKvStore, KvStore, SerializingStore


@dataclass(frozen=True)
class Profile:
    """
    Represents a set of Cloudflare credentials.
    """

    email: str
    """
    The Cloudflare account email.
    """

    token: str
    """
    The API token (or legacy API key). Exported as both the API key and the API token.
    """

    zone: str | None = None
    """
    The default zone for operations such as `purge`, e.g. `example.com`.
    """


@dataclass
class ProfileConfig:
    """
    The persisted state: all known profiles and the name of the active one.
    """

    FILENAME = ".cf-switch.json"
    DEFAULT_PATH = Path.home() / FILENAME

    profiles: dict[str, Profile] = field(default_factory=dict)
    current: str | None = None

    def sorted_names(self) -> list[str]:
        """
        Return the profile names in lexicographic order. This is the order in which profiles are listed and rotated.
        """

        return sorted(self.profiles)

    def current_profile(self) -> tuple[str, Profile] | None:
        """
        Return the active profile, or `None` if no profile is active.

        Raises:
            DanglingCurrentError: If the active profile is no longer registered.
        """

        if self.current is None:
            return None
        try:
            return self.current, self.profiles[self.current]
        except KeyError:
            raise DanglingCurrentError(self.current)


class ConfigStore:
    """
    Loads and saves the #ProfileConfig from a #KvStore. Each member of the configuration is stored under its own key
    (`profiles` and `current`), which makes the JSON file backing a #JsonFileKvStore look like the serialized
    #ProfileConfig.

    Args:
        store: The key-value store to read from and write to.
        strict: If enabled, a configuration that cannot be parsed raises a #ConfigCorruptError. Otherwise, a warning
            is logged and an empty configuration is used in its place, which is then written over the unparsable
            data on the next save.
    """

    def __init__(self, store: KvStore, strict: bool = False) -> None:
        self._store = store
        self._strict = strict
        self._profiles = SerializingStore(dict[str, Profile], store)
        self._current = SerializingStore(Optional[str], store)

    @staticmethod
    def from_file(file: Path, strict: bool = False) -> ConfigStore:
        return ConfigStore(JsonFileKvStore(file), strict)

    def load(self) -> ProfileConfig:
        try:
            keys = set(self._store.list())
            profiles = self._profiles.get("profiles") if "profiles" in keys else {}
            current = self._current.get("current") if "current" in keys else None
        except OSError as exc:
            raise ConfigReadError(f"Failed to read configuration from {self._store}: {exc}") from exc
        except (ValueError, ConversionError) as exc:
            if self._strict:
                raise ConfigCorruptError(
                    f"Configuration in {self._store} could not be parsed: {exc}",
                    hint="Fix or delete the file, or run without --strict to start over with an empty configuration.",
                ) from exc
            logger.warning("Ignoring unparsable configuration in {}: {}", self._store, exc)
            self._store.clear()
            return ProfileConfig()

        logger.debug("Loaded {} profile(s) from {}, current={!r}", len(profiles), self._store, current)
        return ProfileConfig(profiles, current)

    def save(self, config: ProfileConfig) -> None:
        self._profiles.set("profiles", config.profiles)
        self._current.set("current", config.current)
        try:
            self._store.flush()
        except OSError as exc:
            raise ConfigWriteError(f"Failed to write configuration to {self._store}: {exc}") from exc

