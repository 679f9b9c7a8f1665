from dataclasses import dataclass

from loguru import logger

from cfswitch.errors import ProfileExistsError, ProfileNotFoundError
from .config import ConfigStore, Profile


@dataclass(frozen=True)
class ProfileEntry:
    name: str
    profile: Profile
    is_current: bool


class ProfileRegistry:
    """
    CRUD operations on the profiles in the configuration. Every mutation is persisted immediately.
    """

    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    def add(self, name: str, email: str, token: str, zone: str | None = None) -> Profile:
        """
        Register a new profile.

        Raises:
            ProfileExistsError: If a profile with the same name exists. The existing profile is left untouched.
        """

        config = self._store.load()
        if name in config.profiles:
            raise ProfileExistsError(name)

        profile = Profile(email=email, token=token, zone=zone)
        config.profiles[name] = profile
        self._store.save(config)
        logger.debug("Added profile '{}'", name)
        return profile

    def remove(self, name: str) -> Profile:
        """
        Remove a profile. If it is the active profile, no profile is active afterwards.

        Raises:
            ProfileNotFoundError: If no such profile exists.
        """

        config = self._store.load()
        try:
            profile = config.profiles.pop(name)
        except KeyError:
            raise ProfileNotFoundError(name)

        if config.current == name:
            logger.debug("Removed profile '{}' was active, clearing current profile", name)
            config.current = None
        self._store.save(config)
        return profile

    def list(self) -> list[ProfileEntry]:
        config = self._store.load()
        return [ProfileEntry(name, config.profiles[name], name == config.current) for name in config.sorted_names()]

    def get(self, name: str) -> Profile | None:
        return self._store.load().profiles.get(name)
