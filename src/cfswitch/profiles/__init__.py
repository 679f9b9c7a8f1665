from dataclasses import dataclass
from pathlib import Path

from .activation import ActivatedProfile, ActivationEngine, EnvFile, next_profile_name
from .config import ConfigStore, Profile, ProfileConfig
from .registry import ProfileEntry, ProfileRegistry

__all__ = [
    "ActivatedProfile",
    "ActivationEngine",
    "ConfigStore",
    "EnvFile",
    "Profile",
    "ProfileConfig",
    "ProfileEntry",
    "ProfileManager",
    "ProfileRegistry",
    "next_profile_name",
]


@dataclass
class ProfileManager:
    """
    This class combines the [ProfileRegistry] and [ActivationEngine] on top of a shared [ConfigStore] to provide a
    single entrypoint for the commands.
    """

    store: ConfigStore
    registry: ProfileRegistry
    activation: ActivationEngine

    @staticmethod
    def create(store: ConfigStore, env_file: EnvFile) -> "ProfileManager":
        return ProfileManager(store, ProfileRegistry(store), ActivationEngine(store, env_file))

    @staticmethod
    def load(config_file: Path | None = None, env_file: Path | None = None, strict: bool = False) -> "ProfileManager":
        """
        Create the profile manager for the given files, or the default files in the home directory.
        """

        store = ConfigStore.from_file(config_file or ProfileConfig.DEFAULT_PATH, strict=strict)
        return ProfileManager.create(store, EnvFile(env_file or EnvFile.DEFAULT_PATH))

    def config(self) -> ProfileConfig:
        return self.store.load()
