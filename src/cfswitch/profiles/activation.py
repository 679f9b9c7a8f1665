from dataclasses import dataclass
from pathlib import Path
import shlex

from loguru import logger

from cfswitch.errors import EnvFileWriteError, NoProfilesError, ProfileNotFoundError
from cfswitch.tools.fs import write_text_atomic
from .config import ConfigStore, Profile, ProfileConfig


@dataclass(frozen=True)
class EnvFile:
    """
    The shell file that exports the credentials of the active profile. It is only ever written by us and sourced by
    the user's shell.
    """

    FILENAME = ".cloudflare.env"
    DEFAULT_PATH = Path.home() / FILENAME

    path: Path

    @staticmethod
    def render(name: str, profile: Profile) -> str:
        return (
            f"# Cloudflare credentials - profile: {name}\n"
            f"export CF_API_EMAIL={shlex.quote(profile.email)}\n"
            f"export CF_API_KEY={shlex.quote(profile.token)}\n"
            f"export CF_API_TOKEN={shlex.quote(profile.token)}\n"
        )

    def write(self, name: str, profile: Profile) -> None:
        logger.debug("Writing credentials of profile '{}' to '{}'", name, self.path)
        try:
            write_text_atomic(self.path, self.render(name, profile))
        except OSError as exc:
            raise EnvFileWriteError(f"Failed to write environment file {self.path}: {exc}") from exc

    def source_command(self) -> str:
        return f"source {shlex.quote(str(self.path))}"


@dataclass(frozen=True)
class ActivatedProfile:
    name: str
    profile: Profile
    env_file: EnvFile


def next_profile_name(config: ProfileConfig) -> str:
    """
    Pick the profile that follows the active one in lexicographic order, wrapping around after the last. If no
    profile is active, or the active profile no longer exists, the first profile is picked.
    """

    names = config.sorted_names()
    if not names:
        raise NoProfilesError()

    index = names.index(config.current) if config.current in names else -1
    return names[(index + 1) % len(names)]


class ActivationEngine:
    """
    Switches the active profile. Activating a profile writes its credentials to the #EnvFile and records it as the
    current profile in the configuration.
    """

    def __init__(self, store: ConfigStore, env_file: EnvFile) -> None:
        self._store = store
        self._env_file = env_file

    def activate(self, name: str) -> ActivatedProfile:
        """
        Raises:
            ProfileNotFoundError: If no such profile exists.
        """

        return self._activate(self._store.load(), name)

    def rotate(self) -> ActivatedProfile:
        """
        Activate the next profile in rotation order.

        Raises:
            NoProfilesError: If there are no profiles.
        """

        config = self._store.load()
        name = next_profile_name(config)
        logger.debug("Rotating from {!r} to '{}'", config.current, name)
        return self._activate(config, name)

    def _activate(self, config: ProfileConfig, name: str) -> ActivatedProfile:
        try:
            profile = config.profiles[name]
        except KeyError:
            raise ProfileNotFoundError(name)

        # The environment file is written first; if saving the configuration fails, the shell still gets the
        # credentials that were just written but the command reports the failure.
        self._env_file.write(name, profile)
        config.current = name
        self._store.save(config)
        logger.debug("Activated profile '{}'", name)
        return ActivatedProfile(name, profile, self._env_file)
