"""
Switch between Cloudflare credential profiles for `flarectl`.
"""

from dataclasses import dataclass
from pathlib import Path

from cfswitch.profiles import EnvFile, ProfileConfig, ProfileManager
from cfswitch.tools.flarectl import CommandRunner, Flarectl

__version__ = "0.1.0"


@dataclass
class CfSwitch:
    """
    The settings of a single invocation, from which the components that the commands operate on are created.
    """

    config_file: Path = ProfileConfig.DEFAULT_PATH
    env_file: Path = EnvFile.DEFAULT_PATH
    flarectl_binary: str = "flarectl"
    strict: bool = False
    runner: CommandRunner | None = None

    def profiles(self) -> ProfileManager:
        return ProfileManager.load(self.config_file, self.env_file, strict=self.strict)

    def flarectl(self) -> Flarectl:
        return Flarectl(self.runner, self.flarectl_binary)
