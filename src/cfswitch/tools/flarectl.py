from abc import ABC, abstractmethod
from dataclasses import dataclass
import os
import shlex
import subprocess

from loguru import logger

from cfswitch.errors import CfSwitchError
from cfswitch.profiles.config import Profile


@dataclass
class FlarectlError(CfSwitchError):
    """
    Raised when `flarectl` exits with a non-zero status code.
    """

    action: str
    statuscode: int
    stderr: str = ""
    stdout: str = ""
    #: Report stderr and stdout together instead of preferring stderr.
    combined_output: bool = False

    def __post_init__(self) -> None:
        if self.combined_output:
            details = self.output.strip()
        else:
            details = self.stderr.strip() or self.stdout.strip()
        details = details or f"flarectl exited with status code {self.statuscode}"
        super().__init__(f"Failed to {self.action}: {details}")

    def __str__(self) -> str:
        return self.message

    @property
    def output(self) -> str:
        """The combined stderr and stdout of the command."""

        return self.stderr + self.stdout


class FlarectlMissingError(CfSwitchError):
    """
    Raised when `flarectl` could not be started at all, usually because it is not installed.
    """

    INSTALL_HINT = "Make sure flarectl is installed: brew install cloudflare/cloudflare/flarectl"

    def __init__(self, binary: str, reason: str) -> None:
        super().__init__(f"Failed to run {binary}: {reason}", hint=self.INSTALL_HINT)
        self.binary = binary


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


class CommandRunner(ABC):
    """
    Runs an external command to completion and captures its output.
    """

    @abstractmethod
    def run(self, command: list[str], env: dict[str, str]) -> CommandResult:
        """
        Args:
            command: The program followed by its arguments.
            env: Environment variables to set in addition to the current process environment.
        Raises:
            OSError: If the program could not be started.
        """


class SubprocessRunner(CommandRunner):
    def run(self, command: list[str], env: dict[str, str]) -> CommandResult:
        status = subprocess.run(command, env={**os.environ, **env}, text=True, errors="replace", capture_output=True)
        return CommandResult(status.returncode, status.stdout, status.stderr)


class Flarectl:
    """
    Wrapper for interfacing with `flarectl`, the Cloudflare CLI. Credentials are passed to it through the
    environment.
    """

    LAMDERA_TARGET = "apps.lamdera.app"

    def __init__(self, runner: CommandRunner | None = None, binary: str = "flarectl") -> None:
        self.runner = runner or SubprocessRunner()
        self.binary = binary

    @staticmethod
    def credentials_env(profile: Profile) -> dict[str, str]:
        return {
            "CF_API_EMAIL": profile.email,
            "CF_API_KEY": profile.token,
            "CF_API_TOKEN": profile.token,
        }

    def _run(self, action: str, profile: Profile, args: list[str], combined_output: bool = False) -> CommandResult:
        command = [self.binary, *args]
        logger.debug("Running command: $ {command}", command=" ".join(map(shlex.quote, command)))
        try:
            result = self.runner.run(command, self.credentials_env(profile))
        except OSError as exc:
            raise FlarectlMissingError(self.binary, exc.strerror or str(exc)) from exc
        if result.returncode:
            raise FlarectlError(action, result.returncode, result.stderr, result.stdout, combined_output)
        return result

    def zone_purge(self, profile: Profile, zone: str) -> CommandResult:
        """
        Purge everything from the cache of the *zone*.
        """

        return self._run("purge", profile, ["zone", "purge", "--zone", zone, "--everything"])

    def dns_create(
        self,
        profile: Profile,
        zone: str,
        type: str,
        name: str,
        content: str,
        proxy: bool = False,
    ) -> CommandResult:
        """
        Create a DNS record in the *zone*.
        """

        args = ["dns", "create", "--zone", zone, "--type", type, "--name", name, "--content", content]
        if proxy:
            args.append("--proxy")
        return self._run("create DNS record", profile, args, combined_output=True)
