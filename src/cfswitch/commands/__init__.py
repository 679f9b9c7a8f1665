"""
Switch between Cloudflare profiles for `flarectl`. Without a command, the next profile is activated.

Evaluate the stdout of this command to load the credentials of the activated profile into your shell, or set up
the shell function printed by `cf-switch hook`.
"""

from enum import Enum
from pathlib import Path
import sys

from loguru import logger
from rich.markup import escape
from typer import Context, Option

from cfswitch import CfSwitch
from cfswitch.errors import NoProfilesError
from cfswitch.profiles import ActivatedProfile, EnvFile, ProfileConfig
from cfswitch.tools.cli import emit, error_boundary, print_info, print_warning
from cfswitch.tools.typer import new_typer


app = new_typer(help=__doc__, no_args_is_help=False)


class LogLevel(str, Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def report_activated(activated: ActivatedProfile) -> None:
    print_info(
        f"[bold green]ON[/bold green] [bold cyan]{escape(activated.name)}[/bold cyan] "
        f"({escape(activated.profile.email)})"
    )
    emit(activated.env_file.source_command())


def report_no_profiles() -> None:
    exc = NoProfilesError()
    print_warning(exc.message)
    print_info(escape(exc.hint or ""))


@app.callback(invoke_without_command=True)
def _callback(
    ctx: Context,
    config: Path = Option(
        ProfileConfig.DEFAULT_PATH, "--config", envvar="CF_SWITCH_CONFIG", help="The profiles configuration file."
    ),
    env_file: Path = Option(
        EnvFile.DEFAULT_PATH,
        "--env-file",
        envvar="CF_SWITCH_ENV_FILE",
        help="The file that the credentials of the active profile are exported to.",
    ),
    flarectl: str = Option("flarectl", "--flarectl", envvar="CF_SWITCH_FLARECTL", help="The flarectl binary."),
    strict: bool = Option(
        False,
        "--strict",
        envvar="CF_SWITCH_STRICT",
        help="Fail on an unparsable configuration file instead of starting over with an empty configuration.",
    ),
    log_level: LogLevel = Option(LogLevel.WARNING, "--log-level", "-l", help="The log level to use."),
) -> None:
    logger.remove()
    logger.add(sys.stderr, level=log_level.name)

    if not isinstance(ctx.obj, CfSwitch):
        ctx.obj = CfSwitch()
    ctx.obj.config_file = config
    ctx.obj.env_file = env_file
    ctx.obj.flarectl_binary = flarectl
    ctx.obj.strict = strict

    if ctx.invoked_subcommand is None:
        toggle(ctx.obj)


def toggle(cfs: CfSwitch) -> None:
    """
    Activate the profile that follows the active one.
    """

    with error_boundary():
        try:
            activated = cfs.profiles().activation.rotate()
        except NoProfilesError:
            report_no_profiles()
            return
        report_activated(activated)


from . import hook  # noqa: E402,F401
from . import profile  # noqa: E402,F401
from . import zone  # noqa: E402,F401
