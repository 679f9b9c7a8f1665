"""
Manage the profiles in the configuration file.
"""

from typing import Optional

from rich.markup import escape
from typer import Argument, Context, Option

from cfswitch import CfSwitch
from cfswitch.errors import DanglingCurrentError
from cfswitch.tools.cli import error_boundary, print_info, print_success, print_warning

from . import app, report_activated, report_no_profiles


@app.command("list")
def list_(ctx: Context) -> None:
    """
    List all profiles. The active profile is marked with ON.
    """

    cfs: CfSwitch = ctx.obj
    with error_boundary():
        entries = cfs.profiles().registry.list()

    if not entries:
        report_no_profiles()
        return

    print_info("[bold]Cloudflare Profiles:[/bold]")
    for entry in entries:
        marker = "[bold green]ON[/bold green]" if entry.is_current else "  "
        zone = f" [dim]{escape(entry.profile.zone)}[/dim]" if entry.profile.zone else ""
        print_info(f"{marker} [cyan]{escape(entry.name)}[/cyan] ({escape(entry.profile.email)}){zone}")


@app.command()
def add(
    ctx: Context,
    name: str = Argument(..., help="The profile name."),
    email: str = Option(..., "--email", "-e", help="The Cloudflare account email."),
    token: str = Option(..., "--token", "-t", help="The API token (recommended) or API key."),
    zone: Optional[str] = Option(None, "--zone", "-z", help="The default zone of the profile, e.g. example.com."),
) -> None:
    """
    Add a new profile.
    """

    cfs: CfSwitch = ctx.obj
    with error_boundary():
        cfs.profiles().registry.add(name, email, token, zone)

    if zone:
        print_success(f"Added profile '[cyan]{escape(name)}[/cyan]' with zone '{escape(zone)}'")
    else:
        print_success(f"Added profile '[cyan]{escape(name)}[/cyan]'")


@app.command()
def remove(ctx: Context, name: str = Argument(..., help="The profile to remove.")) -> None:
    """
    Remove a profile.
    """

    cfs: CfSwitch = ctx.obj
    with error_boundary():
        cfs.profiles().registry.remove(name)
    print_success(f"Removed profile '{escape(name)}'")


@app.command()
def use(ctx: Context, name: str = Argument(..., help="The profile to activate.")) -> None:
    """
    Activate a specific profile.
    """

    cfs: CfSwitch = ctx.obj
    with error_boundary():
        activated = cfs.profiles().activation.activate(name)
    report_activated(activated)


@app.command()
def current(ctx: Context) -> None:
    """
    Show the active profile.
    """

    cfs: CfSwitch = ctx.obj
    with error_boundary():
        config = cfs.profiles().config()

    try:
        active = config.current_profile()
    except DanglingCurrentError as exc:
        print_warning(exc.message)
        return

    if active is None:
        print_warning("No profile currently active.")
        return

    name, profile = active
    print_info(f"[bold green]ON[/bold green] [cyan]{escape(name)}[/cyan] ({escape(profile.email)})")
