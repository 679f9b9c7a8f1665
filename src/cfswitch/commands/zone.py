from typing import Optional

from rich.markup import escape
from typer import Argument, Context

from cfswitch import CfSwitch, zones
from cfswitch.tools.cli import error_boundary, print_info, print_success
from cfswitch.tools.flarectl import Flarectl

from . import app


def _print_start(message: str, target: zones.Target) -> None:
    print_info(
        f"[cyan]→[/cyan] {message} [bold]{escape(target.zone)}[/bold] "
        f"using profile '[cyan]{escape(target.profile_name)}[/cyan]'..."
    )


@app.command()
def purge(
    ctx: Context,
    zone: Optional[str] = Argument(None, help="The zone to purge. Defaults to the zone of the active profile."),
) -> None:
    """
    Purge the cache of a zone.
    """

    cfs: CfSwitch = ctx.obj
    with error_boundary():
        config = cfs.profiles().config()
        target = zones.resolve_target(config, zone, what="zone", usage=zones.PURGE_USAGE)
        _print_start("Purging cache for", target)
        zones.purge(cfs.flarectl(), target)

    print_success(f"Cache purged for [bold]{escape(target.zone)}[/bold]")


@app.command("add-lamdera-app")
def add_lamdera_app(
    ctx: Context,
    domain: Optional[str] = Argument(
        None, help="The domain to configure. Defaults to the zone of the active profile."
    ),
) -> None:
    """
    Add the DNS record for a Lamdera app (proxied CNAME @ -> apps.lamdera.app).
    """

    cfs: CfSwitch = ctx.obj
    with error_boundary():
        config = cfs.profiles().config()
        target = zones.resolve_target(config, domain, what="domain", usage=zones.LAMDERA_APP_USAGE)
        _print_start("Adding Lamdera DNS record for", target)
        result = zones.add_lamdera_app(cfs.flarectl(), target)

    domain_markup = f"[bold]{escape(target.zone)}[/bold]"
    if result.outcome == zones.RecordOutcome.ALREADY_EXISTS:
        print_info(f"[yellow]✓[/yellow] DNS record already exists for {domain_markup}")
        return

    print_success(f"DNS record created: {domain_markup} -> {Flarectl.LAMDERA_TARGET} (proxied)")
    print_info("")
    print_info("[bold]Next step:[/bold]")
    print_info(f"DM Lamdera team with: {' and '.join(map(escape, result.verification_urls))}")
