"""
Operations on Cloudflare zones that are performed with the credentials of the active profile through `flarectl`.
"""

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from cfswitch.errors import NoActiveProfileError, NoZoneSpecifiedError
from cfswitch.profiles.config import Profile, ProfileConfig
from cfswitch.tools.flarectl import Flarectl, FlarectlError

ALREADY_EXISTS_MARKER = "already exists"
PURGE_USAGE = (
    "Usage: cf-switch purge <zone> or set a default zone with: cf-switch add <name> -e <email> -t <token> -z <zone>"
)
LAMDERA_APP_USAGE = "Usage: cf-switch add-lamdera-app <domain>"


@dataclass(frozen=True)
class Target:
    """
    The active profile and the zone an operation is performed on.
    """

    profile_name: str
    profile: Profile
    zone: str


class RecordOutcome(str, Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already-exists"


@dataclass(frozen=True)
class LamderaAppResult:
    target: Target
    outcome: RecordOutcome

    @property
    def verification_urls(self) -> list[str]:
        """
        The URLs to send to the Lamdera team to have the domain connected to the app.
        """

        domain = self.target.zone
        return [f"https://{domain}/", f"https://{domain.replace('.', '-')}.lamdera.app/"]


def resolve_target(config: ProfileConfig, zone: str | None, what: str = "zone", usage: str | None = None) -> Target:
    """
    Determine the active profile and the zone to operate on. An explicitly given *zone* takes precedence over the
    profile's default zone.

    Raises:
        NoActiveProfileError: If no profile is active.
        DanglingCurrentError: If the active profile no longer exists.
        NoZoneSpecifiedError: If neither *zone* is given nor the profile has a default zone.
    """

    current = config.current_profile()
    if current is None:
        raise NoActiveProfileError()

    name, profile = current
    target_zone = zone or profile.zone
    if not target_zone:
        raise NoZoneSpecifiedError(name, what, usage or PURGE_USAGE)
    return Target(name, profile, target_zone)


def purge(flarectl: Flarectl, target: Target) -> None:
    """
    Purge the entire cache of the target zone.

    Raises:
        FlarectlError: If `flarectl` fails.
        FlarectlMissingError: If `flarectl` cannot be run.
    """

    logger.info("Purging cache for {} using profile '{}'", target.zone, target.profile_name)
    flarectl.zone_purge(target.profile, target.zone)


def add_lamdera_app(flarectl: Flarectl, target: Target) -> LamderaAppResult:
    """
    Create a proxied `CNAME` record from the root of the domain to the Lamdera app host. A record that already exists
    is not an error.

    Raises:
        FlarectlError: If `flarectl` fails for any other reason.
        FlarectlMissingError: If `flarectl` cannot be run.
    """

    logger.info("Adding Lamdera DNS record for {} using profile '{}'", target.zone, target.profile_name)
    try:
        flarectl.dns_create(
            target.profile,
            zone=target.zone,
            type="CNAME",
            name="@",
            content=Flarectl.LAMDERA_TARGET,
            proxy=True,
        )
    except FlarectlError as exc:
        if ALREADY_EXISTS_MARKER in exc.output:
            logger.debug("DNS record for {} already exists", target.zone)
            return LamderaAppResult(target, RecordOutcome.ALREADY_EXISTS)
        raise
    return LamderaAppResult(target, RecordOutcome.CREATED)
