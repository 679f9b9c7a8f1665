import pytest

from cfswitch import zones
from cfswitch.errors import DanglingCurrentError, NoActiveProfileError, NoZoneSpecifiedError
from cfswitch.profiles.config import Profile, ProfileConfig
from cfswitch.tools.flarectl import CommandResult, CommandRunner, Flarectl, FlarectlError
from cfswitch.zones import LamderaAppResult, RecordOutcome, Target


class FakeRunner(CommandRunner):
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.result = CommandResult(returncode, stdout, stderr)
        self.commands: list[list[str]] = []

    def run(self, command: list[str], env: dict[str, str]) -> CommandResult:
        self.commands.append(command)
        return self.result


WITH_ZONE = Profile("e1", "t1", zone="default.com")
WITHOUT_ZONE = Profile("e2", "t2")


def test__resolve_target__prefers_explicit_zone() -> None:
    config = ProfileConfig({"work": WITH_ZONE}, current="work")
    assert zones.resolve_target(config, "explicit.com") == Target("work", WITH_ZONE, "explicit.com")
    assert zones.resolve_target(config, None) == Target("work", WITH_ZONE, "default.com")


def test__resolve_target__no_zone() -> None:
    config = ProfileConfig({"work": WITHOUT_ZONE}, current="work")
    assert zones.resolve_target(config, "explicit.com").zone == "explicit.com"

    with pytest.raises(NoZoneSpecifiedError) as excinfo:
        zones.resolve_target(config, None, what="domain", usage=zones.LAMDERA_APP_USAGE)
    assert excinfo.value.message == "No domain specified and profile 'work' has no default zone."
    assert excinfo.value.hint == zones.LAMDERA_APP_USAGE


def test__resolve_target__no_active_profile() -> None:
    with pytest.raises(NoActiveProfileError):
        zones.resolve_target(ProfileConfig({"work": WITH_ZONE}), "explicit.com")


def test__resolve_target__dangling_current() -> None:
    with pytest.raises(DanglingCurrentError):
        zones.resolve_target(ProfileConfig({"work": WITH_ZONE}, current="gone"), "explicit.com")


def test__purge() -> None:
    runner = FakeRunner()
    zones.purge(Flarectl(runner), Target("work", WITH_ZONE, "example.com"))
    assert runner.commands == [["flarectl", "zone", "purge", "--zone", "example.com", "--everything"]]


def test__add_lamdera_app__created() -> None:
    runner = FakeRunner()
    target = Target("work", WITH_ZONE, "my.app.com")
    result = zones.add_lamdera_app(Flarectl(runner), target)

    assert result == LamderaAppResult(target, RecordOutcome.CREATED)
    assert result.verification_urls == ["https://my.app.com/", "https://my-app-com.lamdera.app/"]
    assert runner.commands[0][-3:] == ["--content", "apps.lamdera.app", "--proxy"]


@pytest.mark.parametrize(
    "stdout,stderr",
    [
        ("", "error: record already exists"),
        ("Error: An identical record already exists. (81057)", ""),
    ],
)
def test__add_lamdera_app__already_exists(stdout: str, stderr: str) -> None:
    target = Target("work", WITH_ZONE, "example.com")
    result = zones.add_lamdera_app(Flarectl(FakeRunner(1, stdout, stderr)), target)
    assert result.outcome == RecordOutcome.ALREADY_EXISTS


def test__add_lamdera_app__failure() -> None:
    target = Target("work", WITH_ZONE, "example.com")
    with pytest.raises(FlarectlError) as excinfo:
        zones.add_lamdera_app(Flarectl(FakeRunner(1, "", "permission denied")), target)
    assert excinfo.value.message == "Failed to create DNS record: permission denied"
