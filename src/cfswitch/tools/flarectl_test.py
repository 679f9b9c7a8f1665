from pathlib import Path

import pytest

from cfswitch.profiles.config import Profile
from cfswitch.tools.flarectl import (
    CommandResult,
    CommandRunner,
    Flarectl,
    FlarectlError,
    FlarectlMissingError,
    SubprocessRunner,
)


class FakeRunner(CommandRunner):
    def __init__(self, result: CommandResult | OSError) -> None:
        self.result = result
        self.calls: list[tuple[list[str], dict[str, str]]] = []

    def run(self, command: list[str], env: dict[str, str]) -> CommandResult:
        self.calls.append((command, env))
        if isinstance(self.result, OSError):
            raise self.result
        return self.result


PROFILE = Profile(email="me@example.com", token="secret")


def test__Flarectl__zone_purge() -> None:
    runner = FakeRunner(CommandResult(0, "", ""))
    Flarectl(runner).zone_purge(PROFILE, "example.com")

    assert runner.calls == [
        (
            ["flarectl", "zone", "purge", "--zone", "example.com", "--everything"],
            {"CF_API_EMAIL": "me@example.com", "CF_API_KEY": "secret", "CF_API_TOKEN": "secret"},
        )
    ]


def test__Flarectl__dns_create() -> None:
    runner = FakeRunner(CommandResult(0, "", ""))
    Flarectl(runner, binary="/opt/bin/flarectl").dns_create(
        PROFILE, zone="example.com", type="CNAME", name="@", content="apps.lamdera.app", proxy=True
    )

    command, env = runner.calls[0]
    assert command == [
        "/opt/bin/flarectl",
        "dns",
        "create",
        "--zone",
        "example.com",
        "--type",
        "CNAME",
        "--name",
        "@",
        "--content",
        "apps.lamdera.app",
        "--proxy",
    ]
    assert env["CF_API_TOKEN"] == "secret"


def test__Flarectl__nonzero_exit_raises_FlarectlError() -> None:
    runner = FakeRunner(CommandResult(1, "some output", "invalid zone\n"))

    with pytest.raises(FlarectlError) as excinfo:
        Flarectl(runner).zone_purge(PROFILE, "example.com")

    assert excinfo.value.statuscode == 1
    assert excinfo.value.message == "Failed to purge: invalid zone"
    assert excinfo.value.output == "invalid zone\nsome output"


def test__Flarectl__nonzero_exit_without_output() -> None:
    with pytest.raises(FlarectlError) as excinfo:
        Flarectl(FakeRunner(CommandResult(3, "", ""))).zone_purge(PROFILE, "example.com")
    assert str(excinfo.value) == "Failed to purge: flarectl exited with status code 3"


def test__Flarectl__launch_failure_raises_FlarectlMissingError() -> None:
    runner = FakeRunner(FileNotFoundError(2, "No such file or directory"))

    with pytest.raises(FlarectlMissingError) as excinfo:
        Flarectl(runner).zone_purge(PROFILE, "example.com")

    assert excinfo.value.message == "Failed to run flarectl: No such file or directory"
    assert excinfo.value.hint == FlarectlMissingError.INSTALL_HINT


def test__SubprocessRunner__missing_binary() -> None:
    flarectl = Flarectl(SubprocessRunner(), binary="cf-switch-test-binary-that-does-not-exist")
    with pytest.raises(FlarectlMissingError):
        flarectl.zone_purge(PROFILE, "example.com")


def test__Flarectl__dns_create_failure_reports_stderr_and_stdout() -> None:
    runner = FakeRunner(CommandResult(1, "record rejected by zone\n", "Error: "))

    with pytest.raises(FlarectlError) as excinfo:
        Flarectl(runner).dns_create(PROFILE, zone="example.com", type="CNAME", name="@", content="x")
    assert excinfo.value.message == "Failed to create DNS record: Error: record rejected by zone"


def test__Flarectl__dns_create_failure_with_stdout_only() -> None:
    runner = FakeRunner(CommandResult(1, "invalid zone\n", ""))

    with pytest.raises(FlarectlError) as excinfo:
        Flarectl(runner).dns_create(PROFILE, zone="example.com", type="CNAME", name="@", content="x")
    assert excinfo.value.message == "Failed to create DNS record: invalid zone"


def test__SubprocessRunner__undecodable_output_is_replaced(tmp_path: Path) -> None:
    script = tmp_path / "flarectl"
    script.write_text("#!/bin/sh\nprintf 'bad \\377 bytes' >&2\nexit 1\n")
    script.chmod(0o755)

    with pytest.raises(FlarectlError) as excinfo:
        Flarectl(SubprocessRunner(), binary=str(script)).zone_purge(PROFILE, "example.com")
    assert excinfo.value.statuscode == 1
    assert excinfo.value.message == "Failed to purge: bad \ufffd bytes"
