from __future__ import annotations

import logging
import subprocess
from pathlib import Path

import pytest

from climaker.errors import ExternalStepWarning
from climaker.steps import GitIdentityProvider, Identity, IdentityProvider, init_version_control, install_dependencies

from conftest import FakeRunner


def test_git_identity_provider_reads_config():
    runner = FakeRunner(outputs={"git config --get user.name": "Ada\n", "git config --get user.email": "ada@example.com\n"})
    identity = GitIdentityProvider(runner).lookup()
    assert identity == Identity(name="Ada", email="ada@example.com")
    assert isinstance(GitIdentityProvider(runner), IdentityProvider)


def test_git_identity_provider_falls_back_to_empty_strings():
    runner = FakeRunner(
        failures={"git config --get user.name": subprocess.CalledProcessError(1, ["git", "config"])}
    )
    assert GitIdentityProvider(runner).lookup() == Identity(name="", email="")


def test_git_identity_provider_handles_missing_git():
    runner = FakeRunner(failures={"git config --get user.name": FileNotFoundError("git")})
    assert GitIdentityProvider(runner).lookup() == Identity()


def test_init_version_control_success(tmp_path: Path, runner: FakeRunner):
    result = init_version_control(tmp_path, runner=runner)

    assert result.ok
    assert result.warning is None
    assert runner.commands == ["git init"]
    assert runner.calls[0][1]["cwd"] == tmp_path


def test_init_version_control_failure_is_not_raised(tmp_path: Path):
    error = subprocess.CalledProcessError(128, ["git", "init"], stderr="fatal: nope")
    result = init_version_control(tmp_path, runner=FakeRunner(failures={"git init": error}))

    assert not result.ok
    assert isinstance(result.warning, ExternalStepWarning)
    assert result.warning.step == "git init"
    assert "fatal: nope" in result.message


def test_install_dependencies_passes_command_and_timeout(tmp_path: Path, runner: FakeRunner):
    result = install_dependencies(tmp_path, command=("pnpm", "install"), timeout=30, runner=runner)

    assert result.ok
    assert runner.commands == ["pnpm install"]
    assert runner.calls[0][1]["timeout"] == 30


def test_install_dependencies_timeout_is_a_failure(tmp_path: Path):
    runner = FakeRunner(failures={"npm install": subprocess.TimeoutExpired(["npm", "install"], 5)})
    result = install_dependencies(tmp_path, timeout=5, runner=runner)

    assert not result.ok
    assert "timed out after 5s" in result.message


def test_install_dependencies_missing_executable(tmp_path: Path):
    runner = FakeRunner(failures={"npm install": FileNotFoundError("npm")})
    result = install_dependencies(tmp_path, runner=runner)

    assert not result.ok
    assert result.message.startswith("npm install failed")


def test_step_failures_are_not_logged_as_warnings(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    error = subprocess.CalledProcessError(128, ["git", "init"])
    with caplog.at_level(logging.DEBUG, logger="climaker"):
        result = init_version_control(tmp_path, runner=FakeRunner(failures={"git init": error}))

    assert not result.ok
    assert [record for record in caplog.records if record.levelno >= logging.WARNING] == []
    assert any(result.message in record.getMessage() for record in caplog.records)
