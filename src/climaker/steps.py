"""External collaborators: git identity lookup, ``git init`` and ``npm install``.

The post-processing steps are best effort. They never raise; failures are
reported through a :class:`StepResult` carrying an
:class:`~climaker.errors.ExternalStepWarning` so the caller decides how fatal
they are.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, Sequence, runtime_checkable

from .errors import ExternalStepWarning

__all__ = [
    "GitIdentityProvider",
    "Identity",
    "IdentityProvider",
    "StepResult",
    "init_version_control",
    "install_dependencies",
]


LOGGER = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


@dataclass(frozen=True, slots=True)
class Identity:
    """Default author details."""

    name: str = ""
    email: str = ""


@runtime_checkable
class IdentityProvider(Protocol):
    """Source of the default author name and e-mail."""

    def lookup(self) -> Identity:
        """Return the identity, using empty strings for unknown values."""


class GitIdentityProvider:
    """Read ``user.name`` and ``user.email`` from the git configuration."""

    def __init__(self, runner: Runner | None = None) -> None:
        self._runner = runner

    def _get(self, key: str) -> str:
        runner = self._runner or subprocess.run
        result = runner(
            ["git", "config", "--get", key],
            capture_output=True,
            check=True,
            text=True,
        )
        return result.stdout.strip()

    def lookup(self) -> Identity:
        try:
            return Identity(name=self._get("user.name"), email=self._get("user.email"))
        except (subprocess.CalledProcessError, OSError):
            LOGGER.warning("Could not get git user info")
            return Identity()


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of a best-effort external step."""

    step: str
    ok: bool
    message: str = ""
    warning: ExternalStepWarning | None = None

    @classmethod
    def success(cls, step: str, message: str = "") -> "StepResult":
        return cls(step=step, ok=True, message=message)

    @classmethod
    def failure(cls, step: str, detail: str) -> "StepResult":
        warning = ExternalStepWarning(step, detail)
        return cls(step=step, ok=False, message=str(warning), warning=warning)


def _describe(exc: BaseException) -> str:
    if isinstance(exc, subprocess.CalledProcessError):
        output = (exc.stderr or exc.stdout or "").strip()
        detail = f"exit status {exc.returncode}"
        return f"{detail}: {output}" if output else detail
    if isinstance(exc, subprocess.TimeoutExpired):
        return f"timed out after {exc.timeout:g}s"
    return str(exc)


def _run_step(
    step: str,
    command: Sequence[str],
    cwd: Path,
    *,
    runner: Runner | None,
    timeout: float | None = None,
) -> StepResult:
    run = runner or subprocess.run
    try:
        run(
            list(command),
            cwd=cwd,
            capture_output=True,
            check=True,
            text=True,
            timeout=timeout,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as exc:
        result = StepResult.failure(step, _describe(exc))
        LOGGER.debug(result.message)
        return result
    return StepResult.success(step)


def init_version_control(target_root: str | Path, *, runner: Runner | None = None) -> StepResult:
    """Run ``git init`` inside ``target_root``."""

    result = _run_step("git init", ["git", "init"], Path(target_root), runner=runner)
    if result.ok:
        LOGGER.info("Initialized git repository")
        return StepResult.success(result.step, "Initialized git repository")
    return result


def install_dependencies(
    target_root: str | Path,
    *,
    command: Sequence[str] = ("npm", "install"),
    timeout: float | None = None,
    runner: Runner | None = None,
) -> StepResult:
    """Install the generated project's dependencies.

    This can take minutes. A ``timeout`` expiring counts as a failed step.
    """

    LOGGER.info("Installing dependencies... This might take a few minutes.")
    step = " ".join(command)
    result = _run_step(step, command, Path(target_root), runner=runner, timeout=timeout)
    if result.ok:
        LOGGER.info("Dependencies installed successfully")
        return StepResult.success(step, "Dependencies installed successfully")
    return result
