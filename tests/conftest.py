from __future__ import annotations

import subprocess
import sys
from collections import deque
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from climaker.metadata import License, ProjectMetadata  # noqa: E402
from climaker.steps import Identity  # noqa: E402


class FakeRunner:
    """Stand-in for :func:`subprocess.run` recording every command."""

    def __init__(
        self,
        failures: Mapping[str, BaseException] | None = None,
        outputs: Mapping[str, str] | None = None,
    ) -> None:
        self.calls: list[tuple[list[str], dict[str, Any]]] = []
        self.failures = dict(failures or {})
        self.outputs = dict(outputs or {})

    def __call__(self, command: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append((list(command), kwargs))
        key = " ".join(command)
        failure = self.failures.get(key)
        if failure is not None:
            raise failure
        return subprocess.CompletedProcess(list(command), 0, stdout=self.outputs.get(key, ""), stderr="")

    @property
    def commands(self) -> list[str]:
        return [" ".join(command) for command, _ in self.calls]


class FakeIdentity:
    def __init__(self, name: str = "Ada Lovelace", email: str = "ada@example.com") -> None:
        self.identity = Identity(name=name, email=email)
        self.lookups = 0

    def lookup(self) -> Identity:
        self.lookups += 1
        return self.identity


class FakePrompter:
    """Answers prompts from a queue; an empty answer selects the default."""

    def __init__(self, answers: Sequence[str]) -> None:
        self.answers = deque(answers)
        self.messages: list[str] = []
        self.errors: list[str] = []

    def text(self, message: str, *, default: Optional[str] = None, validate=None) -> str:
        while True:
            self.messages.append(message)
            answer = self.answers.popleft() or (default or "")
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.errors.append(error)

    def choice(self, message: str, choices: Sequence[Tuple[str, str]], *, default: str) -> str:
        self.messages.append(message)
        answer = self.answers.popleft() or default
        assert answer in [value for value, _ in choices]
        return answer


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for variable in (
        "CLIMAKER_TEMPLATE_DIR",
        "CLIMAKER_NPM",
        "CLIMAKER_INSTALL_TIMEOUT",
        "CLIMAKER_LOG_LEVEL",
    ):
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture()
def metadata() -> ProjectMetadata:
    return ProjectMetadata.build(
        name="demo-cli",
        description="d",
        author="A",
        license=License.ISC,
        email="a@example.com",
    )


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def identity() -> FakeIdentity:
    return FakeIdentity()
