"""Resolve a :class:`~climaker.metadata.ProjectMetadata` from arguments and prompts."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence, Tuple

from rich.console import Console
from rich.prompt import Prompt

from .errors import ValidationError
from .metadata import License, ProjectMetadata
from .naming import derive_title, is_valid_name
from .steps import GitIdentityProvider, IdentityProvider

__all__ = ["Prompter", "RichPrompter", "resolve_metadata", "validate_name"]


Validator = Callable[[str], Optional[str]]

INVALID_NAME_MESSAGE = "Invalid package name (use letters, digits, hyphens or underscores)"


def validate_name(value: str) -> Optional[str]:
    """Return an error message for an unusable project name, else ``None``."""

    return None if is_valid_name(value) else INVALID_NAME_MESSAGE


class Prompter(Protocol):
    """Interactive question/answer capability used by :func:`resolve_metadata`."""

    def text(
        self,
        message: str,
        *,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> str:
        """Ask for free text, re-asking until ``validate`` returns ``None``."""

    def choice(self, message: str, choices: Sequence[Tuple[str, str]], *, default: str) -> str:
        """Ask the user to pick one ``(value, label)`` pair and return the value."""


class RichPrompter:
    """Terminal prompter backed by :mod:`rich.prompt`."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def text(
        self,
        message: str,
        *,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> str:
        while True:
            answer = Prompt.ask(
                message,
                default=default or "",
                show_default=bool(default),
                console=self.console,
            )
            answer = answer.strip()
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.console.print(f"[red]{error}[/red]")

    def choice(self, message: str, choices: Sequence[Tuple[str, str]], *, default: str) -> str:
        for value, label in choices:
            self.console.print(f"  [cyan]{value}[/cyan]  {label}")
        return Prompt.ask(
            message,
            choices=[value for value, _ in choices],
            default=default,
            console=self.console,
        )


def resolve_metadata(
    name: Optional[str] = None,
    *,
    skip_prompts: bool = False,
    identity: IdentityProvider | None = None,
    prompter: Prompter | None = None,
    fallback_name: str = "cli-app",
) -> ProjectMetadata:
    """Build the project metadata for this invocation.

    With ``skip_prompts`` every field takes its default: ``name`` or
    ``fallback_name``, the derived title, an empty description, the git
    identity as author and the MIT license. Otherwise each missing value is
    asked for, and an invalid name is re-prompted.

    Raises
    ------
    ValidationError
        If ``name`` was supplied and is not a valid project name.
    """

    if name is not None and not is_valid_name(name):
        raise ValidationError(f"invalid project name '{name}': {INVALID_NAME_MESSAGE}")

    user = (identity or GitIdentityProvider()).lookup()

    if skip_prompts:
        return ProjectMetadata.build(
            name=name or fallback_name,
            description="",
            author=user.name,
            license=License.MIT,
            email=user.email,
        )

    ask = prompter or RichPrompter()
    package_name = name or ask.text("Package/directory name", validate=validate_name)
    title = ask.text("Human-readable title", default=derive_title(package_name))
    description = ask.text("Project description")
    author = ask.text("Author", default=user.name or None)
    license_value = ask.choice(
        "License",
        [(item.value, item.label) for item in License],
        default=License.MIT.value,
    )

    return ProjectMetadata.build(
        name=package_name,
        title=title,
        description=description,
        author=author,
        license=license_value,
        email=user.email,
    )
