"""Configuration helpers shared by the scaffolder and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

__all__ = ["DEFAULT_TEMPLATE_DIR", "ScaffoldSettings"]


DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "scaffold_template"


@dataclass(slots=True)
class ScaffoldSettings:
    """Knobs controlling how a template tree becomes a project.

    Attributes
    ----------
    template_dir:
        Root of the template tree copied into every new project.
    fallback_name:
        Project name used when prompts are skipped and no name was given.
    template_suffix:
        Filename suffix marking files that receive placeholder substitution.
    entry_point:
        Name of the generated executable script. It is written with the
        execute permission bits set.
    dotfiles:
        Template filenames that are written under a different, dot-prefixed
        name. Packaging tools drop dotfiles, so they are stored without one.
    manifest_name:
        The generated package manifest patched after materialization.
    install_command:
        Command used to install the generated project's dependencies.
    install_timeout:
        Seconds to wait for ``install_command``. ``None`` waits forever.
    """

    template_dir: Path = DEFAULT_TEMPLATE_DIR
    fallback_name: str = "cli-app"
    template_suffix: str = ".template"
    entry_point: str = "index.mjs"
    dotfiles: Mapping[str, str] = field(default_factory=lambda: {"gitignore": ".gitignore"})
    manifest_name: str = "package.json"
    install_command: tuple[str, ...] = ("npm", "install")
    install_timeout: float | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ScaffoldSettings":
        """Build settings, honouring ``CLIMAKER_*`` environment overrides.

        ``CLIMAKER_TEMPLATE_DIR`` points at an alternative template tree,
        ``CLIMAKER_NPM`` replaces the ``npm`` executable and
        ``CLIMAKER_INSTALL_TIMEOUT`` bounds the install step in seconds.
        """

        environment: Mapping[str, str] = env if env is not None else os.environ
        settings = cls()

        template_dir = environment.get("CLIMAKER_TEMPLATE_DIR", "").strip()
        if template_dir:
            settings.template_dir = Path(template_dir).expanduser()

        npm = environment.get("CLIMAKER_NPM", "").strip()
        if npm:
            settings.install_command = (npm, *settings.install_command[1:])

        timeout = environment.get("CLIMAKER_INSTALL_TIMEOUT", "").strip()
        if timeout:
            try:
                value = float(timeout)
            except ValueError as exc:
                raise ValueError(
                    f"CLIMAKER_INSTALL_TIMEOUT must be a number of seconds, got '{timeout}'"
                ) from exc
            if value <= 0:
                raise ValueError("CLIMAKER_INSTALL_TIMEOUT must be positive")
            settings.install_timeout = value

        return settings
