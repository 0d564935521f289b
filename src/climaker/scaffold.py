"""Project scaffolding orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import ScaffoldSettings
from .errors import ExternalStepWarning
from .manifest import patch_manifest
from .materialize import TemplateMaterializer, ensure_target_available
from .metadata import ProjectMetadata
from .steps import Runner, StepResult, init_version_control, install_dependencies

__all__ = ["ProjectScaffolder", "ScaffoldReport"]


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScaffoldReport:
    """Result of a completed scaffold run."""

    metadata: ProjectMetadata
    target: Path
    steps: List[StepResult] = field(default_factory=list)

    @property
    def warnings(self) -> List[ExternalStepWarning]:
        """Warnings raised by best-effort steps that failed."""

        return [step.warning for step in self.steps if step.warning is not None]

    def next_steps(self) -> str:
        return (
            f"CLI application {self.metadata.name} created successfully!\n"
            "\n"
            "Next steps:\n"
            f"$ cd {self.metadata.name}\n"
            "$ npm link    # To make the CLI available globally\n"
            "$ npm start   # To run the CLI\n"
        )


@dataclass(slots=True)
class ProjectScaffolder:
    """Create a Node CLI project from the bundled template tree."""

    settings: ScaffoldSettings
    materializer: TemplateMaterializer
    runner: Runner | None

    def __init__(
        self,
        settings: ScaffoldSettings | None = None,
        materializer: TemplateMaterializer | None = None,
        runner: Runner | None = None,
    ) -> None:
        self.settings = settings or ScaffoldSettings()
        self.materializer = materializer or TemplateMaterializer(self.settings)
        self.runner = runner

    def create(
        self,
        metadata: ProjectMetadata,
        parent_dir: str | Path,
        *,
        git: bool = True,
        install: bool = True,
    ) -> ScaffoldReport:
        """Create ``metadata.name`` inside ``parent_dir``.

        Conflicts, template failures and manifest failures propagate. Failures
        of ``git init`` and the dependency install are recorded on the report
        as warnings instead.
        """

        target = Path(parent_dir).expanduser().resolve() / metadata.name
        ensure_target_available(target)

        self.materializer.materialize(self.settings.template_dir, target, metadata)
        patch_manifest(
            target,
            metadata,
            entry_point=self.settings.entry_point,
            manifest_name=self.settings.manifest_name,
        )

        report = ScaffoldReport(metadata=metadata, target=target)
        if git:
            report.steps.append(init_version_control(target, runner=self.runner))
        if install:
            report.steps.append(
                install_dependencies(
                    target,
                    command=self.settings.install_command,
                    timeout=self.settings.install_timeout,
                    runner=self.runner,
                )
            )

        LOGGER.info("Project created at %s", target)
        return report
