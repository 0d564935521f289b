"""Turn a template tree plus project metadata into a concrete project tree.

Every file in the template tree is handled by exactly one
:class:`FilePolicy`:

* files ending in the template suffix are rendered with
  :class:`~climaker.template.TemplateRenderer` and written without the suffix;
* designated dotfile templates (``gitignore``) are copied verbatim under their
  dot-prefixed name;
* everything else is copied byte for byte.

The walk is sequential and depth first. Any I/O or rendering failure aborts the
walk with a :class:`~climaker.errors.TemplateError`; files written before the
failure are left in place.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .config import ScaffoldSettings
from .errors import TargetConflictError, TemplateError
from .metadata import ProjectMetadata
from .template import TemplateRenderer, TemplateRenderingError, escape_js_string

__all__ = [
    "CopyPolicy",
    "DotfilePolicy",
    "FilePolicy",
    "SubstitutePolicy",
    "TemplateMaterializer",
    "ensure_target_available",
    "make_executable",
]


LOGGER = logging.getLogger(__name__)

_EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH

_SCRIPT_SUFFIXES = (".mjs", ".cjs", ".js")


def ensure_target_available(target_root: str | Path) -> None:
    """Raise :class:`TargetConflictError` unless ``target_root`` is absent or empty."""

    target = Path(target_root)
    if not target.exists():
        return
    if not target.is_dir():
        raise TargetConflictError(target)
    if any(target.iterdir()):
        raise TargetConflictError(target)


def make_executable(path: Path) -> None:
    """Add user, group and other execute bits to ``path``."""

    mode = path.stat().st_mode
    path.chmod(mode | _EXECUTE_BITS)


class FilePolicy(ABC):
    """Strategy writing one template file into the target directory."""

    @abstractmethod
    def target_name(self, source: Path) -> str:
        """Return the filename ``source`` is written under."""

    @abstractmethod
    def write(self, source: Path, destination: Path, context: Mapping[str, str]) -> None:
        """Produce ``destination`` from ``source``."""

    def apply(self, source: Path, target_dir: Path, context: Mapping[str, str]) -> Path:
        destination = target_dir / self.target_name(source)
        self.write(source, destination, context)
        return destination


@dataclass(slots=True)
class SubstitutePolicy(FilePolicy):
    """Render ``{{fieldName}}`` placeholders and strip the template suffix.

    Values substituted into JavaScript sources are escaped so they stay valid
    inside quoted string literals.
    """

    suffix: str
    entry_point: str
    renderer: TemplateRenderer = field(default_factory=TemplateRenderer)
    script_renderer: TemplateRenderer = field(
        default_factory=lambda: TemplateRenderer(escape=escape_js_string)
    )

    def renderer_for(self, destination: Path) -> TemplateRenderer:
        if destination.suffix in _SCRIPT_SUFFIXES:
            return self.script_renderer
        return self.renderer

    def target_name(self, source: Path) -> str:
        return source.name[: -len(self.suffix)]

    def write(self, source: Path, destination: Path, context: Mapping[str, str]) -> None:
        self.renderer_for(destination).render_file(source, context, target=destination)
        if destination.name == self.entry_point and os.name == "posix":
            make_executable(destination)
        LOGGER.info("Created %s", destination.name)


@dataclass(slots=True)
class DotfilePolicy(FilePolicy):
    """Copy a file verbatim under its dot-prefixed name."""

    names: Mapping[str, str]

    def target_name(self, source: Path) -> str:
        return self.names[source.name]

    def write(self, source: Path, destination: Path, context: Mapping[str, str]) -> None:
        shutil.copyfile(source, destination)
        LOGGER.info("Created %s", destination.name)


class CopyPolicy(FilePolicy):
    """Copy a file byte for byte."""

    def target_name(self, source: Path) -> str:
        return source.name

    def write(self, source: Path, destination: Path, context: Mapping[str, str]) -> None:
        shutil.copyfile(source, destination)
        LOGGER.info("Copied %s", destination.name)


class TemplateMaterializer:
    """Walk a template tree and write the substituted project tree."""

    def __init__(
        self,
        settings: ScaffoldSettings | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings or ScaffoldSettings()
        renderer = renderer or TemplateRenderer()
        self._substitute = SubstitutePolicy(
            suffix=self.settings.template_suffix,
            entry_point=self.settings.entry_point,
            renderer=renderer,
            script_renderer=TemplateRenderer(missing=renderer.missing, escape=escape_js_string),
        )
        self._dotfile = DotfilePolicy(names=dict(self.settings.dotfiles))
        self._copy = CopyPolicy()

    def classify(self, source: Path) -> FilePolicy:
        """Select the policy responsible for ``source``."""

        if source.name.endswith(self.settings.template_suffix) and source.name != self.settings.template_suffix:
            return self._substitute
        if source.name in self.settings.dotfiles:
            return self._dotfile
        return self._copy

    def materialize(
        self,
        template_root: str | Path,
        target_root: str | Path,
        metadata: ProjectMetadata,
    ) -> Path:
        """Materialize ``template_root`` into ``target_root`` for ``metadata``.

        ``target_root`` must be missing or an empty directory; otherwise a
        :class:`TargetConflictError` is raised before anything is written.
        """

        template_root = Path(template_root)
        target_root = Path(target_root)
        if not template_root.is_dir():
            raise TemplateError(template_root, FileNotFoundError("template directory not found"))

        ensure_target_available(target_root)
        self._walk(template_root, target_root, metadata.context())
        return target_root

    def _walk(self, source_dir: Path, target_dir: Path, context: Mapping[str, str]) -> None:
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            entries = sorted(source_dir.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise TemplateError(source_dir, exc) from exc

        for source in entries:
            if source.is_dir():
                self._walk(source, target_dir / source.name, context)
                continue

            policy = self.classify(source)
            try:
                policy.apply(source, target_dir, context)
            except (OSError, UnicodeDecodeError, TemplateRenderingError) as exc:
                raise TemplateError(source, exc) from exc
