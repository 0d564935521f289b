"""Custom exception types raised while scaffolding a project."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ExternalStepWarning",
    "ManifestError",
    "ScaffoldError",
    "TargetConflictError",
    "TemplateError",
    "ValidationError",
]


class ScaffoldError(RuntimeError):
    """Base class for fatal scaffolding failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ValidationError(ScaffoldError, ValueError):
    """Raised when project metadata such as the name is malformed."""


class TargetConflictError(ScaffoldError):
    """Raised when the destination directory exists and is not empty."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Directory {self.path} already exists and is not empty.")


class TemplateError(ScaffoldError):
    """Raised when reading a template or writing its output fails."""

    def __init__(self, path: str | Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"failed to materialize {self.path}: {cause}")


class ManifestError(ScaffoldError):
    """Raised when the generated package manifest cannot be patched."""

    def __init__(self, path: str | Path, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"failed to update manifest {self.path}: {cause}")


class ExternalStepWarning(UserWarning):
    """Describes a failed best-effort step such as ``git init``."""

    def __init__(self, step: str, detail: str) -> None:
        self.step = step
        self.detail = detail
        super().__init__(f"{step} failed: {detail}")
