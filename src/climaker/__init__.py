"""Scaffold new Node.js command-line applications.

The package resolves project metadata from arguments or interactive prompts,
materializes a bundled template tree with ``{{fieldName}}`` substitution,
patches the generated ``package.json`` and optionally runs ``git init`` and
``npm install``. The pieces can be reused programmatically or driven through
the ``climaker`` command.
"""

from __future__ import annotations

__version__ = "1.0.0"

from .config import ScaffoldSettings
from .errors import (
    ExternalStepWarning,
    ManifestError,
    ScaffoldError,
    TargetConflictError,
    TemplateError,
    ValidationError,
)
from .manifest import patch_manifest
from .materialize import TemplateMaterializer, ensure_target_available
from .metadata import License, ProjectMetadata
from .naming import derive_title, is_valid_name
from .prompts import resolve_metadata
from .scaffold import ProjectScaffolder, ScaffoldReport
from .template import TemplateRenderer, TemplateRenderingError, find_placeholders

__all__ = [
    "ExternalStepWarning",
    "License",
    "ManifestError",
    "ProjectMetadata",
    "ProjectScaffolder",
    "ScaffoldError",
    "ScaffoldReport",
    "ScaffoldSettings",
    "TargetConflictError",
    "TemplateError",
    "TemplateMaterializer",
    "TemplateRenderer",
    "TemplateRenderingError",
    "ValidationError",
    "derive_title",
    "ensure_target_available",
    "find_placeholders",
    "is_valid_name",
    "patch_manifest",
    "resolve_metadata",
]
