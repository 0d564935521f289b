"""Apply resolved metadata to the generated ``package.json``."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .errors import ManifestError
from .metadata import ProjectMetadata

__all__ = ["patch_manifest", "updated_manifest"]


LOGGER = logging.getLogger(__name__)


def updated_manifest(
    manifest: Dict[str, Any],
    metadata: ProjectMetadata,
    *,
    entry_point: str = "index.mjs",
) -> Dict[str, Any]:
    """Return a copy of ``manifest`` carrying ``metadata``.

    Existing keys keep their position; keys missing from the template are
    appended. ``bin`` is replaced so the only command is the project name.
    """

    patched = dict(manifest)
    patched["name"] = metadata.name
    patched["description"] = metadata.description
    patched["author"] = metadata.author
    patched["license"] = metadata.license.value
    patched["bin"] = {metadata.name: f"./{entry_point}"}
    return patched


def patch_manifest(
    target_root: str | Path,
    metadata: ProjectMetadata,
    *,
    entry_point: str = "index.mjs",
    manifest_name: str = "package.json",
) -> Path:
    """Rewrite the manifest inside ``target_root`` with ``metadata`` values."""

    path = Path(target_root) / manifest_name
    try:
        manifest = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ManifestError(path, exc) from exc

    if not isinstance(manifest, dict):
        raise ManifestError(path, "expected a JSON object at the top level")

    patched = updated_manifest(manifest, metadata, entry_point=entry_point)
    try:
        path.write_text(json.dumps(patched, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ManifestError(path, exc) from exc

    LOGGER.info("Updated %s", manifest_name)
    return path
