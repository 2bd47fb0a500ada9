"""``package.json`` rewriting for generated projects."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fhevm_tools.errors import TemplateError


def rewrite_manifest(path: Path, *, name: str, description: str, homepage: str) -> dict[str, Any]:
    """Set the project identity fields of the manifest at *path* in place.

    Existing keys keep their position; keys the template lacks are appended.
    Returns the written manifest.

    Raises:
        TemplateError: if the file is not a JSON object.
    """
    try:
        manifest = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise TemplateError(f"Invalid JSON in {path.name}: {exc}") from exc
    if not isinstance(manifest, dict):
        raise TemplateError(f"{path.name} must contain a JSON object")

    manifest["name"] = name
    manifest["description"] = description
    manifest["homepage"] = homepage

    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return manifest
