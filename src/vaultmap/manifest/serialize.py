"""JSON form of a notes manifest."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..core.meta import NoteFrontmatter
from ..core.model import ManifestError, NoteEntry, NoteManifest

VERSION = 1


def _jsonable(value: Any) -> Any:
    """YAML frontmatter can carry dates; JSON cannot."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def entry_to_dict(entry: NoteEntry, include_body: bool = True) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": entry.id,
        "source_path": entry.source_path,
        "relative_path": entry.relative_path,
        "title": entry.title,
        "slug": entry.slug,
        "canonical_route": entry.canonical_route,
        "alias_routes": list(entry.alias_routes),
        "frontmatter": _jsonable(dict(entry.frontmatter)),
    }
    if include_body:
        data["body"] = entry.body
    return data


def error_to_dict(error: ManifestError) -> dict[str, Any]:
    return {
        "type": error.type,
        "message": error.message,
        "files": list(error.files),
        "route": error.route,
    }


def manifest_to_dict(manifest: NoteManifest, include_body: bool = True) -> dict[str, Any]:
    return {
        "version": VERSION,
        "root": manifest.root,
        "entries": [entry_to_dict(e, include_body) for e in manifest.entries],
        "errors": [error_to_dict(e) for e in manifest.errors],
    }


def manifest_from_dict(data: dict[str, Any]) -> NoteManifest:
    manifest = NoteManifest(root=data.get("root", ""))

    for item in data.get("entries", []):
        manifest.entries.append(NoteEntry(
            id=item["id"],
            source_path=item["source_path"],
            title=item.get("title"),
            slug=item["slug"],
            canonical_route=item["canonical_route"],
            alias_routes=item.get("alias_routes", []),
            frontmatter=NoteFrontmatter(item.get("frontmatter", {})),
            body=item.get("body", ""),
            relative_path=item.get("relative_path", ""),
        ))

    for item in data.get("errors", []):
        manifest.errors.append(ManifestError(
            type=item["type"],
            message=item["message"],
            files=item.get("files", []),
            route=item["route"],
        ))

    return manifest


def save_manifest_json(
    manifest: NoteManifest, output_path: Path, include_body: bool = True
) -> None:
    """Save manifest to a JSON file."""
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(manifest_to_dict(manifest, include_body), f, indent=2, ensure_ascii=False)


def load_manifest_json(input_path: Path) -> NoteManifest:
    """Load manifest from a JSON file."""
    with input_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return manifest_from_dict(data)
