"""Slug, route and identity derivation for vault notes."""

import os
import re
from typing import Any, Mapping

from ..core.meta import list_field, text_field
from ..core.utils import normalize_slug

NOTES_SURFACE = "notes"

_MD_EXT = re.compile(r"\.md$", re.IGNORECASE)

# Directory names whose contents are never notes
_SYSTEM_DIRS = {"Excalidraw", "excalidraw", "templates", "_templates", "assets"}


def _posix(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


def strip_md(filename: str) -> str:
    return _MD_EXT.sub("", filename)


def _normalized_dir(directory: str) -> str:
    segments = (normalize_slug(s) for s in directory.split("/"))
    return "/".join(s for s in segments if s)


def compute_slug(frontmatter: Mapping[str, Any], filename: str) -> str:
    """
    Slug for a note.

    Priority:
    1. frontmatter "slug" (if non-blank)
    2. filename without the .md extension
    """
    explicit = text_field(frontmatter, "slug")
    if explicit:
        return normalize_slug(explicit)
    return normalize_slug(strip_md(filename))


def compute_canonical_route(relative_path: str, slug: str) -> str:
    """
    Canonical route for a note, without leading or trailing slash.

    - index.md maps to its folder ("DDIA/index.md" -> "ddia", root -> "")
    - other files map to "<folder>/<slug>", or just "<slug>" at the root
    - folder names are normalized segment by segment
    """
    rel = _posix(relative_path)
    directory, _, filename = rel.rpartition("/")
    normalized = _normalized_dir(directory) if directory != "." else ""

    if strip_md(filename).lower() == "index":
        return normalized

    if not normalized:
        return slug
    return f"{normalized}/{slug}"


def compute_alias_routes(
    frontmatter: Mapping[str, Any], slug: str, canonical_route: str
) -> list[str]:
    """
    Alias routes for a note promoted to the "notes" surface.

    The alias is the normalized frontmatter id, falling back to the slug.
    Returns [] when the note is not promoted or the alias would equal the
    canonical route.
    """
    surfaces = list_field(frontmatter, "surfaces") or []
    if NOTES_SURFACE not in surfaces:
        return []

    explicit_id = text_field(frontmatter, "id")
    alias = normalize_slug(explicit_id) if explicit_id else slug

    if alias == canonical_route:
        return []
    return [alias]


def is_system_file(relative_path: str) -> bool:
    """True for dotfiles, drawings, scratch files, templates and asset folders."""
    rel = _posix(relative_path)
    segments = rel.split("/")
    dirs = segments[:-1]

    if any(s.startswith(".") for s in segments):
        return True
    if ".excalidraw" in rel:
        return True
    # Obsidian's default names for new notes and drawings
    if "Untitled" in rel or "Drawing " in rel:
        return True
    return any(d in _SYSTEM_DIRS for d in dirs)


def derive_id(frontmatter: Mapping[str, Any], relative_path: str) -> str:
    """Frontmatter id, else the whole relative path normalized ("a/My Note.md" -> "amy-note")."""
    explicit = text_field(frontmatter, "id")
    if explicit:
        return explicit
    return normalize_slug(strip_md(_posix(relative_path)))


def extract_title(frontmatter: Mapping[str, Any], filename: str) -> str | None:
    explicit = text_field(frontmatter, "title")
    if explicit:
        return explicit
    return strip_md(filename) or None
