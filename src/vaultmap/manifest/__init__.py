"""Notes manifest: route assignment and collision checks for a notes vault."""

from ..core.utils import normalize_slug
from .builder import DEFAULT_NOTES_PATH, build_note_manifest
from .queries import (
    ManifestValidationError,
    get_alias_paths,
    get_canonical_paths,
    get_entries_by_surface,
    get_entry_by_canonical_route,
    get_entry_by_id,
    get_published_entries,
    validate_manifest,
)
from .routes import (
    compute_alias_routes,
    compute_canonical_route,
    compute_slug,
    is_system_file,
)

__all__ = [
    "DEFAULT_NOTES_PATH",
    "build_note_manifest",
    "validate_manifest",
    "ManifestValidationError",
    "get_canonical_paths",
    "get_alias_paths",
    "get_entries_by_surface",
    "get_entry_by_canonical_route",
    "get_entry_by_id",
    "get_published_entries",
    "normalize_slug",
    "compute_slug",
    "compute_canonical_route",
    "compute_alias_routes",
    "is_system_file",
]
