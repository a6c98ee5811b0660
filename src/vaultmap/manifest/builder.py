"""Build phase: scan the notes tree and assign routes."""

import logging
from pathlib import Path, PurePosixPath

from ..adapters.fs_source import FsNoteSource
from ..adapters.yaml_codec import YamlFrontmatter
from ..core.meta import NoteFrontmatter
from ..core.model import ManifestError, NoteEntry, NoteManifest
from ..core.ports import FrontmatterCodec, NoteSource
from .routes import (
    compute_alias_routes,
    compute_canonical_route,
    compute_slug,
    derive_id,
    extract_title,
    is_system_file,
)

logger = logging.getLogger(__name__)

# Relative to the current working directory (the site project root)
DEFAULT_NOTES_PATH = Path("src/content/vault/notes")


def build_entry(
    relative_path: str, raw: str, source_path: str, codec: FrontmatterCodec
) -> NoteEntry:
    """Parse one file and compute its identity and routes."""
    meta, body = codec.decode(raw, relative_path)
    frontmatter = NoteFrontmatter(meta)

    filename = PurePosixPath(relative_path).name
    slug = compute_slug(frontmatter, filename)
    canonical_route = compute_canonical_route(relative_path, slug)

    return NoteEntry(
        id=derive_id(frontmatter, relative_path),
        source_path=source_path,
        title=extract_title(frontmatter, filename),
        slug=slug,
        canonical_route=canonical_route,
        alias_routes=compute_alias_routes(frontmatter, slug, canonical_route),
        frontmatter=frontmatter,
        body=body,
        relative_path=relative_path,
    )


def find_route_errors(entries: list[NoteEntry]) -> list[ManifestError]:
    """
    Check canonical and alias routes for collisions.

    Entries earlier in the list keep their claim; every later claimant is
    reported. An alias that hits another note's canonical route is reported
    as a conflict and not checked against other aliases.
    """
    errors: list[ManifestError] = []

    canonical_map: dict[str, NoteEntry] = {}
    for entry in entries:
        existing = canonical_map.get(entry.canonical_route)
        if existing is None:
            canonical_map[entry.canonical_route] = entry
        elif existing.source_path != entry.source_path:
            errors.append(ManifestError(
                type="canonical_collision",
                message=f"Canonical route collision: '{entry.canonical_route}'",
                files=[existing.id, entry.id],
                route=entry.canonical_route,
            ))
    logger.debug("Canonical pass: %d routes claimed", len(canonical_map))

    alias_map: dict[str, NoteEntry] = {}
    for entry in entries:
        for alias in entry.alias_routes:
            owner = canonical_map.get(alias)
            if owner is not None and owner.source_path != entry.source_path:
                errors.append(ManifestError(
                    type="alias_canonical_conflict",
                    message=f"Alias '{alias}' conflicts with canonical route of another note",
                    files=[entry.id, owner.id],
                    route=alias,
                ))
                continue

            claimed = alias_map.get(alias)
            if claimed is not None and claimed.source_path != entry.source_path:
                errors.append(ManifestError(
                    type="alias_collision",
                    message=f"Alias collision: '{alias}'",
                    files=[entry.id, claimed.id],
                    route=alias,
                ))
                continue

            alias_map[alias] = entry
    logger.debug("Alias pass: %d aliases claimed", len(alias_map))

    return errors


def build_note_manifest(
    root: Path | str | None = None,
    source: NoteSource | None = None,
    codec: FrontmatterCodec | None = None,
) -> NoteManifest:
    """
    Scan the notes directory and build the route manifest.

    Args:
        root: Notes directory (default: ./src/content/vault/notes)
        source: Alternative note source; `root` is ignored when given
        codec: Frontmatter codec (default: YAML)

    Returns:
        NoteManifest with entries in path order and every collision found

    Raises:
        OSError: the root directory is missing or cannot be listed
    """
    if source is None:
        base = Path(root) if root is not None else Path.cwd() / DEFAULT_NOTES_PATH
        source = FsNoteSource(base, skip=is_system_file)
    if codec is None:
        codec = YamlFrontmatter()

    entries: list[NoteEntry] = []
    skipped = 0
    for relative_path in source.list_paths():
        # Sources without their own filter still get system files dropped
        if is_system_file(relative_path):
            continue
        raw = source.read_raw(relative_path)
        if raw is None:
            skipped += 1
            continue
        entries.append(build_entry(
            relative_path,
            raw,
            str(source.absolute(relative_path)),
            codec,
        ))

    errors = find_route_errors(entries)

    logger.info(
        "Built notes manifest for %s: %d entries, %d skipped, %d errors",
        source.root,
        len(entries),
        skipped,
        len(errors),
    )
    return NoteManifest(entries=entries, errors=errors, root=str(source.root))
