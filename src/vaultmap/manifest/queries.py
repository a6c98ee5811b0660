"""Read-only helpers over a built manifest."""

import re
from datetime import date, datetime, timezone
from typing import Any

from ..core.model import (
    AliasPath,
    CanonicalPath,
    ManifestError,
    NoteEntry,
    NoteManifest,
)


class ManifestValidationError(ValueError):
    """Raised by validate_manifest; `errors` holds every collision found."""

    def __init__(self, errors: list[ManifestError]):
        self.errors = list(errors)
        super().__init__(format_errors(self.errors))


def format_errors(errors: list[ManifestError]) -> str:
    details = "\n\n".join(
        f"[{e.type}] {e.message}\n  Files: {', '.join(e.files)}\n  Route: {e.route}"
        for e in errors
    )
    return f"Notes manifest validation failed:\n\n{details}"


def validate_manifest(manifest: NoteManifest) -> None:
    """Raise ManifestValidationError if the manifest has any routing errors."""
    if manifest.errors:
        raise ManifestValidationError(manifest.errors)


def get_canonical_paths(manifest: NoteManifest) -> list[CanonicalPath]:
    """One static path per entry; the root index gets path=None."""
    return [
        CanonicalPath(path=entry.canonical_route or None, entry=entry)
        for entry in manifest.entries
    ]


def get_alias_paths(manifest: NoteManifest) -> list[AliasPath]:
    """Redirect routes for every alias that differs from its canonical route."""
    return [
        AliasPath(slug=alias, canonical_route=entry.canonical_route)
        for entry in manifest.entries
        for alias in entry.alias_routes
        if alias != entry.canonical_route
    ]


def get_entries_by_surface(manifest: NoteManifest, surface: str) -> list[NoteEntry]:
    return [e for e in manifest.entries if surface in e.frontmatter.surfaces]


def get_entry_by_canonical_route(
    manifest: NoteManifest, route: str
) -> NoteEntry | None:
    return next((e for e in manifest.entries if e.canonical_route == route), None)


def get_entry_by_id(manifest: NoteManifest, id: str) -> NoteEntry | None:
    return next((e for e in manifest.entries if e.id == id), None)


_LOOSE_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def _date_key(value: Any) -> datetime | None:
    """
    Comparable naive UTC datetime for a publishedAt value, None if it is not a date.

    Accepts YAML dates and datetimes, ISO strings (a trailing "Z" included)
    and unpadded "2024-1-5" style dates. Dates count as midnight.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            m = _LOOSE_DATE.match(text)
            if not m:
                return None
            try:
                parsed = datetime(*(int(g) for g in m.groups()))
            except ValueError:
                return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def get_published_entries(
    manifest: NoteManifest, include_drafts: bool = False
) -> list[NoteEntry]:
    """
    Entries for listing pages, newest first.

    Without drafts, an entry needs a valid publishedAt date and must not
    set isPublished: false. Undated entries and unparsable dates (drafts
    only) sort last.
    """
    selected = []
    for entry in manifest.entries:
        published = _date_key(entry.frontmatter.published_at)
        if not include_drafts and (
            published is None or entry.frontmatter.is_published is False
        ):
            continue
        selected.append((published, entry))

    dated = [(p, e) for p, e in selected if p is not None]
    undated = [e for p, e in selected if p is None]
    # sorted() is stable, so equal dates keep manifest order
    dated = sorted(dated, key=lambda pair: pair[0], reverse=True)
    return [e for _, e in dated] + undated
