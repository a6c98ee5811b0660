"""Name-to-slug lookup for link rewriting, built from one manifest."""

from dataclasses import dataclass, field
from pathlib import PurePosixPath

from .core.model import NoteManifest
from .core.utils import normalize_slug
from .manifest.routes import strip_md


@dataclass
class SlugMapping:
    """
    Maps the names a note is referred to by (title, filename, filename slug)
    to the slug the note is published under.

    Build one per manifest and pass it to whatever rewrites links; it is
    never cached between builds.
    """

    slugs: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_manifest(cls, manifest: NoteManifest) -> "SlugMapping":
        mapping = cls()
        for entry in manifest.entries:
            stem = strip_md(PurePosixPath(entry.relative_path or entry.source_path).name)
            # Later entries overwrite earlier ones for the same name
            if entry.title:
                mapping.slugs[entry.title] = entry.slug
            mapping.slugs[stem] = entry.slug
            mapping.slugs[normalize_slug(stem)] = entry.slug
        return mapping

    def __contains__(self, name: str) -> bool:
        return name in self.slugs

    def __len__(self) -> int:
        return len(self.slugs)

    def resolve(self, name: str) -> str:
        """Slug for a note name; unknown names are slugified as-is."""
        if name in self.slugs:
            return self.slugs[name]
        return normalize_slug(name)
