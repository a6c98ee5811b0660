from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal

from .meta import NoteFrontmatter

NoteId = str

ManifestErrorType = Literal[
    "canonical_collision",
    "alias_collision",
    "alias_canonical_conflict",
]


@dataclass
class NoteEntry:
    id: NoteId  # frontmatter id, or derived from the relative path
    source_path: str  # absolute path; identity key when comparing entries
    title: str | None
    slug: str
    canonical_route: str  # "" is the section root (index.md at the top)
    alias_routes: list[str] = field(default_factory=list)
    frontmatter: NoteFrontmatter = field(default_factory=NoteFrontmatter)
    body: str = ""
    relative_path: str = ""  # POSIX form, relative to the notes root


@dataclass(frozen=True)
class ManifestError:
    type: ManifestErrorType
    message: str
    files: list[str]  # entry ids
    route: str


@dataclass
class NoteManifest:
    entries: list[NoteEntry] = field(default_factory=list)
    errors: list[ManifestError] = field(default_factory=list)
    root: str = ""

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class CanonicalPath:
    path: str | None  # None marks the section root
    entry: NoteEntry


@dataclass(frozen=True)
class AliasPath:
    slug: str
    canonical_route: str
