"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_source import FsNoteSource
from .adapters.yaml_codec import YamlFrontmatter
from .config import VaultmapConfig, load_config
from .core.model import NoteManifest
from .manifest.builder import build_note_manifest
from .manifest.routes import is_system_file


@dataclass
class Runtime:
    """Container for all wired components."""
    source: FsNoteSource
    codec: YamlFrontmatter
    config: VaultmapConfig

    def build(self) -> NoteManifest:
        """Build a fresh manifest from the current state of the notes tree."""
        return build_note_manifest(source=self.source, codec=self.codec)


def build_runtime(
    notes_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a notes tree."""
    config = load_config(config_path=config_path, notes_path=notes_path)

    # CLI args win over config values
    if notes_path is None:
        notes_path = config.notes.root

    source = FsNoteSource(notes_path, skip=is_system_file)
    codec = YamlFrontmatter()

    return Runtime(
        source=source,
        codec=codec,
        config=config,
    )
