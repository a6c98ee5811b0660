"""Configuration loader for vaultmap.toml."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_NAME = "vaultmap.toml"


@dataclass
class NotesConfig:
    """Notes tree configuration."""
    root: Path


@dataclass
class RoutesConfig:
    """How routes are published."""
    prefix: str = "/notes"


@dataclass
class ExportConfig:
    """Static export configuration."""
    out: Path = Path("dist/notes-manifest")
    pages: bool = False


@dataclass
class WatchConfig:
    """Watch mode configuration."""
    debounce_ms: int = 150


@dataclass
class VaultmapConfig:
    """Complete vaultmap configuration."""
    notes: NotesConfig
    routes: RoutesConfig
    export: ExportConfig
    watch: WatchConfig


def load_config(config_path: Path | None = None, notes_path: Path | None = None) -> VaultmapConfig:
    """
    Load configuration from vaultmap.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/vaultmap.toml
    3. notes_path/vaultmap.toml

    Args:
        config_path: Explicit path to config file
        notes_path: Notes root for fallback search

    Returns:
        VaultmapConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if notes_path:
        search_paths.append(notes_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    notes_data = toml_data.get("notes", {})
    notes_config = NotesConfig(
        root=Path(notes_data.get("root", notes_path or Path("src/content/vault/notes"))),
    )

    routes_data = toml_data.get("routes", {})
    routes_config = RoutesConfig(
        prefix=routes_data.get("prefix", "/notes"),
    )

    export_data = toml_data.get("export", {})
    export_config = ExportConfig(
        out=Path(export_data.get("out", "dist/notes-manifest")),
        pages=export_data.get("pages", False),
    )

    watch_data = toml_data.get("watch", {})
    watch_config = WatchConfig(
        debounce_ms=watch_data.get("debounce_ms", 150),
    )

    return VaultmapConfig(
        notes=notes_config,
        routes=routes_config,
        export=export_config,
        watch=watch_config,
    )
