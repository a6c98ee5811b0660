from pathlib import Path
from typing import Any, Iterable, Protocol


class FrontmatterCodec(Protocol):
    """
    Split optional frontmatter from the body without enforcing a schema.
    """

    def decode(self, text: str, source: str = "<string>") -> tuple[dict[str, Any], str]:
        pass


class NoteSource(Protocol):
    """
    A tree of Markdown files addressed by POSIX paths relative to `root`.
    """

    root: Path

    def list_paths(self) -> Iterable[str]:
        pass

    def read_raw(self, relative_path: str) -> str | None:
        pass

    def absolute(self, relative_path: str) -> Path:
        pass


class ExportAdapter(Protocol):
    def export_all(self, out_dir: str | None = None) -> None:
        pass
