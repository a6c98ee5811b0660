import logging
from pathlib import Path
from typing import Callable, Iterable

from ..core.ports import NoteSource

logger = logging.getLogger(__name__)


class FsNoteSource(NoteSource):
    def __init__(self, root: Path, skip: Callable[[str], bool] | None = None):
        self.root = Path(root)
        self.skip = skip

    def absolute(self, relative_path: str) -> Path:
        return (self.root / relative_path).absolute()

    def read_raw(self, relative_path: str) -> str | None:
        p = self.root / relative_path
        try:
            return p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable note %s: %s", relative_path, e)
            return None

    def list_paths(self) -> Iterable[str]:
        """
        Relative POSIX paths of every `*.md` file under root, sorted.

        Raises FileNotFoundError / NotADirectoryError when root cannot be
        listed at all.
        """
        if not self.root.exists():
            raise FileNotFoundError(f"Notes directory not found: {self.root}")
        if not self.root.is_dir():
            raise NotADirectoryError(f"Notes root is not a directory: {self.root}")
        # Surfaces PermissionError on an unlistable root
        next(self.root.iterdir(), None)

        paths = []
        for p in self.root.rglob("*.md"):
            if not p.is_file():
                continue
            rel = p.relative_to(self.root).as_posix()
            if self.skip is not None and self.skip(rel):
                logger.debug("Skipping system file %s", rel)
                continue
            paths.append(rel)
        return sorted(paths)
