"""Watch mode for vaultmap - rebuild the manifest when notes change."""

import json
import logging
import signal
import threading
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .core.model import NoteManifest
from .manifest.routes import is_system_file
from .runtime import Runtime

logger = logging.getLogger(__name__)


class DebounceHandler(FileSystemEventHandler):
    """File system event handler with debouncing."""

    def __init__(
        self,
        root: Path,
        on_batch: Callable[[set[str], set[str]], None] | None,
        debounce_ms: int = 150,
    ):
        super().__init__()
        self.root = Path(root).absolute()
        self.on_batch = on_batch
        self.debounce_ms = debounce_ms

        # Pending changes by relative path
        self.changed: set[str] = set()
        self.deleted: set[str] = set()
        self.last_event_time = 0.0
        self._lock = threading.Lock()

    def _relative(self, raw_path: Any) -> str | None:
        """Relative POSIX path of a note, None for anything that is not one."""
        path = Path(str(raw_path)).absolute()
        name = path.name

        # Skip temp/swap files
        if name.endswith("~") or name.endswith(".swp") or name.startswith(".#"):
            return None
        if not name.endswith(".md"):
            return None

        try:
            rel = path.relative_to(self.root).as_posix()
        except ValueError:
            return None
        if is_system_file(rel):
            return None
        return rel

    def _record(self, changed: str | None = None, deleted: str | None = None) -> None:
        """Apply one event to the pending sets; called from the observer thread."""
        with self._lock:
            if deleted:
                self.deleted.add(deleted)
                self.changed.discard(deleted)
            if changed:
                self.changed.add(changed)
                self.deleted.discard(changed)
            self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        rel = self._relative(event.src_path)
        if rel:
            self._record(changed=rel)

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        rel = self._relative(event.src_path)
        if rel:
            self._record(changed=rel)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        rel = self._relative(event.src_path)
        if rel:
            self._record(deleted=rel)

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        src = self._relative(event.src_path)
        dest = self._relative(getattr(event, "dest_path", ""))
        if src or dest:
            self._record(changed=dest, deleted=src)

    def check_and_flush(self) -> None:
        """Check if debounce period has elapsed and flush if so."""
        with self._lock:
            if not (self.changed or self.deleted):
                return
            elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        """Process accumulated events."""
        # Swap under the lock; events arriving during on_batch land in the next batch
        with self._lock:
            if not (self.changed or self.deleted):
                return
            changed, self.changed = self.changed, set()
            deleted, self.deleted = self.deleted, set()

        if self.on_batch:
            self.on_batch(changed, deleted)


def summary_event(manifest: NoteManifest, duration_ms: int) -> dict[str, Any]:
    return {
        "type": "build",
        "entries": len(manifest.entries),
        "aliases": sum(len(e.alias_routes) for e in manifest.entries),
        "errors": [
            {"type": e.type, "route": e.route, "files": e.files}
            for e in manifest.errors
        ],
        "duration_ms": duration_ms,
    }


def watch_notes(
    runtime: Runtime,
    debounce_ms: int = 150,
    quiet: bool = False,
    json_output: bool = False,
) -> int:
    """
    Watch the notes tree and rebuild the manifest after each batch of changes.

    Every rebuild is a full build; the previous manifest is discarded.

    Returns:
        Exit code
    """
    root = runtime.source.root
    if not root.is_dir():
        logger.error("Notes directory not found: %s", root)
        return 1

    running = True

    def report(manifest: NoteManifest, duration_ms: int) -> None:
        if json_output:
            print(json.dumps(summary_event(manifest, duration_ms)), flush=True)
        elif not quiet:
            aliases = sum(len(e.alias_routes) for e in manifest.entries)
            print(
                f"Built: {len(manifest.entries)} routes, {aliases} aliases, "
                f"{len(manifest.errors)} errors ({duration_ms}ms)",
                flush=True,
            )
            for e in manifest.errors:
                print(f"  [{e.type}] {e.route}: {', '.join(e.files)}", flush=True)

    def rebuild() -> None:
        start_time = time.time()
        try:
            manifest = runtime.build()
        except Exception as e:
            logger.exception("Manifest rebuild failed")
            if json_output:
                print(json.dumps({"type": "error", "message": str(e)}), flush=True)
            return
        report(manifest, int((time.time() - start_time) * 1000))

    def handle_batch(changed: set[str], deleted: set[str]) -> None:
        logger.info("Changes: %d changed, %d deleted", len(changed), len(deleted))
        rebuild()

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet and not json_output:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    rebuild()

    handler = DebounceHandler(root, handle_batch, debounce_ms)
    observer = Observer()
    observer.schedule(handler, str(handler.root), recursive=True)

    if not quiet and not json_output:
        print(f"Watching {root} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()

    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet and not json_output:
        print("Watch stopped", flush=True)

    return 0
