import logging
from pathlib import Path

from ..core.model import NoteManifest
from ..core.ports import ExportAdapter
from ..manifest.queries import get_alias_paths, get_canonical_paths, validate_manifest
from ..manifest.serialize import save_manifest_json

logger = logging.getLogger(__name__)


def route_url(prefix: str, route: str) -> str:
    """URL path for a route under `prefix`; the root route keeps its slash."""
    return f"{prefix.rstrip('/')}/{route}"


class StaticRoutesExporter(ExportAdapter):
    """
    Writes what a static build needs from the manifest:
    - manifest.json: entries (without bodies) and errors
    - _redirects: one "<alias> <canonical> 301" line per alias
    - pages/<route>/index.md (optional): note bodies laid out by route
    """

    def __init__(
        self,
        manifest: NoteManifest,
        out: Path,
        prefix: str = "/notes",
        write_pages: bool = False,
    ):
        self.manifest = manifest
        self.out = out
        self.prefix = prefix
        self.write_pages = write_pages

    def redirect_lines(self) -> list[str]:
        return [
            f"{route_url(self.prefix, a.slug)} {route_url(self.prefix, a.canonical_route)} 301"
            for a in get_alias_paths(self.manifest)
        ]

    def export_all(self, out_dir: str | None = None) -> None:
        # Never publish a route table with collisions in it
        validate_manifest(self.manifest)

        out = self.out if out_dir is None else Path(out_dir)
        out.mkdir(parents=True, exist_ok=True)

        save_manifest_json(self.manifest, out / "manifest.json", include_body=False)

        lines = self.redirect_lines()
        (out / "_redirects").write_text(
            "".join(f"{line}\n" for line in lines), encoding="utf-8"
        )

        if self.write_pages:
            pages = out / "pages"
            for cp in get_canonical_paths(self.manifest):
                md = cp.entry.body
                # Add title as H1 if available and not already present
                title = cp.entry.title or ""
                if title and not md.lstrip().startswith("#"):
                    md = f"# {title}\n\n{md}"
                target = pages / cp.path if cp.path else pages
                target.mkdir(parents=True, exist_ok=True)
                (target / "index.md").write_text(md, encoding="utf-8")

        logger.info(
            "Exported %d routes and %d redirects to %s",
            len(self.manifest.entries),
            len(lines),
            out,
        )
