"""CLI for vaultmap - route manifest builder for a notes vault."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .export.static import StaticRoutesExporter, route_url
from .manifest.queries import (
    ManifestValidationError,
    get_alias_paths,
    get_entries_by_surface,
    get_entry_by_canonical_route,
    get_entry_by_id,
    get_published_entries,
    validate_manifest,
)
from .manifest.serialize import entry_to_dict, error_to_dict, manifest_to_dict, save_manifest_json
from .runtime import build_runtime
from .slugmap import SlugMapping

logger = logging.getLogger(__name__)


def cmd_build(args: argparse.Namespace, rt: Any) -> int:
    """Build the manifest and report what it contains."""
    manifest = rt.build()

    if args.output:
        save_manifest_json(manifest, Path(args.output), include_body=False)

    if args.json:
        print(json.dumps(manifest_to_dict(manifest, include_body=False), indent=2))
    elif not args.quiet:
        aliases = sum(len(e.alias_routes) for e in manifest.entries)
        print(f"Root: {manifest.root}")
        print(f"Entries: {len(manifest.entries)}")
        print(f"Aliases: {aliases}")
        print(f"Errors: {len(manifest.errors)}")
        for e in manifest.errors:
            print(f"  [{e.type}] {e.route}: {', '.join(e.files)}")
        if args.output:
            print(f"Saved manifest to: {args.output}")

    if args.strict and not manifest.ok:
        return 1
    return 0


def cmd_check(args: argparse.Namespace, rt: Any) -> int:
    """Fail when any route collides."""
    manifest = rt.build()
    try:
        validate_manifest(manifest)
    except ManifestValidationError as e:
        if args.json:
            print(json.dumps([error_to_dict(err) for err in e.errors], indent=2))
        else:
            print(str(e), file=sys.stderr)
        return 1

    if args.json:
        print("[]")
    elif not args.quiet:
        print(f"✓ {len(manifest.entries)} routes, no conflicts")
    return 0


def cmd_routes(args: argparse.Namespace, rt: Any) -> int:
    """List canonical routes (and alias redirects)."""
    manifest = rt.build()
    prefix = rt.config.routes.prefix

    if args.resolve:
        # One lookup per build, shared by every name asked for
        mapping = SlugMapping.from_manifest(manifest)
        resolved = {name: mapping.resolve(name) for name in args.resolve}
        if args.json:
            print(json.dumps(resolved, indent=2))
        else:
            for name, slug in resolved.items():
                print(f"{name}\t{slug}")
        return 0

    alias_paths = get_alias_paths(manifest) if args.aliases else []

    if args.json:
        output: dict[str, Any] = {
            "canonical": [
                {"route": e.canonical_route, "id": e.id} for e in manifest.entries
            ],
        }
        if args.aliases:
            output["aliases"] = [
                {"slug": a.slug, "canonical_route": a.canonical_route}
                for a in alias_paths
            ]
        print(json.dumps(output, indent=2))
        return 0

    for e in manifest.entries:
        print(f"{route_url(prefix, e.canonical_route)}\t{e.id}")
    for a in alias_paths:
        print(f"{route_url(prefix, a.slug)} -> {route_url(prefix, a.canonical_route)}")
    return 0


def cmd_ls(args: argparse.Namespace, rt: Any) -> int:
    """List entries with optional filters."""
    manifest = rt.build()

    if args.published:
        entries = get_published_entries(manifest, include_drafts=args.drafts)
    else:
        entries = list(manifest.entries)

    if args.surface:
        on_surface = {e.source_path for e in get_entries_by_surface(manifest, args.surface)}
        entries = [e for e in entries if e.source_path in on_surface]

    if args.json:
        print(json.dumps([
            {"id": e.id, "title": e.title, "route": e.canonical_route}
            for e in entries
        ], indent=2))
    else:
        for e in entries:
            print(f"{e.id}\t{e.title or ''}")
    return 0


def cmd_show(args: argparse.Namespace, rt: Any) -> int:
    """Print one entry as JSON."""
    manifest = rt.build()

    if args.route is not None:
        entry = get_entry_by_canonical_route(manifest, args.route.strip("/"))
        key = f"route '{args.route}'"
    elif args.id:
        entry = get_entry_by_id(manifest, args.id)
        key = f"id '{args.id}'"
    else:
        print("Error: give an id or --route", file=sys.stderr)
        return 1

    if entry is None:
        print(f"No entry with {key}", file=sys.stderr)
        return 1

    print(json.dumps(entry_to_dict(entry, include_body=args.body), indent=2))
    return 0


def cmd_export(args: argparse.Namespace, rt: Any) -> int:
    """Write manifest.json and the redirect table."""
    manifest = rt.build()
    outdir = Path(args.out) if args.out else rt.config.export.out
    prefix = args.prefix if args.prefix is not None else rt.config.routes.prefix

    exporter = StaticRoutesExporter(
        manifest,
        outdir,
        prefix=prefix,
        write_pages=args.pages or rt.config.export.pages,
    )
    try:
        exporter.export_all()
    except ManifestValidationError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Exported to {outdir}")
    return 0


def cmd_watch(args: argparse.Namespace, rt: Any) -> int:
    """Watch the notes tree and rebuild on change."""
    try:
        from .watch import watch_notes
    except ImportError as e:
        print(
            "Error: watchdog library not installed. Install with: pip install vaultmap[watch]",
            file=sys.stderr,
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    debounce_ms = args.debounce_ms
    if debounce_ms is None:
        debounce_ms = rt.config.watch.debounce_ms

    return watch_notes(
        rt,
        debounce_ms=debounce_ms,
        quiet=args.quiet,
        json_output=args.json,
    )


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install vaultmap[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    token_arg = args.token
    token = None

    if token_arg == 'auto':
        token = generate_token()
        print(f"Generated bearer token: {token}")
        print(f"Use in requests: Authorization: Bearer {token}")
    elif token_arg == 'none':
        print("Warning: Running without authentication. Only use in trusted environments.")
        token = None
    else:
        token = token_arg

    app = create_app(rt, token=token, enable_cors=args.cors)

    print(f"Starting server on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vaultmap", description="Notes route manifest builder"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"vaultmap {__version__} (python {platform.python_version()}, platform {sys.platform})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/vaultmap.toml, root/vaultmap.toml)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Path to notes directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log more (-v info, -vv debug)"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # build command
    parser_build = subparsers.add_parser("build", help="Build the manifest and summarize it")
    parser_build.add_argument(
        "--strict", action="store_true", help="Exit 1 when routing errors exist"
    )
    parser_build.add_argument(
        "-o", "--output", help="Also save the manifest JSON to this file"
    )

    # check command
    subparsers.add_parser("check", help="Fail on route collisions")

    # routes command
    parser_routes = subparsers.add_parser("routes", help="List canonical routes")
    parser_routes.add_argument(
        "--aliases", action="store_true", help="Also list alias redirects"
    )
    parser_routes.add_argument(
        "--resolve", action="append", metavar="NAME",
        help="Print the slug a note title or filename links to (repeatable)"
    )

    # ls command
    parser_ls = subparsers.add_parser("ls", help="List entries with filters")
    parser_ls.add_argument("--surface", help="Only entries listed on this surface")
    parser_ls.add_argument(
        "--published", action="store_true", help="Only published entries, newest first"
    )
    parser_ls.add_argument(
        "--drafts", action="store_true", help="With --published, keep drafts too"
    )

    # show command
    parser_show = subparsers.add_parser("show", help="Show one entry")
    parser_show.add_argument("id", nargs="?", help="Entry id")
    parser_show.add_argument("--route", help="Look up by canonical route instead")
    parser_show.add_argument("--body", action="store_true", help="Include the note body")

    # export command
    parser_export = subparsers.add_parser("export", help="Write manifest.json and _redirects")
    parser_export.add_argument("--out", help="Output directory (overrides config)")
    parser_export.add_argument("--prefix", default=None, help="URL prefix for redirects")
    parser_export.add_argument(
        "--pages", action="store_true", help="Also write note bodies under pages/<route>/"
    )

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Rebuild when notes change")
    parser_watch.add_argument(
        "--debounce-ms", type=int, default=None, help="Debounce window in milliseconds"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument("--host", default="127.0.0.1", help="Host to bind")
    parser_serve.add_argument("--port", type=int, default=8765, help="Port to bind")
    parser_serve.add_argument(
        "--token", default="none",
        help="Bearer token: 'auto' to generate, 'none' to disable (default), or a value"
    )
    parser_serve.add_argument("--cors", action="store_true", help="Enable CORS")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    rt = build_runtime(
        notes_path=args.root,
        config_path=args.config,
    )

    handlers = {
        "build": cmd_build,
        "check": cmd_check,
        "routes": cmd_routes,
        "ls": cmd_ls,
        "show": cmd_show,
        "export": cmd_export,
        "watch": cmd_watch,
        "serve": cmd_serve,
    }
    handler = handlers.get(args.cmd)

    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            logger.debug("Command %s failed", args.cmd, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
