"""FastAPI application for the vaultmap local JSON API."""

import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .. import __version__
from ..core.model import NoteManifest
from ..manifest.queries import (
    get_alias_paths,
    get_entries_by_surface,
    get_entry_by_canonical_route,
    get_entry_by_id,
)
from ..manifest.serialize import entry_to_dict, error_to_dict


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    The manifest is built once at startup and replaced wholesale by
    POST /rebuild; handlers only ever read a complete manifest.

    Args:
        runtime: Runtime instance with source, codec and config
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="vaultmap API",
        description="Local JSON API for a notes route manifest",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    state: dict[str, NoteManifest] = {"manifest": runtime.build()}

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    def manifest() -> NoteManifest:
        return state["manifest"]

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        m = manifest()
        return {"status": "ok", "entries": len(m.entries), "errors": len(m.errors)}

    @app.get("/entries")
    async def entries(
        surface: str | None = Query(None, description="Only entries listed on this surface"),
        body: bool = Query(False, description="Include note bodies"),
        auth: None = Depends(verify_token),
    ) -> list[dict[str, Any]]:
        """List manifest entries in build order."""
        m = manifest()
        selected = get_entries_by_surface(m, surface) if surface else m.entries
        return [entry_to_dict(e, include_body=body) for e in selected]

    @app.get("/entries/{entry_id}")
    async def entry(entry_id: str, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Get one entry, body included."""
        found = get_entry_by_id(manifest(), entry_id)
        if found is None:
            raise HTTPException(status_code=404, detail=f"Entry {entry_id} not found")
        return entry_to_dict(found)

    @app.get("/routes/{route:path}")
    async def route(route: str, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Resolve a route: canonical routes return the entry, aliases a redirect target."""
        m = manifest()
        route = route.strip("/")
        found = get_entry_by_canonical_route(m, route)
        if found is not None:
            return {"route": route, "entry": entry_to_dict(found, include_body=False)}
        for alias in get_alias_paths(m):
            if alias.slug == route:
                return {"route": route, "redirect_to": alias.canonical_route}
        raise HTTPException(status_code=404, detail=f"Route {route} not found")

    @app.get("/aliases")
    async def aliases(auth: None = Depends(verify_token)) -> list[dict[str, str]]:
        """All alias redirects."""
        return [
            {"slug": a.slug, "canonical_route": a.canonical_route}
            for a in get_alias_paths(manifest())
        ]

    @app.get("/errors")
    async def errors(auth: None = Depends(verify_token)) -> list[dict[str, Any]]:
        """Routing errors found in the last build."""
        return [error_to_dict(e) for e in manifest().errors]

    @app.post("/rebuild")
    async def rebuild(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Rebuild the manifest from disk."""
        state["manifest"] = runtime.build()
        m = manifest()
        return {"entries": len(m.entries), "errors": len(m.errors)}

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
