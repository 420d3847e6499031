"""JSON HTTP service over a loaded :class:`Registry`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from gldoc import __version__
from gldoc.ref.errors import NameNotFoundError
from gldoc.services.registry import function_summary

if TYPE_CHECKING:
    from fastapi import Request

    from gldoc.services.registry import Registry

_NOT_FOUND = "invalid function name"


# --- Route handler functions (sync, testable without transport) ---


def handle_entry(registry: Registry, name: str) -> dict[str, Any]:
    """Return the full entry *name* resolves to."""
    entry = registry.find(name)
    if entry is None:
        raise NameNotFoundError(_NOT_FOUND)
    return entry.to_dict()


def handle_func(registry: Registry, name: str) -> dict[str, Any]:
    """Return the summary of function *name*."""
    entry = registry.find(name)
    summary = function_summary(entry, name) if entry is not None else None
    if summary is None:
        raise NameNotFoundError(_NOT_FOUND)
    return summary


# --- App creation ---


def create_app(registry: Registry) -> FastAPI:
    """Create the app serving ``/entry/{name}`` and ``/{name}``."""
    app = FastAPI(
        title="gldoc",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.exception_handler(NameNotFoundError)
    async def _not_found(_request: Request, exc: NameNotFoundError) -> PlainTextResponse:
        return PlainTextResponse(f"{exc.args[0]}\n", status_code=400)

    @app.get("/entry/{name}")
    @app.get("/entry/{name}/", include_in_schema=False)
    def get_entry(name: str) -> dict[str, Any]:
        return handle_entry(registry, name)

    @app.get("/{name}")
    @app.get("/{name}/", include_in_schema=False)
    def get_func(name: str) -> dict[str, Any]:
        return handle_func(registry, name)

    return app


def serve(registry: Registry, host: str, port: int) -> None:
    """Run the app with uvicorn until interrupted."""
    import uvicorn

    uvicorn.run(create_app(registry), host=host, port=port, log_level="info")
