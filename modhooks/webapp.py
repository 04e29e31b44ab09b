"""Read-only HTTP inspector for a running hook registry."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from modhooks.dispatcher import HookManager


def create_app(manager: HookManager) -> FastAPI:
    app = FastAPI(title="modhooks inspector")

    @app.get("/healthz", response_class=JSONResponse)
    def healthz() -> JSONResponse:
        return JSONResponse({"status": "ok", "handlers": len(manager.registry)})

    @app.get("/api/hooks", response_class=JSONResponse)
    def api_hooks() -> JSONResponse:
        hooks: dict[str, list[dict]] = {}
        for registration in manager.registrations():
            hooks.setdefault(registration.hook, []).append(registration.model_dump())
        return JSONResponse({"hooks": hooks, "total": sum(len(items) for items in hooks.values())})

    @app.get("/api/hooks/{name:path}", response_class=JSONResponse)
    def api_hook(name: str) -> JSONResponse:
        # ordered as a dispatch of `name` would run them, wildcard matches included
        handlers = [registration.model_dump() for registration in manager.registrations(name)]
        return JSONResponse({"name": name, "has": manager.has(name), "handlers": handlers})

    return app
