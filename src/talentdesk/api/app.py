from __future__ import annotations

import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from talentdesk.api.routes import router as api_router
from talentdesk.api.workspace import router as workspace_router
from talentdesk.config import get_settings
from talentdesk.db.init import init_database
from talentdesk.errors import TalentDeskError
from talentdesk.logging_config import configure_logging
from talentdesk.web.routes import router as web_router

logger = logging.getLogger(__name__)


def validation_details(exc: RequestValidationError) -> dict[str, object]:
    field_errors: dict[str, list[str]] = {}
    form_errors: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            field_errors.setdefault(".".join(loc), []).append(error.get("msg", "Invalid value"))
        else:
            form_errors.append(error.get("msg", "Invalid value"))
    return {"fieldErrors": field_errors, "formErrors": form_errors}


def create_app() -> FastAPI:
    configure_logging()
    settings = get_settings()
    static_dir = Path(__file__).resolve().parents[1] / "web" / "static"

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    @app.exception_handler(TalentDeskError)
    async def talentdesk_error_handler(request: Request, exc: TalentDeskError) -> JSONResponse:
        level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
        logger.log(level, "%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("%s %s rejected: invalid request body", request.method, request.url.path)
        return JSONResponse(
            {"error": "Validation error", "details": validation_details(exc)},
            status_code=400,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse({"error": message}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)

    @app.on_event("startup")
    def _startup() -> None:
        init_database()
        logger.info(
            "%s started (env=%s, ai configured=%s)",
            settings.app_name,
            settings.app_env,
            settings.ai_configured,
        )

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(api_router)
    app.include_router(workspace_router)
    if settings.web_ui_enabled:
        app.include_router(web_router)

    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    return app
