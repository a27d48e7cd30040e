"""
Server entry point: FastAPI app setup and route configuration.
Sets up the shared HTTP session, response cache and results store,
permissive CORS headers, and the footprint API routes.
"""

from __future__ import annotations

import asyncio
import contextlib
import sqlite3
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime

import aiohttp
import dotenv
import fastapi
import pydantic
import uvicorn
from fastapi import responses

from footprint import __version__, config
from footprint.models import report
from footprint.pipeline import scan
from footprint.sources import build_sources
from footprint.storage.results_store import ResultsStore
from footprint.utils import cache as cache_mod
from footprint.utils import errors, logger

dotenv.load_dotenv()

log = logger.create_logger("Server")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
}

_STARTED_AT = time.monotonic()


@contextlib.asynccontextmanager
async def lifespan(app: fastapi.FastAPI) -> AsyncGenerator[None]:
    """Create the shared session, cache and store; close the session on shutdown."""
    settings = config.get_settings()
    store = ResultsStore(settings.db_path)
    try:
        store.init()
    except (OSError, sqlite3.Error) as exc:
        log.error(
            "Results store unavailable; summaries will not be saved",
            {"db": settings.db_path, "error": errors.get_error_message(exc)},
        )

    async with aiohttp.ClientSession() as session:
        cache = cache_mod.ResponseCache(ttl_seconds=settings.cache_ttl_seconds)
        app.state.scanner = scan.FootprintScanner(build_sources(session, cache, settings))
        app.state.store = store

        log.section("Digital Footprint Server Started")
        log.info(
            "Environment",
            {"env": settings.environment, "cacheTtlSeconds": settings.cache_ttl_seconds, "db": settings.db_path},
        )
        yield

    log.info("HTTP session closed")


app = fastapi.FastAPI(title="Digital Footprint Checker", version=__version__, lifespan=lifespan)


# ============================================================================
# Dependencies
# ============================================================================


def get_scanner(request: fastapi.Request) -> scan.FootprintScanner:
    return request.app.state.scanner


def get_store(request: fastapi.Request) -> ResultsStore:
    return request.app.state.store


# ============================================================================
# Middleware
# ============================================================================


@app.middleware("http")
async def cors_headers(
    request: fastapi.Request,
    call_next: Callable[[fastapi.Request], Awaitable[responses.Response]],
) -> responses.Response:
    """Answer pre-flight requests and stamp CORS headers on every response."""
    # CORSMiddleware rejects pre-flights without an Origin header and omits the fixed allow-headers list.
    if request.method == "OPTIONS":
        return responses.Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


def _error(status_code: int, error: str, details: str | None = None) -> responses.JSONResponse:
    content: dict[str, str] = {"error": error}
    if details is not None:
        content["details"] = details
    return responses.JSONResponse(status_code=status_code, content=content)


# ============================================================================
# API Routes
# ============================================================================


@app.post("/api/check-footprint")
async def check_footprint(
    request: fastapi.Request,
    scanner: scan.FootprintScanner = fastapi.Depends(get_scanner),
    store: ResultsStore = fastapi.Depends(get_store),
) -> responses.JSONResponse:
    """
    Scan an email address for exposure and return the scored report.
    """
    try:
        body = report.FootprintRequest.model_validate(await request.json())
    except (ValueError, pydantic.ValidationError):
        return _error(400, "Invalid request body")

    try:
        query = scan.validate_request(body)
    except scan.InvalidQueryError as exc:
        return _error(400, str(exc))

    try:
        result = await scanner.scan(query)
    except errors.SourceUnavailableError as exc:
        log.error("Scan failed: upstream unavailable", {"error": errors.get_error_message(exc)})
        return _error(503, "External API temporarily unavailable", errors.get_error_message(exc))
    except Exception as exc:
        log.error("Scan failed", {"error": errors.get_error_message(exc)})
        return _error(500, "Internal server error", errors.get_error_message(exc))

    if body.user_id:
        await _persist_summary(store, body.user_id, result)

    return responses.JSONResponse(content=result.to_response())


async def _persist_summary(store: ResultsStore, user_id: str, result: report.ExposureReport) -> None:
    """Store a summary row; failures are logged and never surface."""
    try:
        await asyncio.to_thread(
            store.insert_summary,
            user_id,
            result.score,
            result.breach_count,
            result.platforms_found,
            result.summary,
        )
        log.info("Summary stored", {"userId": user_id})
    except Exception as exc:
        log.error("Failed to store summary", {"userId": user_id, "error": errors.get_error_message(exc)})


@app.delete("/api/delete-data")
async def delete_data_missing_user() -> responses.JSONResponse:
    return _error(400, "User ID is required")


@app.delete("/api/delete-data/{user_id}")
async def delete_data(
    user_id: str,
    store: ResultsStore = fastapi.Depends(get_store),
) -> responses.JSONResponse:
    """
    Remove every stored summary for a user.
    """
    log.info("Deleting data for user", {"userId": user_id})
    try:
        deleted = await asyncio.to_thread(store.delete_for_user, user_id)
    except (OSError, sqlite3.Error) as exc:
        log.error("Database error", {"userId": user_id, "error": errors.get_error_message(exc)})
        return _error(500, "Database error", errors.get_error_message(exc))
    except Exception as exc:
        log.error("Delete failed", {"userId": user_id, "error": errors.get_error_message(exc)})
        return _error(500, "Internal server error", errors.get_error_message(exc))

    log.success("User data deleted", {"userId": user_id, "rows": deleted})
    return responses.JSONResponse(
        content={"success": True, "message": "All user data deleted successfully"},
    )


@app.get("/api/health-check")
async def health_check(
    settings: config.Settings = fastapi.Depends(config.get_settings),
) -> dict[str, object]:
    """Static liveness payload."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": __version__,
        "services": {
            "database": "configured",
            "external_apis": {
                name: "available" if ok else "not_configured"
                for name, ok in settings.configured_sources().items()
            },
        },
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }


# ============================================================================
# Start Server
# ============================================================================


def main() -> None:
    """Entry point for running the server."""
    settings = config.get_settings()
    log.success(f"Server listening on {settings.host}:{settings.port}")

    uvicorn.run(
        "footprint.app:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )


if __name__ == "__main__":
    main()
