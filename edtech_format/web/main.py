"edtech course format - web adapter"
from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import current_environment, ensure_secure_config_on_startup
from .routes.course import course_router
from .sessions import SessionStore


def _should_load_dotenv() -> bool:
    """Decide if we should load a local .env file.

    - Never load under pytest to avoid contaminating test env.
    - Allow explicit opt-out via EDTECH_ENABLE_DOTENV (default true outside pytest).
    """
    if "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST"):
        return False
    flag = (os.getenv("EDTECH_ENABLE_DOTENV", "true") or "").strip().lower()
    return flag in ("1", "true", "yes")


if _should_load_dotenv():
    load_dotenv()

# Minimal production safety checks (fail-fast on insecure config)
ensure_secure_config_on_startup()

logger = logging.getLogger("edtech_format.web")
SESSION_COOKIE_NAME = "edtech_session"
SESSION_STORE = SessionStore()

app = FastAPI(title="edtech course format", description="Tabbed course page renderer", version="0.1.0")
app.state.session_store = SESSION_STORE
app.include_router(course_router)


@app.middleware("http")
async def session_context(request: Request, call_next):
    """Expose the session user (or None for guests) on `request.state`.

    Guests may view courses; every action checks capabilities downstream.
    """
    request.state.user = None
    request.state.session_id = None
    sid = request.cookies.get(SESSION_COOKIE_NAME)
    if sid:
        rec = SESSION_STORE.get(sid)
        if rec is None:
            logger.debug("Unknown or expired session cookie")
        else:
            request.state.session_id = rec.session_id
            request.state.user = {
                "sub": rec.sub,
                "name": rec.name,
                "capabilities": sorted(rec.capabilities),
                "editing": rec.editing,
                "sesskey": rec.sesskey,
            }
    return await call_next(request)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    if current_environment() in ("prod", "production"):
        # The course page ships an inline <style> block.
        csp = "default-src 'self'; script-src 'self'; style-src 'self' 'unsafe-inline'; img-src 'self' data:;"
    else:
        csp = "default-src 'self'; script-src 'self' 'unsafe-inline'; style-src 'self' 'unsafe-inline'; img-src 'self' data:;"
    response.headers.setdefault("Content-Security-Policy", csp)
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    return response


@app.get("/health")
async def health():
    return JSONResponse({"status": "healthy"}, headers={"Cache-Control": "no-store"})
