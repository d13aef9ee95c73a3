"""
Configuration and startup checks for the course format web adapter.

Why: Links, icons and section limits depend on the deployment. Values are
read from environment variables at call time so tests can monkeypatch them.

Permissions: Pure configuration; the startup guard raises `SystemExit` on
fatal misconfiguration in production-like environments.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from edtech_format.course.domain import DEFAULT_MAX_SECTIONS

DEFAULT_PIX_BASE = "/static/pix"


def _is_prod_like(env: str) -> bool:
    env_l = (env or "").lower()
    return env_l in {"prod", "production", "stage", "staging"}


def _parse_int_env(name: str, default: int, *, contract_max: int | None = None) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value <= 0:
        return default
    if isinstance(contract_max, int) and contract_max > 0:
        value = min(value, contract_max)
    return value


def _parse_bool_env(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class FormatSettings:
    """Rendering settings shared by the renderer and the routes.

    Parameters:
        wwwroot: Prefix for generated links (empty keeps them site-relative).
        pix_base: Base path for icon images.
        max_sections: Upper bound when increasing the number of sections.
        link_course_sections: Link section titles to their anchor on the
            single-page layout.
    """

    wwwroot: str = ""
    pix_base: str = DEFAULT_PIX_BASE
    max_sections: int = DEFAULT_MAX_SECTIONS
    link_course_sections: bool = True


def load_settings() -> FormatSettings:
    """Read settings from the environment.

    Env:
        EDTECH_WWWROOT, EDTECH_PIX_BASE, EDTECH_MAX_SECTIONS (clamped to 1000),
        EDTECH_LINK_COURSE_SECTIONS.
    """
    return FormatSettings(
        wwwroot=(os.getenv("EDTECH_WWWROOT") or "").strip().rstrip("/"),
        pix_base=(os.getenv("EDTECH_PIX_BASE") or DEFAULT_PIX_BASE).strip().rstrip("/"),
        max_sections=_parse_int_env("EDTECH_MAX_SECTIONS", DEFAULT_MAX_SECTIONS, contract_max=1000),
        link_course_sections=_parse_bool_env("EDTECH_LINK_COURSE_SECTIONS", True),
    )


def current_environment() -> str:
    return (os.getenv("EDTECH_ENV", "dev") or "dev").strip().lower()


def ensure_secure_config_on_startup() -> None:
    """Fail fast on insecure production configuration.

    Checks (prod/staging only):
    - EDTECH_WWWROOT must not use plain http, session keys travel in links.
    """
    if not _is_prod_like(current_environment()):
        return  # dev/test remain permissive

    wwwroot = (os.getenv("EDTECH_WWWROOT") or "").strip().lower()
    if wwwroot.startswith("http://"):
        raise SystemExit(
            "Refusing to start: EDTECH_WWWROOT must use https in production (got http)."
        )


__all__ = [
    "FormatSettings",
    "load_settings",
    "current_environment",
    "ensure_secure_config_on_startup",
]
