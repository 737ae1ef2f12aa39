from __future__ import annotations
# seacebot/utils/config.py
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv, find_dotenv

# Load .env from repo root/parents exactly once, before anything else reads env
load_dotenv(find_dotenv(usecwd=True))

DEFAULT_SEACE_URL = (
    "https://prod2.seace.gob.pe/seacebus-uiwd-pub/buscadorPublico/buscadorPublico.xhtml"
)

# --- helpers ---------------------------------------------------------------

def _clean_secret(val: Optional[str]) -> str:
    """Trim whitespace and remove wrapping single/double quotes."""
    if not val:
        return ""
    s = val.strip()
    if (s.startswith('"') and s.endswith('"')) or (s.startswith("'") and s.endswith("'")):
        s = s[1:-1].strip()
    return s

def _is_placeholder(val: str) -> bool:
    """Detect placeholder-y values that should be treated as 'unset'."""
    v = val.strip().lower()
    return (
        not v
        or v.startswith("<your-")          # e.g. <your-auth-token>
        or v in {"xxx", "changeme", "todo"}
    )

def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None

def _env_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}

# --- Config ----------------------------------------------------------------

@dataclass
class Config:
    # --- Target ---
    seace_url: str = DEFAULT_SEACE_URL
    source_name: str = "SEACE"

    # --- Transport ---
    port: int = 3000
    auth_token: str = ""

    # --- Browser ---
    headless: bool = True

    # --- Diagnostics ---
    debug_dir: str = "debug"

    # --- Waits (milliseconds) ---
    nav_timeout_ms: int = 60000
    panel_timeout_ms: int = 10000
    results_timeout_ms: int = 60000
    page_timeout_ms: int = 30000
    search_grace_ms: int = 1500
    page_settle_ms: int = 800
    poll_interval_ms: int = 250

    # --- Pagination ---
    max_pages: int = 0                 # 0 = walk until the pager says stop

    @classmethod
    def load(cls) -> "Config":
        auth_token = _clean_secret(os.getenv("AUTH_TOKEN", ""))
        if _is_placeholder(auth_token):
            auth_token = ""

        cfg = cls(
            seace_url=(os.getenv("SEACE_URL") or DEFAULT_SEACE_URL).strip(),
            port=_env_int("PORT", 3000),
            auth_token=auth_token,
            headless=_env_bool("HEADLESS", True),
            debug_dir=(os.getenv("DEBUG_DIR") or "debug").strip(),
            nav_timeout_ms=_env_int("NAV_TIMEOUT_MS", 60000),
            panel_timeout_ms=_env_int("PANEL_TIMEOUT_MS", 10000),
            results_timeout_ms=_env_int("RESULTS_TIMEOUT_MS", 60000),
            page_timeout_ms=_env_int("PAGE_TIMEOUT_MS", 30000),
            search_grace_ms=_env_int("SEARCH_GRACE_MS", 1500),
            page_settle_ms=_env_int("PAGE_SETTLE_MS", 800),
            poll_interval_ms=_env_int("POLL_INTERVAL_MS", 250),
            max_pages=max(0, _env_int("MAX_PAGES", 0)),
        )

        from seacebot.utils.logger import logger
        logger.info(
            "Config loaded: SEACE_URL=%s AUTH_TOKEN=%s DEBUG_DIR=%s HEADLESS=%s",
            cfg.seace_url,
            ("<set>" if cfg.auth_token else "<disabled>"),
            cfg.debug_dir,
            cfg.headless,
        )
        return cfg
