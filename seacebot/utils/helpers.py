from __future__ import annotations
# seacebot/utils/helpers.py
import re
import secrets
import unicodedata
from datetime import datetime, timezone
from typing import Optional


# --------------------------- Text utils ---------------------------------

_WS_RE = re.compile(r"\s+")
def normalize_ws(s: Optional[str]) -> str:
    """Collapse whitespace and trim."""
    return _WS_RE.sub(" ", (s or "").strip())

def fold_text(s: Optional[str]) -> str:
    """
    Comparison key for on-screen labels:
    - collapse whitespace
    - drop accents ('Consultoría' == 'CONSULTORIA')
    - casefold
    """
    txt = unicodedata.normalize("NFKD", normalize_ws(s))
    txt = "".join(ch for ch in txt if not unicodedata.combining(ch))
    return txt.casefold()

def preview(text: Optional[str], n: int = 140) -> str:
    t = normalize_ws(text)
    return (t[:n] + "…") if len(t) > n else t


# --------------------------- Run identity -------------------------------

def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def new_run_id() -> str:
    """
    Timestamp-derived run token, e.g. '2025-03-01T10:22:31.120Z-9f3a1c'.
    The random suffix keeps concurrent runs started in the same millisecond apart.
    """
    return f"{utc_now_iso()}-{secrets.token_hex(3)}"

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_.-]+")
def safe_run_id(run_id: str) -> str:
    """Filesystem-safe form of a run id (':' and friends → '-')."""
    cleaned = _UNSAFE_RE.sub("-", (run_id or "").strip()).strip("-.")
    return cleaned or "run"
