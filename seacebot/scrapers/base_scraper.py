from __future__ import annotations
# seacebot/scrapers/base_scraper.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from seacebot.utils.helpers import normalize_ws

# Payload keys accepted for each criterion (English first, then the
# Spanish names existing API clients send).
_PAYLOAD_KEYS = {
    "department": ("department", "departamento"),
    "objectType": ("objectType", "object_type", "objeto"),
    "year": ("year", "anio", "año"),
}

RECORD_FIELDS = 7


def _as_text(val: Any) -> str:
    if val is None:
        return ""
    return normalize_ws(str(val))


@dataclass(frozen=True)
class FilterCriteria:
    department: str = ""
    object_type: str = ""
    year: str = ""

    def __post_init__(self):
        # year may arrive as a number; keep everything as trimmed text
        object.__setattr__(self, "department", _as_text(self.department))
        object.__setattr__(self, "object_type", _as_text(self.object_type))
        object.__setattr__(self, "year", _as_text(self.year))

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "FilterCriteria":
        payload = payload or {}
        values: Dict[str, Any] = {}
        for name, keys in _PAYLOAD_KEYS.items():
            values[name] = next((payload[k] for k in keys if payload.get(k) not in (None, "")), "")
        return cls(
            department=values["department"],
            object_type=values["objectType"],
            year=values["year"],
        )

    def items(self) -> List[tuple]:
        """(criterion, value) pairs in application order."""
        return [
            ("department", self.department),
            ("objectType", self.object_type),
            ("year", self.year),
        ]

    def missing(self) -> List[str]:
        return [name for name, value in self.items() if not value]

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items())


@dataclass(frozen=True)
class ResolvedOption:
    criterion: str
    raw_value: str
    ui_label: str
    ui_identifier: Optional[str] = None   # absent → match by visible label at click time


class RunStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ResultRecord:
    numero: str
    entidad: str
    fecha_publicacion: str
    nomenclatura: str
    reiniciado_desde: str
    objeto: str
    descripcion: str

    @classmethod
    def from_cells(cls, cells: Sequence[str]) -> Optional["ResultRecord"]:
        """Positional mapping of one table row; None when the row is too short."""
        if len(cells) < RECORD_FIELDS:
            return None
        return cls(*(normalize_ws(c) for c in cells[:RECORD_FIELDS]))

    def to_dict(self) -> Dict[str, str]:
        return {
            "numero": self.numero,
            "entidad": self.entidad,
            "fechaPublicacion": self.fecha_publicacion,
            "nomenclatura": self.nomenclatura,
            "reiniciadoDesde": self.reiniciado_desde,
            "objeto": self.objeto,
            "descripcion": self.descripcion,
        }


@dataclass
class PageCursor:
    page_index: int = 1
    has_next: bool = False

    def advance(self) -> None:
        self.page_index += 1


@dataclass
class Diagnostics:
    screenshot_path: Optional[str] = None
    html_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"screenshotPath": self.screenshot_path, "htmlPath": self.html_path}


@dataclass
class RunMeta:
    source: str
    scraped_at: str
    pages_processed: int
    filters_applied: Dict[str, str]
    filters_skipped: List[str] = field(default_factory=list)
    complete: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "scrapedAt": self.scraped_at,
            "pagesProcessed": self.pages_processed,
            "filtersApplied": dict(self.filters_applied),
            "filtersSkipped": list(self.filters_skipped),
            "complete": self.complete,
        }


@dataclass
class RunResult:
    run_id: str
    items: List[ResultRecord]
    meta: RunMeta

    ok = True

    @property
    def total(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runId": self.run_id,
            "items": [r.to_dict() for r in self.items],
            "total": self.total,
            "meta": self.meta.to_dict(),
        }


@dataclass
class RunFailure:
    run_id: str
    error: str
    error_type: str
    stage: str
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    ok = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runId": self.run_id,
            "error": self.error,
            "errorType": self.error_type,
            "stage": self.stage,
            "diagnostics": self.diagnostics.to_dict(),
        }
