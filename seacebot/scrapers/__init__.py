from __future__ import annotations
# seacebot/scrapers/__init__.py

from .base_scraper import FilterCriteria, ResolvedOption, ResultRecord, RunFailure, RunResult
from .driver import UIDriver
from .filter_resolver import FilterResolver
from .pagination import PaginationWalker
from .record_extractor import RecordExtractor
from .search_controller import SearchExecutionController
from .selectors import DEFAULT_SELECTORS, SeaceSelectors

__all__ = [
    "FilterCriteria",
    "ResolvedOption",
    "ResultRecord",
    "RunResult",
    "RunFailure",
    "UIDriver",
    "FilterResolver",
    "SearchExecutionController",
    "PaginationWalker",
    "RecordExtractor",
    "SeaceSelectors",
    "DEFAULT_SELECTORS",
]
