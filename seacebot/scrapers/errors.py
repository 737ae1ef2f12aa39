from __future__ import annotations
# seacebot/scrapers/errors.py
#
# Failure taxonomy for one export run. Each class carries a `stage` tag naming
# the step that failed; RunSession copies it into the failure record.


class SeaceError(Exception):
    stage = "run"

    def __init__(self, message: str, *, locator: str | None = None):
        super().__init__(message)
        self.locator = locator


class NavigationError(SeaceError):
    stage = "navigate"


class ElementNotFoundError(SeaceError):
    stage = "locate"


class WaitTimeoutError(SeaceError, TimeoutError):
    stage = "wait"


class PanelTimeoutError(WaitTimeoutError):
    stage = "dropdown_panel"


class ResultsTimeoutError(WaitTimeoutError):
    stage = "await_results"


class PaginationTimeoutError(WaitTimeoutError):
    stage = "pagination"


class OptionNotFoundError(SeaceError):
    stage = "select_option"


class SchemaMismatchError(SeaceError):
    stage = "extract"


__all__ = [
    "SeaceError",
    "NavigationError",
    "ElementNotFoundError",
    "WaitTimeoutError",
    "PanelTimeoutError",
    "ResultsTimeoutError",
    "PaginationTimeoutError",
    "OptionNotFoundError",
    "SchemaMismatchError",
]
