from __future__ import annotations
# seacebot/scrapers/search_controller.py

from typing import List, Optional

from .driver import UIDriver
from .errors import (
    ElementNotFoundError,
    OptionNotFoundError,
    ResultsTimeoutError,
    WaitTimeoutError,
)
from .base_scraper import ResolvedOption
from .filter_resolver import match_label
from .selectors import SeaceSelectors
from seacebot.utils.logger import Log, logger


class SearchExecutionController:
    def __init__(
        self,
        driver: UIDriver,
        selectors: SeaceSelectors,
        *,
        panel_timeout_ms: int = 10000,
        search_grace_ms: int = 1500,
        poll_interval_ms: int = 250,
        log: Optional[Log] = None,
    ):
        self.driver = driver
        self.selectors = selectors
        self.panel_timeout_ms = panel_timeout_ms
        self.search_grace_ms = search_grace_ms
        self.poll_interval_ms = poll_interval_ms
        self.log = log or logger

    async def _apply_one(self, option: ResolvedOption) -> bool:
        dd = self.selectors.dropdown(option.criterion)

        # the resolver's label is a guess; the live panel decides
        def pick(labels: List[str]):
            return match_label(option.ui_label, labels) or match_label(option.raw_value, labels)

        try:
            label = await self.driver.select_option(dd.trigger, dd.panel, pick, self.panel_timeout_ms)
        except (ElementNotFoundError, OptionNotFoundError, WaitTimeoutError) as e:
            self.log.warning(f"Filter {option.criterion}={option.raw_value!r} skipped: {e}")
            return False

        self.log.info(f"Filter {option.criterion}={option.raw_value!r} applied as {label!r}")
        return True

    async def apply_filters(self, options: List[ResolvedOption]) -> List[ResolvedOption]:
        """Apply each option in turn; returns the ones that made it onto the form."""
        applied: List[ResolvedOption] = []
        for option in options:
            if await self._apply_one(option):
                applied.append(option)
        return applied

    async def execute_search(self) -> None:
        await self.driver.click(self.selectors.search_button)
        # no "request started" signal on the page; give the AJAX call a head start
        await self.driver.pause(self.search_grace_ms)

    async def _has_data_rows(self) -> bool:
        return await self.driver.count(self.selectors.data_rows) > 0

    async def await_results_settled(self, timeout_ms: int) -> None:
        await self.driver.wait_for_condition(
            self._has_data_rows,
            timeout_ms,
            self.poll_interval_ms,
            error_cls=ResultsTimeoutError,
            what="result rows",
        )
        self.log.info("Results settled")
