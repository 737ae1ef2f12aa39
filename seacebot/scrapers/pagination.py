from __future__ import annotations
# seacebot/scrapers/pagination.py

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from .base_scraper import PageCursor, ResultRecord
from .driver import UIDriver
from .errors import PaginationTimeoutError
from .record_extractor import RecordExtractor
from .selectors import SeaceSelectors
from seacebot.utils.helpers import preview
from seacebot.utils.logger import Log, logger


@dataclass
class PageWalk:
    records: List[ResultRecord] = field(default_factory=list)
    pages_processed: int = 0
    complete: bool = True


class PaginationWalker:
    """
    Extracting → CheckingNext → (Extracting | Done).

    Starts on page 1 once the results have settled. Stops when the next control
    is disabled or missing, or when a page contributes no new records. After
    "next" the walker waits for the first row to change; a page that never
    turns raises PaginationTimeoutError.
    """

    def __init__(
        self,
        driver: UIDriver,
        extractor: RecordExtractor,
        selectors: SeaceSelectors,
        *,
        page_timeout_ms: int = 30000,
        page_settle_ms: int = 800,
        poll_interval_ms: int = 250,
        max_pages: int = 0,
        log: Optional[Log] = None,
    ):
        self.driver = driver
        self.extractor = extractor
        self.selectors = selectors
        self.page_timeout_ms = page_timeout_ms
        self.page_settle_ms = page_settle_ms
        self.poll_interval_ms = poll_interval_ms
        self.max_pages = max_pages
        self.log = log or logger

    async def _next_enabled(self) -> bool:
        nxt = self.selectors.next_page
        if not await self.driver.is_present(nxt):
            return False
        return not await self.driver.is_disabled(nxt)

    async def _signature(self) -> Tuple[str, ...]:
        """Cells of the first data row; identifies which page the table is showing."""
        rows = await self.driver.read_table(self.selectors.data_rows)
        return tuple(rows[0]) if rows else ()

    async def _advance(self, cursor: PageCursor) -> None:
        # the old page's rows stay in the table until the AJAX update lands,
        # so "rows present" alone would re-read the page just extracted
        before = await self._signature()

        async def _turned() -> bool:
            if await self.driver.count(self.selectors.data_rows) == 0:
                return False
            now = await self._signature()
            return bool(now) and now != before

        await self.driver.click(self.selectors.next_page)
        await self.driver.pause(self.page_settle_ms)
        await self.driver.wait_for_condition(
            _turned,
            self.page_timeout_ms,
            self.poll_interval_ms,
            error_cls=PaginationTimeoutError,
            what=f"rows of page {cursor.page_index + 1}",
        )
        cursor.advance()

    async def walk(self) -> PageWalk:
        result = PageWalk()
        cursor = PageCursor(page_index=1)
        seen: Set[ResultRecord] = set()

        while True:
            # Extracting
            batch = await self.extractor.extract()
            if batch and seen.issuperset(batch):
                # the table still shows rows already taken: no progress
                self.log.warning(f"Page {cursor.page_index} repeats earlier records; stopping")
                break
            seen.update(batch)
            result.pages_processed = cursor.page_index
            result.records.extend(batch)
            self.log.info(
                f"Page {cursor.page_index}: {len(batch)} record(s), {len(result.records)} total"
                + (f" (first: {preview(batch[0].nomenclatura, 60)})" if batch else "")
            )
            if not batch:
                break

            # CheckingNext
            cursor.has_next = await self._next_enabled()
            if not cursor.has_next:
                break
            if self.max_pages and cursor.page_index >= self.max_pages:
                self.log.warning(f"Stopping at page cap {self.max_pages}; more pages remain")
                result.complete = False
                break

            await self._advance(cursor)

        return result
