from __future__ import annotations
# seacebot/scrapers/record_extractor.py

from typing import List, Optional

from .base_scraper import RECORD_FIELDS, ResultRecord
from .driver import UIDriver
from .errors import SchemaMismatchError
from .selectors import SeaceSelectors
from seacebot.utils.logger import Log, logger


class RecordExtractor:
    """Reads the result table currently on screen into ResultRecord values."""

    def __init__(self, driver: UIDriver, selectors: SeaceSelectors, log: Optional[Log] = None):
        self.driver = driver
        self.selectors = selectors
        self.log = log or logger

    async def extract(self) -> List[ResultRecord]:
        if not await self.driver.is_present(self.selectors.results_table):
            raise SchemaMismatchError(
                "Result table not found; the search page layout has changed",
                locator=self.selectors.results_table,
            )

        rows = await self.driver.read_table(self.selectors.result_rows)
        out: List[ResultRecord] = []
        dropped = 0
        for cells in rows:
            rec = ResultRecord.from_cells(cells)
            if rec is None:
                # placeholder ("No se encontraron Datos") or malformed row
                dropped += 1
                continue
            out.append(rec)

        if dropped:
            self.log.debug(f"Dropped {dropped} row(s) with fewer than {RECORD_FIELDS} cells")
        return out
