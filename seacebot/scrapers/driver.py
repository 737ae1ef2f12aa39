from __future__ import annotations
# seacebot/scrapers/driver.py

import asyncio
import time
from typing import Awaitable, Callable, List, Optional

from .errors import OptionNotFoundError, PanelTimeoutError, WaitTimeoutError

Predicate = Callable[[], Awaitable[bool]]
Picker = Callable[[List[str]], Optional[str]]


class UIDriver:
    """
    Narrow capability surface over a browser page.

    Everything above this class (filters, search, paging, extraction) talks to
    the page only through these coroutines, so it can run against a fake in tests.
    Concrete drivers must implement the primitives; the sequencing helpers at the
    bottom are shared.
    """

    name: str = "base"

    # ---------- primitives ----------

    async def navigate(self, url: str, timeout_ms: int, ready_locator: str | None = None) -> None:
        raise NotImplementedError

    async def open_dropdown(self, locator: str) -> None:
        raise NotImplementedError

    async def wait_for_panel_visible(self, panel_locator: str, timeout_ms: int) -> None:
        raise NotImplementedError

    async def list_options(self, panel_locator: str) -> List[str]:
        raise NotImplementedError

    async def select_option_by_text(self, panel_locator: str, text: str) -> None:
        raise NotImplementedError

    async def click(self, locator: str) -> None:
        raise NotImplementedError

    async def count(self, locator: str) -> int:
        raise NotImplementedError

    async def is_present(self, locator: str) -> bool:
        raise NotImplementedError

    async def is_disabled(self, locator: str) -> bool:
        raise NotImplementedError

    async def read_text(self, locator: str) -> str:
        raise NotImplementedError

    async def read_table(self, rows_locator: str) -> List[List[str]]:
        """Cell texts of every row matched by rows_locator, in DOM order."""
        raise NotImplementedError

    async def capture_screenshot(self, path: str) -> None:
        raise NotImplementedError

    async def capture_markup(self) -> str:
        raise NotImplementedError

    # ---------- shared helpers ----------

    async def pause(self, ms: int) -> None:
        if ms > 0:
            await asyncio.sleep(ms / 1000.0)

    async def wait_for_condition(
        self,
        predicate: Predicate,
        timeout_ms: int,
        poll_ms: int = 250,
        error_cls: type = WaitTimeoutError,
        what: str = "condition",
    ) -> None:
        """Poll predicate until it returns True; raise error_cls once timeout_ms has elapsed."""
        deadline = time.monotonic() + max(0, timeout_ms) / 1000.0
        while True:
            if await predicate():
                return
            if time.monotonic() >= deadline:
                raise error_cls(f"Timed out after {timeout_ms}ms waiting for {what}")
            await asyncio.sleep(max(1, poll_ms) / 1000.0)

    async def select_option(self, trigger: str, panel: str, pick: Picker, timeout_ms: int) -> str:
        """
        open → wait for panel → choose → click, as one step.

        pick receives the visible option labels and returns the one to click (or
        None). Returns the clicked label; raises ElementNotFoundError,
        PanelTimeoutError or OptionNotFoundError.
        """
        await self.open_dropdown(trigger)
        try:
            await self.wait_for_panel_visible(panel, timeout_ms)
        except PanelTimeoutError:
            raise
        except WaitTimeoutError as e:
            raise PanelTimeoutError(str(e), locator=panel) from e
        labels = await self.list_options(panel)
        label = pick(labels)
        if not label:
            raise OptionNotFoundError(f"No matching option among {len(labels)} in {panel}", locator=panel)
        await self.select_option_by_text(panel, label)
        return label
