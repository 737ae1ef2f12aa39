from __future__ import annotations
# seacebot/scrapers/playwright_driver.py

from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from playwright.async_api import Page, async_playwright
from playwright.async_api import Error as PWError
from playwright.async_api import TimeoutError as PWTimeout

from .driver import UIDriver
from .errors import (
    ElementNotFoundError,
    NavigationError,
    OptionNotFoundError,
    PanelTimeoutError,
)
from seacebot.utils.config import Config
from seacebot.utils.helpers import normalize_ws
from seacebot.utils.logger import logger

UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

# short bound for "is it there right now" lookups
_LOCATE_TIMEOUT_MS = 5000


class PlaywrightDriver(UIDriver):
    name = "playwright"

    # PrimeFaces selectOneMenu panels render their choices as <li> items
    OPTION_ITEM = "li"

    def __init__(self, page: Page):
        self.page = page

    @classmethod
    @asynccontextmanager
    async def launch(cls, cfg: Config) -> AsyncIterator["PlaywrightDriver"]:
        """One playwright/browser/context/page per run, all closed on every exit path."""
        async with async_playwright() as p:
            browser = await p.chromium.launch(
                headless=cfg.headless,
                args=["--disable-blink-features=AutomationControlled", "--no-sandbox"],
            )
            try:
                ctx = await browser.new_context(
                    user_agent=UA,
                    locale="es-PE",
                    timezone_id="America/Lima",
                    viewport={"width": 1366, "height": 900},
                    extra_http_headers={"Accept-Language": "es-PE,es;q=0.9"},
                )
                try:
                    page = await ctx.new_page()
                    page.set_default_timeout(cfg.panel_timeout_ms)
                    page.set_default_navigation_timeout(cfg.nav_timeout_ms)
                    try:
                        yield cls(page)
                    finally:
                        await page.close()
                finally:
                    await ctx.close()
            finally:
                await browser.close()

    # ---------- helpers ----------

    async def _require(self, locator: str):
        loc = self.page.locator(locator).first
        try:
            await loc.wait_for(state="attached", timeout=_LOCATE_TIMEOUT_MS)
        except PWTimeout:
            raise ElementNotFoundError(f"Element not found: {locator}", locator=locator) from None
        return loc

    async def _click(self, loc, locator: str) -> None:
        # covered, detached or never-enabled targets all surface as "not found"
        try:
            await loc.click()
        except PWTimeout:
            raise ElementNotFoundError(f"Element not clickable: {locator}", locator=locator) from None
        except PWError as e:
            raise ElementNotFoundError(f"Click on {locator} failed: {e}", locator=locator) from e

    def _items(self, panel_locator: str):
        return self.page.locator(f"{panel_locator} {self.OPTION_ITEM}")

    # ---------- primitives ----------

    async def navigate(self, url: str, timeout_ms: int, ready_locator: str | None = None) -> None:
        try:
            await self.page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
            if ready_locator:
                await self.page.wait_for_selector(ready_locator, state="attached", timeout=timeout_ms)
        except PWTimeout as e:
            raise NavigationError(f"Page not ready within {timeout_ms}ms: {url}") from e
        except PWError as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e

    async def open_dropdown(self, locator: str) -> None:
        await self._click(await self._require(locator), locator)

    async def wait_for_panel_visible(self, panel_locator: str, timeout_ms: int) -> None:
        try:
            await self._items(panel_locator).first.wait_for(state="visible", timeout=timeout_ms)
        except PWTimeout:
            raise PanelTimeoutError(
                f"Options panel {panel_locator} not visible within {timeout_ms}ms",
                locator=panel_locator,
            ) from None

    async def list_options(self, panel_locator: str) -> List[str]:
        texts = await self._items(panel_locator).all_inner_texts()
        return [normalize_ws(t) for t in texts if normalize_ws(t)]

    async def select_option_by_text(self, panel_locator: str, text: str) -> None:
        wanted = normalize_ws(text)
        items = self._items(panel_locator)
        for i in range(await items.count()):
            item = items.nth(i)
            if normalize_ws(await item.inner_text()) == wanted:
                await self._click(item, f"{panel_locator} {self.OPTION_ITEM} >> nth={i}")
                return
        raise OptionNotFoundError(f"No option {wanted!r} in {panel_locator}", locator=panel_locator)

    async def click(self, locator: str) -> None:
        await self._click(await self._require(locator), locator)

    async def count(self, locator: str) -> int:
        return await self.page.locator(locator).count()

    async def is_present(self, locator: str) -> bool:
        return await self.count(locator) > 0

    async def is_disabled(self, locator: str) -> bool:
        loc = await self._require(locator)
        classes = (await loc.get_attribute("class")) or ""
        if "ui-state-disabled" in classes.split():
            return True
        if (await loc.get_attribute("aria-disabled")) == "true":
            return True
        return await loc.is_disabled()

    async def read_text(self, locator: str) -> str:
        loc = await self._require(locator)
        return normalize_ws(await loc.inner_text())

    async def read_table(self, rows_locator: str) -> List[List[str]]:
        # one round-trip per page instead of one per cell
        return await self.page.eval_on_selector_all(
            rows_locator,
            "rows => rows.map(r => Array.from(r.querySelectorAll(':scope > td')).map(td => td.innerText || ''))",
        )

    async def capture_screenshot(self, path: str) -> None:
        await self.page.screenshot(path=path, full_page=True)

    async def capture_markup(self) -> str:
        return await self.page.content()


def playwright_driver_factory(cfg: Config):
    """Driver factory bound to a config; what RunSession calls once per run."""
    def _factory():
        logger.debug("Launching chromium (headless=%s)", cfg.headless)
        return PlaywrightDriver.launch(cfg)
    return _factory
