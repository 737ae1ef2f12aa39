from __future__ import annotations
# seacebot/services/diagnostics.py

import asyncio
from pathlib import Path

from seacebot.scrapers.base_scraper import Diagnostics
from seacebot.scrapers.driver import UIDriver
from seacebot.utils.helpers import safe_run_id
from seacebot.utils.logger import get_run_logger


class DiagnosticCapture:
    """
    Best-effort screenshot + HTML dump of the page a run failed on.

    Never raises: whatever it cannot write comes back as None, and the caller
    keeps reporting the error that triggered the capture.
    """

    def __init__(self, debug_dir: str | Path = "debug"):
        self.debug_dir = Path(debug_dir)

    async def capture(self, run_id: str, driver: UIDriver) -> Diagnostics:
        out = Diagnostics()
        log = get_run_logger(run_id)
        name = safe_run_id(run_id)

        try:
            # concurrent runs may race here; exist_ok covers it
            self.debug_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log.error(f"Cannot create debug dir {self.debug_dir}: {e}")
            return out

        png = self.debug_dir / f"{name}.png"
        try:
            await driver.capture_screenshot(str(png))
            out.screenshot_path = str(png)
        except Exception as e:
            log.error(f"Screenshot capture failed: {e}")

        html = self.debug_dir / f"{name}.html"
        try:
            markup = await driver.capture_markup()
            await asyncio.to_thread(html.write_text, markup, encoding="utf-8")
            out.html_path = str(html)
        except Exception as e:
            log.error(f"HTML capture failed: {e}")

        log.info(f"Diagnostics: screenshot={out.screenshot_path} html={out.html_path}")
        return out
