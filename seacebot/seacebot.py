from __future__ import annotations
# seacebot/seacebot.py

import sys
import json
import asyncio
import argparse
from typing import Any, AsyncContextManager, Callable, Dict, Optional, Union

from seacebot.utils.config import Config
from seacebot.utils.logger import get_run_logger, logger
from seacebot.utils.helpers import new_run_id, utc_now_iso

from seacebot.scrapers.base_scraper import (
    FilterCriteria,
    RunFailure,
    RunMeta,
    RunResult,
    RunStatus,
)
from seacebot.scrapers.driver import UIDriver
from seacebot.scrapers.errors import SeaceError
from seacebot.scrapers.filter_resolver import FilterResolver
from seacebot.scrapers.pagination import PaginationWalker
from seacebot.scrapers.playwright_driver import playwright_driver_factory
from seacebot.scrapers.record_extractor import RecordExtractor
from seacebot.scrapers.search_controller import SearchExecutionController
from seacebot.scrapers.selectors import DEFAULT_SELECTORS, SeaceSelectors
from seacebot.services.diagnostics import DiagnosticCapture

DriverFactory = Callable[[], AsyncContextManager[UIDriver]]
Outcome = Union[RunResult, RunFailure]


# ------------------------ helpers ------------------------

def ensure_criteria(obj: Any) -> FilterCriteria:
    """Accept a FilterCriteria or a request payload dict (English or Spanish keys)."""
    if isinstance(obj, FilterCriteria):
        return obj
    if isinstance(obj, dict):
        return FilterCriteria.from_payload(obj)
    raise TypeError(f"Unsupported criteria type: {type(obj)}")


def _failure(run_id: str, exc: BaseException, diagnostics=None) -> RunFailure:
    message = str(exc) or exc.__class__.__name__
    stage = exc.stage if isinstance(exc, SeaceError) else "unexpected"
    kwargs = {"diagnostics": diagnostics} if diagnostics is not None else {}
    return RunFailure(
        run_id=run_id,
        error=message,
        error_type=exc.__class__.__name__,
        stage=stage,
        **kwargs,
    )


# ------------------------ run session ------------------------

class RunSession:
    """
    One export run: owns one driver (browser, context, page) from start to
    teardown and returns exactly one RunResult or RunFailure.
    """

    def __init__(
        self,
        criteria: FilterCriteria,
        cfg: Config,
        driver_factory: Optional[DriverFactory] = None,
        selectors: SeaceSelectors = DEFAULT_SELECTORS,
        resolver: Optional[FilterResolver] = None,
    ):
        self.run_id = new_run_id()
        self.criteria = criteria
        self.cfg = cfg
        self.started_at = utc_now_iso()
        self.status = RunStatus.PENDING

        self.driver_factory = driver_factory or playwright_driver_factory(cfg)
        self.selectors = selectors
        self.resolver = resolver or FilterResolver()
        self.diagnostics = DiagnosticCapture(cfg.debug_dir)
        self.log = get_run_logger(self.run_id)

    async def _execute(self, driver: UIDriver) -> RunResult:
        cfg, sel = self.cfg, self.selectors

        self.log.info(f"Opening {cfg.seace_url}")
        await driver.navigate(cfg.seace_url, cfg.nav_timeout_ms, ready_locator=sel.search_form)

        options = self.resolver.resolve(self.criteria)
        controller = SearchExecutionController(
            driver,
            sel,
            panel_timeout_ms=cfg.panel_timeout_ms,
            search_grace_ms=cfg.search_grace_ms,
            poll_interval_ms=cfg.poll_interval_ms,
            log=self.log,
        )
        applied = await controller.apply_filters(options)
        await controller.execute_search()
        await controller.await_results_settled(cfg.results_timeout_ms)

        walker = PaginationWalker(
            driver,
            RecordExtractor(driver, sel, log=self.log),
            sel,
            page_timeout_ms=cfg.page_timeout_ms,
            page_settle_ms=cfg.page_settle_ms,
            poll_interval_ms=cfg.poll_interval_ms,
            max_pages=cfg.max_pages,
            log=self.log,
        )
        walk = await walker.walk()

        meta = RunMeta(
            source=cfg.source_name,
            scraped_at=utc_now_iso(),
            pages_processed=walk.pages_processed,
            filters_applied=self.criteria.as_dict(),
            filters_skipped=[o.criterion for o in options if o not in applied],
            complete=walk.complete,
        )
        return RunResult(run_id=self.run_id, items=walk.records, meta=meta)

    async def run(self) -> Outcome:
        self.status = RunStatus.RUNNING
        self.log.info(f"Run started: {self.criteria.as_dict()}")
        outcome: Optional[Outcome] = None

        try:
            async with self.driver_factory() as driver:
                try:
                    outcome = await self._execute(driver)
                except Exception as e:
                    if not isinstance(e, SeaceError):
                        self.log.exception("Unexpected error")
                    self.log.error(f"Run failed at {getattr(e, 'stage', 'unexpected')}: {e}")
                    # capture while the page is still open
                    outcome = _failure(self.run_id, e, await self.diagnostics.capture(self.run_id, driver))
        except Exception as e:
            # browser failed to launch, or teardown failed
            if outcome is None:
                self.log.exception("Browser session error")
                outcome = _failure(self.run_id, e)
            else:
                self.log.error(f"Browser teardown failed: {e}")

        if isinstance(outcome, RunResult):
            self.status = RunStatus.SUCCEEDED
            self.log.info(
                f"Run complete. Items: {outcome.total} | Pages: {outcome.meta.pages_processed} | "
                f"Skipped filters: {outcome.meta.filters_skipped or '-'}"
            )
        else:
            self.status = RunStatus.FAILED
        return outcome


async def run_export(
    criteria: Union[FilterCriteria, Dict[str, Any]],
    cfg: Optional[Config] = None,
    driver_factory: Optional[DriverFactory] = None,
) -> Outcome:
    """Core entry point: one request in, one RunResult or RunFailure out."""
    session = RunSession(ensure_criteria(criteria), cfg or Config.load(), driver_factory=driver_factory)
    return await session.run()


# ------------------------ CLI ------------------------

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Export SEACE procurement notices for one set of filters.")
    parser.add_argument("--departamento", "--department", dest="department", default="", help="Department, e.g. LIMA.")
    parser.add_argument("--objeto", "--object-type", dest="object_type", default="", help="Object type, e.g. OBRA.")
    parser.add_argument("--anio", "--year", dest="year", default="", help="Call year, e.g. 2025.")
    parser.add_argument("--serve", action="store_true", help="Serve the HTTP API on PORT instead of a one-off run.")
    args = parser.parse_args(argv)

    cfg = Config.load()

    if args.serve:
        from seacebot.services.api import create_app
        logger.info(f"SEACE runner listening on port {cfg.port}")
        create_app(cfg).run(host="0.0.0.0", port=cfg.port)
        return 0

    criteria = FilterCriteria(department=args.department, object_type=args.object_type, year=args.year)
    outcome = asyncio.run(run_export(criteria, cfg))
    print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
    return 0 if outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
