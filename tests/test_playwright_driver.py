from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from playwright.async_api import Error as PWError
from playwright.async_api import TimeoutError as PWTimeout

from seacebot.scrapers.errors import (
    ElementNotFoundError,
    NavigationError,
    OptionNotFoundError,
    PanelTimeoutError,
)
from seacebot.scrapers.base_scraper import FilterCriteria
from seacebot.scrapers.filter_resolver import FilterResolver
from seacebot.scrapers.playwright_driver import PlaywrightDriver
from seacebot.scrapers.search_controller import SearchExecutionController
from seacebot.scrapers.selectors import DEFAULT_SELECTORS

pytestmark = pytest.mark.asyncio


class StubElement:
    def __init__(self, text: str = "", attrs: Optional[Dict[str, str]] = None, disabled: bool = False,
                 click_error: Optional[Exception] = None):
        self.text = text
        self.attrs = attrs or {}
        self.disabled = disabled
        self.click_error = click_error
        self.clicks = 0


class StubLocator:
    """Just enough of playwright's Locator for the driver's calls."""

    def __init__(self, elements: List[StubElement]):
        self.elements = elements

    @property
    def first(self) -> "StubLocator":
        return StubLocator(self.elements[:1])

    def nth(self, i: int) -> "StubLocator":
        return StubLocator(self.elements[i:i + 1])

    async def count(self) -> int:
        return len(self.elements)

    async def wait_for(self, state: str = "visible", timeout: float = 0) -> None:
        if not self.elements:
            raise PWTimeout(f"waiting for locator to be {state}")

    async def inner_text(self) -> str:
        return self.elements[0].text

    async def all_inner_texts(self) -> List[str]:
        return [e.text for e in self.elements]

    async def click(self) -> None:
        el = self.elements[0]
        if el.click_error:
            raise el.click_error
        el.clicks += 1

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.elements[0].attrs.get(name)

    async def is_disabled(self) -> bool:
        return self.elements[0].disabled


class StubPage:
    def __init__(self, dom: Dict[str, List[StubElement]], goto_error: Optional[Exception] = None):
        self.dom = dom
        self.goto_error = goto_error

    def locator(self, selector: str) -> StubLocator:
        return StubLocator(self.dom.get(selector, []))

    async def goto(self, url: str, wait_until: str = "load", timeout: float = 0) -> None:
        if self.goto_error:
            raise self.goto_error

    async def wait_for_selector(self, selector: str, state: str = "visible", timeout: float = 0) -> None:
        if selector not in self.dom:
            raise PWTimeout(f"waiting for {selector}")


PANEL = 'div[id$=":objetoContratacion_panel"]'


def _panel_items(*labels: str) -> List[StubElement]:
    return [StubElement(text=label) for label in labels]


async def test_select_option_by_text_clicks_exact_match_only() -> None:
    items = _panel_items(" Consultoría de Obra ", "Obra", "Bien")
    driver = PlaywrightDriver(StubPage({f"{PANEL} li": items}))

    await driver.select_option_by_text(PANEL, "Obra")

    assert [e.clicks for e in items] == [0, 1, 0]
    with pytest.raises(OptionNotFoundError):
        await driver.select_option_by_text(PANEL, "Obr")


async def test_list_options_normalizes_and_skips_blank() -> None:
    driver = PlaywrightDriver(StubPage({f"{PANEL} li": _panel_items("--Seleccione--", "  ", " Obra\n")}))
    assert await driver.list_options(PANEL) == ["--Seleccione--", "Obra"]


async def test_empty_panel_times_out() -> None:
    driver = PlaywrightDriver(StubPage({}))
    with pytest.raises(PanelTimeoutError):
        await driver.wait_for_panel_visible(PANEL, 10)


async def test_missing_element_raises_element_not_found() -> None:
    driver = PlaywrightDriver(StubPage({}))
    with pytest.raises(ElementNotFoundError):
        await driver.click("button#buscar")
    with pytest.raises(ElementNotFoundError):
        await driver.open_dropdown("div#departamento")


INTERCEPTED = PWTimeout("locator.click: Timeout 10000ms exceeded (element intercepts pointer events)")


@pytest.mark.parametrize("error", [INTERCEPTED, PWError("Element is not attached to the DOM")])
async def test_failed_click_raises_element_not_found(error) -> None:
    page = StubPage({
        "button#buscar": [StubElement(click_error=error)],
        f"{PANEL} li": [StubElement(text="Obra", click_error=error)],
    })
    driver = PlaywrightDriver(page)

    with pytest.raises(ElementNotFoundError) as exc:
        await driver.click("button#buscar")
    assert exc.value.locator == "button#buscar"
    assert exc.value.stage == "locate"
    with pytest.raises(ElementNotFoundError):
        await driver.open_dropdown("button#buscar")
    with pytest.raises(ElementNotFoundError):
        await driver.select_option_by_text(PANEL, "Obra")


async def test_covered_dropdown_skips_only_that_filter() -> None:
    department = DEFAULT_SELECTORS.dropdown("department")
    year = DEFAULT_SELECTORS.dropdown("year")
    year_items = _panel_items("2024", "2025")
    page = StubPage({
        department.trigger: [StubElement(click_error=INTERCEPTED)],
        year.trigger: [StubElement()],
        f"{year.panel} li": year_items,
    })
    controller = SearchExecutionController(PlaywrightDriver(page), DEFAULT_SELECTORS, panel_timeout_ms=10)
    options = FilterResolver().resolve(FilterCriteria(department="LIMA", year="2025"))

    applied = await controller.apply_filters(options)

    assert [o.criterion for o in applied] == ["year"]
    assert [e.clicks for e in year_items] == [0, 1]


@pytest.mark.parametrize(
    "element, expected",
    [
        (StubElement(attrs={"class": "ui-paginator-next ui-state-default ui-state-disabled"}), True),
        (StubElement(attrs={"class": "ui-paginator-next", "aria-disabled": "true"}), True),
        (StubElement(attrs={"class": "ui-paginator-next"}, disabled=True), True),
        (StubElement(attrs={"class": "ui-paginator-next ui-state-default"}), False),
    ],
)
async def test_is_disabled_reads_primefaces_state(element, expected) -> None:
    driver = PlaywrightDriver(StubPage({".ui-paginator-next": [element]}))
    assert await driver.is_disabled(".ui-paginator-next") is expected


async def test_navigation_timeout_becomes_navigation_error() -> None:
    driver = PlaywrightDriver(StubPage({}, goto_error=PWTimeout("Timeout 100ms exceeded")))
    with pytest.raises(NavigationError):
        await driver.navigate("https://seace.example", 100)

    driver = PlaywrightDriver(StubPage({}))
    with pytest.raises(NavigationError):
        await driver.navigate("https://seace.example", 100, ready_locator="form#buscador")


async def test_read_text_collapses_whitespace() -> None:
    driver = PlaywrightDriver(StubPage({".ui-paginator-current": [StubElement(text="  (1 de\n 4)  ")]}))

    assert await driver.read_text(".ui-paginator-current") == "(1 de 4)"
    with pytest.raises(ElementNotFoundError):
        await driver.read_text(".missing")
