from __future__ import annotations

import pytest

from seacebot.scrapers.errors import SchemaMismatchError
from seacebot.scrapers.record_extractor import RecordExtractor
from seacebot.scrapers.selectors import DEFAULT_SELECTORS
from tests.fakes import FakeDriver, FakeSeaceSite, make_pages, make_row

pytestmark = pytest.mark.asyncio


def _searched_site(**kwargs) -> FakeSeaceSite:
    site = FakeSeaceSite(**kwargs)
    site.searched = True
    return site


async def test_rows_with_fewer_than_seven_cells_are_dropped() -> None:
    site = _searched_site(pages=make_pages(8, malformed_on_first=1))
    records = await RecordExtractor(FakeDriver(site), DEFAULT_SELECTORS).extract()

    assert len(records) == 8
    assert [r.numero for r in records] == [str(n) for n in range(1, 9)]


async def test_cells_map_to_fields_in_order() -> None:
    row = ["12", "GOBIERNO REGIONAL", "01/02/2025 09:30", "LP-1-2025", "CP-3", "Bien", "Adquisición de equipos", "x"]
    site = _searched_site(pages=[[row]])
    (rec,) = await RecordExtractor(FakeDriver(site), DEFAULT_SELECTORS).extract()

    assert (rec.numero, rec.entidad, rec.fecha_publicacion, rec.nomenclatura,
            rec.reiniciado_desde, rec.objeto, rec.descripcion) == tuple(row[:7])


async def test_placeholder_row_yields_nothing() -> None:
    site = FakeSeaceSite(pages=[[make_row(1)]])      # not searched: placeholder only
    assert await RecordExtractor(FakeDriver(site), DEFAULT_SELECTORS).extract() == []


async def test_missing_table_is_a_schema_mismatch() -> None:
    site = _searched_site(pages=[[make_row(1)]], table_missing=True)

    with pytest.raises(SchemaMismatchError) as exc:
        await RecordExtractor(FakeDriver(site), DEFAULT_SELECTORS).extract()
    assert exc.value.stage == "extract"
    assert exc.value.locator == DEFAULT_SELECTORS.results_table
