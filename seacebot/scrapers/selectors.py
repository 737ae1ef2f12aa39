from __future__ import annotations
# seacebot/scrapers/selectors.py

from dataclasses import dataclass, field
from typing import Dict

# The public SEACE search is a PrimeFaces (JSF) page. Component ids are
# namespaced like "tbBuscador:idFormBuscarProceso:departamento"; the generated
# prefixes are not stable, so every selector anchors on the id suffix.


@dataclass(frozen=True)
class DropdownSelectors:
    trigger: str        # the selectOneMenu wrapper; clicking it opens the panel
    panel: str          # the detached "<id>_panel" overlay holding <li> items


@dataclass(frozen=True)
class SeaceSelectors:
    dropdowns: Dict[str, DropdownSelectors] = field(default_factory=lambda: {
        "department": DropdownSelectors(
            trigger='div[id$=":departamento"]',
            panel='div[id$=":departamento_panel"]',
        ),
        "objectType": DropdownSelectors(
            trigger='div[id$=":objetoContratacion"]',
            panel='div[id$=":objetoContratacion_panel"]',
        ),
        "year": DropdownSelectors(
            trigger='div[id$=":anioConvocatoria"]',
            panel='div[id$=":anioConvocatoria_panel"]',
        ),
    })

    search_form: str = 'form[id$=":idFormBuscarProceso"]'
    search_button: str = 'button[id$=":btnBuscarSelToken"]'

    results_table: str = 'div[id$=":dtProcesos"]'
    result_rows: str = 'tbody[id$=":dtProcesos_data"] > tr'
    # rows that are real data, not the "No se encontraron Datos" placeholder
    data_rows: str = 'tbody[id$=":dtProcesos_data"] > tr:not(.ui-datatable-empty-message)'

    next_page: str = 'div[id$=":dtProcesos"] .ui-paginator-next'

    def dropdown(self, criterion: str) -> DropdownSelectors:
        return self.dropdowns[criterion]


DEFAULT_SELECTORS = SeaceSelectors()
