from __future__ import annotations
# seacebot/scrapers/filter_resolver.py

from typing import Dict, Iterable, List, Optional

from .base_scraper import FilterCriteria, ResolvedOption
from seacebot.utils.helpers import fold_text, normalize_ws

# Object-type labels as the search form spells them. Callers usually send
# them upper-cased ("OBRA"); the dropdown shows "Obra".
OBJECT_TYPE_LABELS = ["Bien", "Obra", "Servicio", "Consultoría de Obra"]


def match_label(raw: str, labels: Iterable[str]) -> Optional[str]:
    """
    Pick the on-screen label a caller value refers to.

    Comparison ignores case, accents and repeated whitespace. An exact match
    wins; otherwise a label containing the value is accepted only when it is
    the only one. Returns None when nothing (or nothing unambiguous) matches.
    """
    key = fold_text(raw)
    if not key:
        return None
    labels = [normalize_ws(l) for l in labels if normalize_ws(l)]

    for label in labels:
        if fold_text(label) == key:
            return label

    partial = [label for label in labels if key in fold_text(label)]
    if len(partial) == 1:
        return partial[0]
    return None


class FilterResolver:
    """
    Turns caller criteria into ResolvedOption values.

    known_labels maps a criterion to labels already known to exist on screen;
    when a value matches one, that spelling becomes the ui_label. Unknown values
    pass through trimmed and are matched against the live panel at click time.
    """

    def __init__(self, known_labels: Optional[Dict[str, List[str]]] = None):
        self.known_labels = {"objectType": OBJECT_TYPE_LABELS}
        if known_labels:
            self.known_labels.update(known_labels)

    def resolve(self, criteria: FilterCriteria) -> List[ResolvedOption]:
        out: List[ResolvedOption] = []
        for criterion, value in criteria.items():
            if not value:
                continue
            label = match_label(value, self.known_labels.get(criterion, [])) or value
            out.append(ResolvedOption(criterion=criterion, raw_value=value, ui_label=label))
        return out

    match_label = staticmethod(match_label)
