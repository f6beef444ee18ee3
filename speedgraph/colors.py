from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

# Soft pastel palette keyed by canonical diet group.
GROUP_COLOR: Dict[str, str] = {
    "herbivore": "#86efac",
    "omnivore": "#fde68a",
    "carnivore": "#fca5a5",
    "insectivore": "#ddd6fe",
    "piscivore": "#93c5fd",
    "frugivore": "#99f6e4",
    "unknown": "#cbd5e1",
}

FALLBACK_PALETTE: List[str] = ["#bfdbfe", "#bbf7d0", "#fde68a", "#fecaca", "#ddd6fe", "#99f6e4", "#cbd5e1"]


@dataclass(frozen=True)
class LegendItem:
    group: str
    color: str


def get_color(group: str, idx: int) -> str:
    """Canonical groups get their fixed color; anything else cycles the fallback palette by position."""
    color = GROUP_COLOR.get(group)
    if color is not None:
        return color
    return FALLBACK_PALETTE[idx % len(FALLBACK_PALETTE)]


def legend_items(shown: Sequence[object]) -> List[LegendItem]:
    """One entry per group present in ``shown`` (anything with a ``group`` attribute), sorted by label.

    Colors use the position of the group's first bar so the legend matches the chart.
    """
    seen = set()
    items: List[LegendItem] = []
    for idx, datum in enumerate(shown):
        group = getattr(datum, "group")
        if group in seen:
            continue
        seen.add(group)
        items.append(LegendItem(group=group, color=get_color(group, idx)))
    return sorted(items, key=lambda it: it.group)
