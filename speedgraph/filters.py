from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Literal, Optional, Tuple

SortDirection = Literal["asc", "desc"]

NO_FILTER = "__none__"
ALL_VALUES = "__all__"

DEFAULT_TOP_N = 15
TOP_N_MIN = 8
TOP_N_MAX = 40


@dataclass(frozen=True)
class SelectionState:
    search: str = ""
    filter_column: Optional[str] = None
    filter_value: Optional[str] = None
    hidden: FrozenSet[str] = field(default_factory=frozenset)
    sort_direction: SortDirection = "desc"
    top_n: int = DEFAULT_TOP_N

    @property
    def sort_desc(self) -> bool:
        return self.sort_direction != "asc"

    def exclude(self, name: str) -> "SelectionState":
        name = (name or "").strip()
        if not name:
            return self
        return replace(self, hidden=self.hidden | {name})

    def restore_all(self) -> "SelectionState":
        return replace(self, hidden=frozenset())

    def toggle_sort(self) -> "SelectionState":
        return replace(self, sort_direction="asc" if self.sort_desc else "desc")


def cap_bounds(available: Optional[int] = None) -> Tuple[int, int]:
    """Slider bounds for the result cap given how many entries currently match.

    The upper bound never drops below the default cap, so the slider always
    has a range to move in even when only a handful of entries match.
    """
    if available is None:
        return TOP_N_MIN, TOP_N_MAX
    return TOP_N_MIN, min(TOP_N_MAX, max(DEFAULT_TOP_N, int(available) or DEFAULT_TOP_N))


def _optional_choice(value: object, sentinel: str) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    if not s or s == sentinel:
        return None
    return s


def _as_name_set(values: Optional[Iterable[object]]) -> FrozenSet[str]:
    if not values:
        return frozenset()
    out = set()
    for v in values:
        if v is None:
            continue
        s = str(v).strip()
        if s:
            out.add(s)
    return frozenset(out)


def normalize_selection(raw: dict) -> SelectionState:
    """Request payload -> SelectionState. `top_n` is clamped to 1..TOP_N_MAX, not to the slider bounds."""
    search = raw.get("search")
    search = "" if search is None else str(search)

    filter_column = _optional_choice(raw.get("filter_column"), NO_FILTER)
    filter_value = _optional_choice(raw.get("filter_value"), ALL_VALUES) if filter_column else None

    if "sort_direction" in raw and raw.get("sort_direction") is not None:
        sort_direction: SortDirection = "asc" if str(raw["sort_direction"]).lower() == "asc" else "desc"
    else:
        sort_direction = "desc" if bool(raw.get("sort_desc", True)) else "asc"

    top_n = raw.get("top_n", DEFAULT_TOP_N)
    try:
        top_n = int(top_n)
    except Exception:
        top_n = DEFAULT_TOP_N
    top_n = max(1, min(TOP_N_MAX, top_n))

    return SelectionState(
        search=search,
        filter_column=filter_column,
        filter_value=filter_value,
        hidden=_as_name_set(raw.get("hidden")),
        sort_direction=sort_direction,
        top_n=top_n,
    )
