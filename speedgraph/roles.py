from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from speedgraph.coerce import to_number_loose
from speedgraph.records import Record, cell_text

NO_GROUP = "__none__"

NAME_CANDIDATES = ["name", "animal", "species", "common_name", "scientific_name"]
GROUP_CANDIDATES = ["diet", "type", "trophic_level", "feeding", "category"]
VALUE_KEYWORD = "speed"
FILTER_VALUES_LIMIT = 250


@dataclass(frozen=True)
class ColumnRoles:
    name_column: str = ""
    value_column: str = ""
    group_column: str = NO_GROUP

    def with_overrides(
        self,
        *,
        name_column: Optional[str] = None,
        value_column: Optional[str] = None,
        group_column: Optional[str] = None,
    ) -> "ColumnRoles":
        """Apply user column choices; blank or missing choices keep the inferred column."""
        return replace(
            self,
            name_column=name_column or self.name_column,
            value_column=value_column or self.value_column,
            group_column=group_column or self.group_column,
        )

    @property
    def grouped(self) -> bool:
        return bool(self.group_column) and self.group_column != NO_GROUP


def pick_default_name(headers: Sequence[str]) -> str:
    for h in headers:
        if h.lower() in NAME_CANDIDATES:
            return h
    return headers[0] if headers else ""


def pick_default_value(headers: Sequence[str], records: Sequence[Record]) -> str:
    for h in headers:
        if VALUE_KEYWORD in h.lower():
            return h
    for h in headers:
        if any(to_number_loose(r.get(h)) is not None for r in records):
            return h
    return ""


def pick_default_group(headers: Sequence[str]) -> str:
    for h in headers:
        if h.lower() in GROUP_CANDIDATES:
            return h
    return NO_GROUP


def infer_column_roles(headers: Sequence[str], records: Sequence[Record]) -> ColumnRoles:
    return ColumnRoles(
        name_column=pick_default_name(headers),
        value_column=pick_default_value(headers, records),
        group_column=pick_default_group(headers),
    )


# ---------------- Selector options ----------------
def numeric_headers(headers: Sequence[str], records: Sequence[Record]) -> List[str]:
    return [h for h in headers if any(to_number_loose(r.get(h)) is not None for r in records)]


def filterable_headers(headers: Sequence[str], records: Sequence[Record]) -> List[str]:
    return [h for h in headers if any(cell_text(r.get(h)).strip() for r in records)]


def filter_values(records: Sequence[Record], column: Optional[str], limit: int = FILTER_VALUES_LIMIT) -> List[str]:
    """Distinct non-blank values of a column, sorted; scanning stops past ``limit`` values."""
    if not column or column == NO_GROUP:
        return []
    seen = set()
    for r in records:
        v = cell_text(r.get(column)).strip()
        if v:
            seen.add(v)
        if len(seen) > limit:
            break
    return sorted(seen, key=lambda s: (s.lower(), s))


def nice_label(header: str) -> str:
    s = header.replace("_", " ")
    s = re.sub(r"([a-z])([A-Z])", r"\1 \2", s)
    return s.strip()
