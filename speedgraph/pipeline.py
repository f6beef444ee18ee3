"""Selection pipeline: records + column roles + selection state -> ordered chart data.

Stages run in a fixed order, each one narrowing what the next one sees:

1. build one ChartDatum per record with a name and a numeric value
2. drop hidden names
3. free-text search over the name and every cell of the backing record
4. equality filter on one column
5. stable sort by value
6. truncate to the result cap

Nothing here mutates its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import pandas as pd

from speedgraph.coerce import to_number_loose
from speedgraph.colors import LegendItem, legend_items
from speedgraph.filters import ALL_VALUES, NO_FILTER, SelectionState
from speedgraph.groups import UNKNOWN, normalize_group
from speedgraph.records import Record, cell_text
from speedgraph.roles import ColumnRoles

CHART_COLUMNS = ["name", "value", "group", "record_index"]


@dataclass(frozen=True)
class ChartDatum:
    name: str
    value: float
    group: str
    record: Record = field(compare=False)


@dataclass(frozen=True)
class SelectionResult:
    shown: List[ChartDatum] = field(default_factory=list)
    matching: int = 0
    legend: List[LegendItem] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.shown


def _chart_frame(records: Sequence[Record], roles: ColumnRoles) -> pd.DataFrame:
    if not roles.name_column or not roles.value_column:
        return pd.DataFrame(columns=CHART_COLUMNS)

    rows = []
    for idx, rec in enumerate(records):
        name = cell_text(rec.get(roles.name_column)).strip()
        value = to_number_loose(rec.get(roles.value_column))
        if not name or value is None:
            continue
        group = normalize_group(rec.get(roles.group_column)) if roles.grouped else UNKNOWN
        rows.append({"name": name, "value": value, "group": group, "record_index": idx})
    return pd.DataFrame(rows, columns=CHART_COLUMNS)


def _to_data(frame: pd.DataFrame, records: Sequence[Record]) -> List[ChartDatum]:
    return [
        ChartDatum(name=str(r.name), value=float(r.value), group=str(r.group), record=records[int(r.record_index)])
        for r in frame.itertuples(index=False)
    ]


def build_chart_data(records: Sequence[Record], roles: ColumnRoles) -> List[ChartDatum]:
    return _to_data(_chart_frame(records, roles), records)


def _haystack(name: str, record: Record) -> str:
    return f"{name} {' '.join(cell_text(v) for v in record.values())}".lower()


def filter_chart_frame(frame: pd.DataFrame, records: Sequence[Record], state: SelectionState) -> pd.DataFrame:
    df = frame
    if state.hidden and not df.empty:
        df = df[~df["name"].isin(list(state.hidden))]

    if state.search.strip() and not df.empty:
        q = state.search.lower()
        mask = [q in _haystack(name, records[int(i)]) for name, i in zip(df["name"], df["record_index"])]
        df = df[mask]

    active = state.filter_column not in (None, "", NO_FILTER) and state.filter_value not in (None, ALL_VALUES)
    if active and not df.empty:
        col = state.filter_column
        mask = [cell_text(records[int(i)].get(col)).strip() == state.filter_value for i in df["record_index"]]
        df = df[mask]

    return df.sort_values("value", ascending=not state.sort_desc, kind="stable")


def select_chart_data(records: Sequence[Record], roles: ColumnRoles, state: SelectionState) -> SelectionResult:
    matched = filter_chart_frame(_chart_frame(records, roles), records, state)
    shown = _to_data(matched.head(max(int(state.top_n), 0)), records)
    return SelectionResult(shown=shown, matching=int(len(matched)), legend=legend_items(shown))


def matching_records(records: Sequence[Record], roles: ColumnRoles, state: SelectionState) -> List[Record]:
    """Backing records of every match before the result cap, in display order."""
    matched = filter_chart_frame(_chart_frame(records, roles), records, state)
    return [records[int(i)] for i in matched["record_index"]]
