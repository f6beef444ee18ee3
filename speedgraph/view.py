from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

import pandas as pd

from speedgraph.charts import build_bar_chart, to_vega_spec
from speedgraph.colors import get_color
from speedgraph.filters import SelectionState, cap_bounds
from speedgraph.loader import Dataset
from speedgraph.pipeline import matching_records, select_chart_data
from speedgraph.records import ParsedTable, records_frame
from speedgraph.roles import ColumnRoles, filter_values, filterable_headers, nice_label, numeric_headers


def _selection_dict(state: SelectionState) -> Dict[str, Any]:
    out = asdict(state)
    out["hidden"] = sorted(state.hidden)
    return out


def compute_meta(dataset: Dataset) -> Dict[str, Any]:
    headers = dataset.headers
    return {
        "source": dataset.source,
        "headers": list(headers),
        "labels": {h: nice_label(h) for h in headers},
        "numeric_headers": numeric_headers(headers, dataset.records),
        "filterable_headers": filterable_headers(headers, dataset.records),
        "roles": asdict(dataset.roles),
        "record_count": len(dataset.records),
    }


def compute_filter_values(dataset: Dataset, column: Optional[str]) -> Dict[str, Any]:
    return {"column": column, "values": filter_values(dataset.records, column)}


def compute_chart_view(dataset: Dataset, state: SelectionState, roles: Optional[ColumnRoles] = None) -> Dict[str, Any]:
    roles = roles or dataset.roles
    result = select_chart_data(dataset.records, roles, state)

    shown = [
        {"name": d.name, "value": d.value, "group": d.group, "color": get_color(d.group, idx)}
        for idx, d in enumerate(result.shown)
    ]
    charts: Dict[str, Any] = {}
    if shown:
        value_label = nice_label(roles.value_column or "Value")
        charts["bars"] = to_vega_spec(build_bar_chart(result.shown, value_label))

    return {
        "selection": _selection_dict(state),
        "roles": asdict(roles),
        "shown": shown,
        "matching": result.matching,
        "empty": result.empty,
        "hidden_count": len(state.hidden),
        "legend": [asdict(item) for item in result.legend],
        "cap_bounds": list(cap_bounds(result.matching)),
        "charts": charts,
    }


def export_matching_csv(dataset: Dataset, state: SelectionState, roles: Optional[ColumnRoles] = None) -> str:
    roles = roles or dataset.roles
    rows = matching_records(dataset.records, roles, state)
    frame: pd.DataFrame = records_frame(ParsedTable(headers=dataset.headers, records=rows))
    return frame.to_csv(index=False)
