from __future__ import annotations

from typing import Any, Dict, List, Sequence

import altair as alt
import pandas as pd

from speedgraph.colors import get_color

alt.data_transformers.disable_max_rows()

# Name of the click selection on the bar chart; the UI reads it back to hide bars.
CLICK_SELECTION = "picked"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def chart_source(shown: Sequence[Any]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"name": d.name, "value": d.value, "group": d.group, "color": get_color(d.group, idx)}
            for idx, d in enumerate(shown)
        ],
        columns=["name", "value", "group", "color"],
    )


def clicked_names(selected: Any) -> List[str]:
    """Names carried by a point selection value, e.g. ``[{"name": "Cheetah"}]``."""
    if not selected:
        return []
    if isinstance(selected, dict):
        selected = [selected]
    out: List[str] = []
    for point in selected:
        if not isinstance(point, dict):
            continue
        name = str(point.get("name") or "").strip()
        if name and name not in out:
            out.append(name)
    return out


def build_bar_chart(shown: Sequence[Any], value_label: str = "Value") -> alt.Chart:
    source = chart_source(shown)
    hover = alt.selection_point(fields=["name"], on="mouseover", empty="all")
    click = alt.selection_point(name=CLICK_SELECTION, fields=["name"], on="click", empty=False)
    return (
        alt.Chart(source)
        .mark_bar(size=26, cornerRadiusTopLeft=10, cornerRadiusTopRight=10, cursor="pointer")
        .encode(
            x=alt.X(
                "name:N",
                title=None,
                sort=None,
                axis=alt.Axis(labelAngle=-30, labelLimit=90, grid=False),
            ),
            y=alt.Y("value:Q", title=value_label, axis=alt.Axis(gridDash=[3, 3], domain=False, ticks=False)),
            color=alt.Color("color:N", scale=None, legend=None),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.7)),
            tooltip=[
                alt.Tooltip("name:N", title="Name"),
                alt.Tooltip("value:Q", title="Value"),
                alt.Tooltip("group:N", title="Type"),
            ],
        )
        .add_params(hover, click)
    )
