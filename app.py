import streamlit as st
from contextlib import contextmanager
from dataclasses import replace
from typing import List, Optional

from speedgraph.charts import CLICK_SELECTION, build_bar_chart, clicked_names
from speedgraph.colors import LegendItem
from speedgraph.filters import ALL_VALUES, DEFAULT_TOP_N, NO_FILTER, SelectionState, cap_bounds
from speedgraph.loader import LoadFailure, load_dataset
from speedgraph.pipeline import build_chart_data, select_chart_data
from speedgraph.records import records_frame
from speedgraph.roles import (
    NO_GROUP,
    filter_values,
    filterable_headers,
    nice_label,
    numeric_headers,
)


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .card-actions {font-size: 0.8rem;color: #6b7280;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 10px;margin: 6px 0;}
        .chip {display: inline-flex;align-items: center;gap: 6px;font-size: 0.8rem;color: #374151;text-transform: capitalize;}
        .swatch {display: inline-block;width: 12px;height: 12px;border-radius: 3px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str, actions: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
            <div class="card-actions">{actions or ""}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_legend(items: List[LegendItem]) -> str:
    return "".join(
        f"<span class='chip'><span class='swatch' style='background:{it.color}'></span>{it.group}</span>"
        for it in items
    )


def _index_of(options: List[str], value: str) -> Optional[int]:
    if not options:
        return None
    return options.index(value) if value in options else 0


# ---------- UI setup ----------
st.set_page_config(page_title="Animal Speed Graph", layout="wide")
inject_base_styles()
st.title("Animal Speed Graph")

if "hidden" not in st.session_state:
    st.session_state["hidden"] = frozenset()
if "chart_epoch" not in st.session_state:
    st.session_state["chart_epoch"] = 0

try:
    with st.spinner("Loading cleaned dataset…"):
        dataset = load_dataset()
except LoadFailure as exc:
    st.error("Couldn't load the cleaned dataset.")
    st.caption(exc.message)
    st.caption("Point SPEEDGRAPH_CSV_SOURCE at a CSV file path or URL.")
    st.stop()

headers = dataset.headers
records = dataset.records
value_options = numeric_headers(headers, records)
filter_options = filterable_headers(headers, records)

# ----- Sidebar: filters + column roles -----
with st.sidebar:
    st.markdown("### Filters")
    search = st.text_input("Search", "", placeholder="Search…", key="search")
    filter_column = st.selectbox(
        "Filter column",
        options=[NO_FILTER] + filter_options,
        format_func=lambda h: "No filter" if h == NO_FILTER else nice_label(h),
    )
    value_choices = [ALL_VALUES] + filter_values(records, filter_column)
    filter_value = st.selectbox(
        "Filter value",
        options=value_choices,
        format_func=lambda v: "All" if v == ALL_VALUES else v,
        disabled=filter_column == NO_FILTER,
    )

    st.markdown("---")
    st.markdown("### Columns")
    name_column = st.selectbox(
        "Name column", options=headers, index=_index_of(headers, dataset.roles.name_column), format_func=nice_label
    )
    value_column = st.selectbox(
        "Value column",
        options=value_options,
        index=_index_of(value_options, dataset.roles.value_column),
        format_func=nice_label,
    )
    group_options = [NO_GROUP] + filter_options
    group_column = st.selectbox(
        "Color by (diet/type)",
        options=group_options,
        index=_index_of(group_options, dataset.roles.group_column),
        format_func=lambda h: "No grouping" if h == NO_GROUP else nice_label(h),
    )
    sort_desc = st.toggle("Sort high → low", value=True)

roles = dataset.roles.with_overrides(name_column=name_column, value_column=value_column, group_column=group_column)

state = SelectionState(
    search=search,
    filter_column=None if filter_column == NO_FILTER else filter_column,
    filter_value=None if filter_value == ALL_VALUES else filter_value,
    hidden=st.session_state["hidden"],
    sort_direction="desc" if sort_desc else "asc",
    top_n=st.session_state.get("top_n", DEFAULT_TOP_N),
)

# Cap bounds follow the number of matches before truncation.
matching = select_chart_data(records, roles, state).matching
lo, hi = cap_bounds(matching)
with st.sidebar:
    top_n = st.slider("Bars", min_value=lo, max_value=hi, value=max(lo, min(hi, state.top_n)), step=1)
st.session_state["top_n"] = top_n
state = replace(state, top_n=top_n)

result = select_chart_data(records, roles, state)

# ----- Legend -----
if result.legend:
    st.markdown(f"<div class='chip-row'>{format_legend(result.legend)}</div>", unsafe_allow_html=True)

# ----- Chart -----
if result.empty:
    st.info("No rows match your current search/filter.")
else:
    title = f"{nice_label(roles.value_column or 'Value')} (Top {len(result.shown)})"
    with card(title, actions=f"Matching: {result.matching}"):
        chart = build_bar_chart(result.shown, nice_label(roles.value_column or "Value")).properties(height=520)
        # A fresh key per hide/restore drops the previous click selection.
        event = st.altair_chart(
            chart,
            use_container_width=True,
            on_select="rerun",
            selection_mode=CLICK_SELECTION,
            key=f"bars_{st.session_state['chart_epoch']}",
        )
        st.caption("Hover for details. Click a bar to hide it (Restore to undo). Colors are based on diet/type.")

    selection = (event or {}).get("selection") or {}
    picked = clicked_names(selection.get(CLICK_SELECTION))
    if picked:
        for name in picked:
            state = state.exclude(name)
        st.session_state["hidden"] = state.hidden
        st.session_state["chart_epoch"] += 1
        st.rerun()

# ----- Restore -----
hidden_count = len(st.session_state["hidden"])
if hidden_count and st.button(f"Restore ({hidden_count})", key="restore"):
    st.session_state["hidden"] = state.restore_all().hidden
    st.session_state["chart_epoch"] += 1
    st.rerun()

with st.expander("Source records"):
    st.caption(f"{len(build_chart_data(records, roles))} of {len(records)} records have a name and a numeric value.")
    st.dataframe(records_frame(dataset.table), hide_index=True, use_container_width=True)
