from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import ChartRequestModel
from speedgraph import config
from speedgraph.filters import SelectionState, normalize_selection
from speedgraph.loader import Dataset, LoadFailure, load_dataset
from speedgraph.roles import ColumnRoles
from speedgraph.view import compute_chart_view, compute_filter_values, compute_meta, export_matching_csv


app = FastAPI(title="Speedgraph API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _selection_from_model(model: ChartRequestModel, dataset: Dataset) -> Tuple[SelectionState, ColumnRoles]:
    raw = model.model_dump()
    roles = dataset.roles.with_overrides(
        name_column=raw.pop("name_column", None),
        value_column=raw.pop("value_column", None),
        group_column=raw.pop("group_column", None),
    )
    return normalize_selection(raw), roles


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _load_failure(exc: LoadFailure) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"error": exc.message, "type": type(exc).__name__, "source": exc.source},
    )


def _server_error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/columns")
def meta_columns():
    try:
        return _json(compute_meta(load_dataset(config.csv_source())))
    except LoadFailure as exc:
        return _load_failure(exc)
    except Exception as exc:
        logger.exception("meta_columns failed")
        return _server_error(exc)


@app.get("/meta/filter-values")
def meta_filter_values(column: Optional[str] = Query(default=None)):
    try:
        dataset = load_dataset(config.csv_source())
        return _json(compute_filter_values(dataset, column))
    except LoadFailure as exc:
        return _load_failure(exc)
    except Exception as exc:
        logger.exception("meta_filter_values failed")
        return _server_error(exc)


@app.post("/chart")
def chart(request: ChartRequestModel):
    try:
        dataset = load_dataset(config.csv_source())
        state, roles = _selection_from_model(request, dataset)
        return _json(compute_chart_view(dataset, state, roles))
    except LoadFailure as exc:
        return _load_failure(exc)
    except Exception as exc:
        logger.exception("chart failed")
        return _server_error(exc)


@app.post("/export")
def export(request: ChartRequestModel):
    try:
        dataset = load_dataset(config.csv_source())
    except LoadFailure as exc:
        return _load_failure(exc)
    state, roles = _selection_from_model(request, dataset)
    csv_text = export_matching_csv(dataset, state, roles)
    return Response(
        content=csv_text.encode("utf-8"),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=matching.csv"},
    )
