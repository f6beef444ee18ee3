"""
speedgraph configuration: data source and API settings.
"""
import os
from pathlib import Path
from typing import List

# ---------------------------------------------------------------------------
# Data source: a filesystem path or an http(s) URL.
# Override with SPEEDGRAPH_CSV_SOURCE.
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CSV_SOURCE = str(DATA_DIR / "sample_animals.csv")

HTTP_TIMEOUT_SECONDS = 10.0

# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


def csv_source() -> str:
    return os.environ.get("SPEEDGRAPH_CSV_SOURCE", "").strip() or DEFAULT_CSV_SOURCE


def cors_origins() -> List[str]:
    raw = os.environ.get("SPEEDGRAPH_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]
