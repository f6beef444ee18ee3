from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from speedgraph.tokenizer import parse_csv_rows

Cell = Optional[Union[str, float]]
Record = Dict[str, Cell]


@dataclass(frozen=True)
class ParsedTable:
    headers: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)


def cell_text(value: Cell) -> str:
    if value is None:
        return ""
    return str(value)


def _is_blank_row(row: Sequence[str]) -> bool:
    return all(not (c or "").strip() for c in row)


def normalize_rows(rows: Sequence[Sequence[str]]) -> ParsedTable:
    """Turn tokenized rows into header-keyed records.

    The first row holds the headers. Blank header names are dropped but every
    remaining header still reads the cell at its original column index.
    """
    if not rows:
        return ParsedTable()

    columns = [(idx, h.strip()) for idx, h in enumerate(rows[0]) if h.strip()]
    headers = [h for _, h in columns]

    records: List[Record] = []
    for row in rows[1:]:
        if _is_blank_row(row):
            continue
        rec: Record = {}
        for idx, header in columns:
            raw = row[idx] if idx < len(row) else None
            value = raw.strip() if raw is not None else ""
            rec[header] = value or None
        records.append(rec)
    return ParsedTable(headers=headers, records=records)


def parse_csv(text: str) -> ParsedTable:
    return normalize_rows(parse_csv_rows(text))


def records_frame(table: ParsedTable) -> pd.DataFrame:
    columns = list(dict.fromkeys(table.headers))
    if not table.records:
        return pd.DataFrame(columns=columns, dtype=object)
    return pd.DataFrame.from_records(table.records, columns=columns).astype(object)
