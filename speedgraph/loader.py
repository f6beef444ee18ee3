from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import httpx

from speedgraph import config
from speedgraph.records import ParsedTable, parse_csv
from speedgraph.roles import ColumnRoles, infer_column_roles

logger = logging.getLogger(__name__)


class LoadFailure(Exception):
    """Raised when the CSV source cannot be fetched or read."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source
        self.message = message


@dataclass(frozen=True)
class Dataset:
    source: str
    table: ParsedTable = field(default_factory=ParsedTable)
    roles: ColumnRoles = field(default_factory=ColumnRoles)

    @property
    def headers(self):
        return self.table.headers

    @property
    def records(self):
        return self.table.records


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _fetch_url(source: str, client: Optional[httpx.Client]) -> str:
    headers = {"Cache-Control": "no-store"}
    try:
        if client is not None:
            res = client.get(source, headers=headers)
        else:
            with httpx.Client(timeout=config.HTTP_TIMEOUT_SECONDS, follow_redirects=True) as c:
                res = c.get(source, headers=headers)
    except httpx.HTTPError as exc:
        raise LoadFailure(source, f"Failed to fetch {source}: {exc}") from exc
    if not res.is_success:
        raise LoadFailure(source, f"Failed to fetch {source} (HTTP {res.status_code})")
    return res.text.lstrip("\ufeff")


def _read_path(source: str) -> str:
    path = Path(source)
    if not path.is_file():
        raise LoadFailure(source, f"CSV file not found: {source}")
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadFailure(source, f"Failed to read {source}: {exc}") from exc


def read_csv_source(source: str, *, client: Optional[httpx.Client] = None) -> str:
    """Return the raw CSV text behind ``source``. Read fresh on every call, never retried."""
    if is_url(source):
        return _fetch_url(source, client)
    return _read_path(source)


def load_dataset(source: Optional[str] = None, *, client: Optional[httpx.Client] = None) -> Dataset:
    source = source or config.csv_source()
    try:
        text = read_csv_source(source, client=client)
    except LoadFailure as exc:
        logger.warning("CSV load failed: %s", exc.message)
        raise
    table = parse_csv(text)
    roles = infer_column_roles(table.headers, table.records)
    logger.info(
        "Loaded %s: %d columns, %d records (name=%r value=%r group=%r)",
        source,
        len(table.headers),
        len(table.records),
        roles.name_column,
        roles.value_column,
        roles.group_column,
    )
    return Dataset(source=source, table=table, roles=roles)
