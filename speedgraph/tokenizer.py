from __future__ import annotations

from typing import List

QUOTE = '"'
DELIMITER = ","


def parse_csv_rows(text: str) -> List[List[str]]:
    """Split CSV text into rows of raw string cells.

    Quoted fields keep commas and line breaks literally and a doubled quote is a
    literal quote. Rows end at ``\\n``, ``\\r\\n`` or a bare ``\\r`` outside
    quotes. Blank physical lines are dropped. An unterminated quote swallows the
    rest of the input instead of raising.
    """
    rows: List[List[str]] = []
    row: List[str] = []
    cell: List[str] = []
    in_quotes = False

    def push_cell() -> None:
        row.append("".join(cell))
        cell.clear()

    def push_row() -> None:
        nonlocal row
        if len(row) == 1 and not row[0].strip():
            row = []
            return
        rows.append(row)
        row = []

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if in_quotes and ch == QUOTE and nxt == QUOTE:
            cell.append(QUOTE)
            i += 2
            continue
        if ch == QUOTE:
            in_quotes = not in_quotes
            i += 1
            continue
        if not in_quotes and ch == DELIMITER:
            push_cell()
            i += 1
            continue
        if not in_quotes and ch in "\r\n":
            # \r\n is a single terminator
            i += 2 if ch == "\r" and nxt == "\n" else 1
            push_cell()
            push_row()
            continue
        cell.append(ch)
        i += 1

    push_cell()
    push_row()
    return rows
