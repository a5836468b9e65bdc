"""Parse table-row markup fragments into plain cell text.

The backend returns ``<tr><th>..</th></tr>`` for the header and a sequence of
``<tr><td>..</td></tr>`` for the body. Tk cannot show markup, so the window
turns each fragment into rows of strings before filling its Treeview.
"""
from __future__ import annotations

from html.parser import HTMLParser
from typing import List, Optional


class _RowCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.rows: List[List[str]] = []
        self._row: Optional[List[str]] = None
        self._cell: Optional[List[str]] = None

    def handle_starttag(self, tag, attrs):
        if tag == "tr":
            self._close_row()
            self._row = []
        elif tag in ("td", "th"):
            self._close_cell()
            if self._row is None:
                self._row = []
            self._cell = []

    def handle_endtag(self, tag):
        if tag in ("td", "th"):
            self._close_cell()
        elif tag == "tr":
            self._close_row()

    def handle_data(self, data):
        if self._cell is not None:
            self._cell.append(data)

    def close(self):
        super().close()
        self._close_row()

    def _close_cell(self) -> None:
        if self._cell is not None and self._row is not None:
            self._row.append(" ".join("".join(self._cell).split()))
        self._cell = None

    def _close_row(self) -> None:
        self._close_cell()
        if self._row is not None:
            self.rows.append(self._row)
        self._row = None


def parse_rows(markup: str) -> List[List[str]]:
    """Return the cell texts of every ``<tr>`` in ``markup`` (empty -> [])."""
    if not markup or not markup.strip():
        return []
    collector = _RowCollector()
    collector.feed(markup)
    collector.close()
    return collector.rows


def parse_header(markup: str) -> List[str]:
    """Return the column titles of the first header row."""
    rows = parse_rows(markup)
    return rows[0] if rows else []
