from __future__ import annotations

from bookery.app.views.markup_table import parse_header, parse_rows


def test_header_titles_in_order():
    markup = "<tr>\n    <th>Name</th>\n    <th>Born</th>\n</tr>"
    assert parse_header(markup) == ["Name", "Born"]


def test_body_rows_and_entities():
    markup = (
        "<tr>\n    <td>Dom   Casmurro</td>\n    <td>Garnier &amp; Cia</td>\n</tr>\n"
        "<tr>\n    <td>&lt;b&gt;</td>\n    <td></td>\n</tr>\n"
    )
    assert parse_rows(markup) == [
        ["Dom Casmurro", "Garnier & Cia"],
        ["<b>", ""],
    ]


def test_empty_markup_has_no_rows():
    assert parse_rows("") == []
    assert parse_rows("   \n") == []
    assert parse_header("") == []


def test_unclosed_cells_are_still_collected():
    assert parse_rows("<tr><td>a<td>b<tr><td>c") == [["a", "b"], ["c"]]
