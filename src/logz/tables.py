"""Sortable HTML tables for diagnostic pages.

Debug and status pages (query logs, schema caches, transaction logs) render
their entries as a ``<table class="gridtable">``.  The frame around the rows
is fixed markup: :func:`start_html_table` opens the document and the table,
:func:`end_html_table` closes both and appends a small jQuery script that
makes every column sortable by clicking its header.

Typical use from a page renderer::

    with html_table(sink):
        write_table_header(sink, ["Query", "Duration"])
        open_table_body(sink)
        for entry in entries:
            write_table_row(sink, [entry.sql, entry.duration], level=entry.level, wrap=True)
        close_table_body(sink)

The footer is written on every exit path, so a renderer that fails halfway
still leaves a well-formed document behind.

Writes are best-effort: a sink that raises :class:`OSError` (typically a
client that went away) is logged and otherwise ignored.
"""

from __future__ import annotations

import html as html_mod
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional, Protocol, Union

from logz.policy import RowLevel

logger = logging.getLogger(__name__)

ZERO_WIDTH_SPACE = "\u200b"

# Characters after which ``wrappable`` allows a line break.
WRAP_AFTER = frozenset(",)")


class Sink(Protocol):
    """Anything that accepts the bytes of an HTTP response body."""

    def write(self, data: bytes) -> object: ...


# ── frame markup ──────────────────────────────────────────────────────
# Both literals are emitted byte-for-byte; client tooling keys on the
# ``gridtable`` class and the ``ascending``/``descending`` markers.

TABLE_PREAMBLE = """
		<!DOCTYPE html>
		<html>
		<head>
		<style type="text/css">
		table.gridtable {
			font-family: verdana,arial,sans-serif;
			font-size:11px;
			border-width: 1px;
			border-collapse: collapse;
                        table-layout:fixed;
                        overflow: hidden;
		}
		table.gridtable th {
			border-width: 1px;
			padding: 8px;
			border-style: solid;
			background-color: #dedede;
			white-space: nowrap;
		}
		table.gridtable tr.low {
			background-color: #f0f0f0;
		}
		table.gridtable tr.medium {
			background-color: #ffcc00;
		}
		table.gridtable tr.high {
			background-color: #ff3300;
		}
                table.gridtable tr.error {
			background-color: #00ddff;
                }
		table.gridtable td {
			border-width: 1px;
			padding: 4px;
			border-style: solid;
		}
                table.gridtable th {
                  padding-left: 2em;
                  padding-right: 2em;
                }

                table.gridtable th.descending:before {
                  content: "▲";
                  float: left;
                }
                table.gridtable th.ascending:before {
                  content: "▼";
                  float: left;
                }
		</style>
		</head>
		<body>
		<table class="gridtable">
	"""

TABLE_FOOTER = """
</table>
<script src="http://ajax.googleapis.com/ajax/libs/jquery/2.1.0/jquery.min.js"></script>

<script type="text/javascript">
$.fn.sortableByColumn = function() {
  var body = this.find('tbody');
  var header = this.find('thead');
  var contents = function(el, i) {
    var data = $(el).children('td').eq(i).text().toLowerCase();
    var asNumber = parseFloat(data);
    return data == asNumber ? asNumber : data;
  };

  this.find('thead tr th').each(function(index, th) {
    $(th).wrapInner('<div width="5em;"></div>');

    var direction = -1;
    $(th).click(function() {
      direction *= -1;

      header.find('th').removeClass('ascending descending');
      $(th).addClass(direction > 0? 'ascending' : 'descending');
      var rows = body.find('tr').detach();
      rows.sort(function(left, right) {
        var cl = contents(left, index);
        var cr = contents(right, index);
        if (cl === cr) {
          return 0
        } else {
          return contents(left, index) > contents(right, index)? direction : -direction;
        }
      });

      body.append(rows);
    });
  });
}

$(function() {
  $('table').sortableByColumn();
});
</script>
</body>
</html>"""

_PREAMBLE_BYTES = TABLE_PREAMBLE.encode("utf-8")
_FOOTER_BYTES = TABLE_FOOTER.encode("utf-8")


def _write(sink: Sink, data: bytes) -> None:
    try:
        sink.write(data)
    except OSError as exc:
        logger.debug("dropping %d bytes, sink write failed: %s", len(data), exc)


# ════════════════════════════════════════════════════════════════════
# Frame
# ════════════════════════════════════════════════════════════════════


def start_html_table(sink: Sink) -> None:
    """Write the document preamble and open ``<table class="gridtable">``.

    The document is left open inside the table; pair every call with
    :func:`end_html_table`, or use :func:`html_table`.
    """
    _write(sink, _PREAMBLE_BYTES)


def end_html_table(sink: Sink) -> None:
    """Close the table, append the column-sorting script, close the document."""
    _write(sink, _FOOTER_BYTES)


@contextmanager
def html_table(sink: Sink) -> Iterator[Sink]:
    """Frame everything written inside the block as a sortable gridtable.

    The footer is written even when the block returns early or raises; the
    exception itself is not suppressed.
    """
    start_html_table(sink)
    try:
        yield sink
    finally:
        end_html_table(sink)


# ════════════════════════════════════════════════════════════════════
# Rows
# ════════════════════════════════════════════════════════════════════


def wrappable(text: str) -> str:
    """Insert zero-width spaces after ``,`` and ``)`` so browsers can wrap.

    Long SQL statements and bind-variable lists otherwise stretch a table
    cell to a single line.  Every other character, including zero-width
    spaces already present, is passed through unchanged; the output is
    exactly one character longer per ``,`` or ``)`` in *text*.
    """
    out: list[str] = []
    for ch in text:
        out.append(ch)
        if ch in WRAP_AFTER:
            out.append(ZERO_WIDTH_SPACE)
    return "".join(out)


def _cell_text(value: object, *, wrap: bool) -> str:
    text = "" if value is None else str(value)
    if wrap:
        text = wrappable(text)
    return html_mod.escape(text)


def write_table_header(sink: Sink, columns: Iterable[object]) -> None:
    """Write the ``<thead>`` row; the sort script attaches to these cells."""
    cells = "".join(f"<th>{_cell_text(c, wrap=False)}</th>" for c in columns)
    _write(sink, f"<thead>\n<tr>{cells}</tr>\n</thead>\n".encode("utf-8"))


def open_table_body(sink: Sink) -> None:
    _write(sink, b"<tbody>\n")


def close_table_body(sink: Sink) -> None:
    _write(sink, b"</tbody>\n")


def write_table_row(
    sink: Sink,
    cells: Iterable[object],
    *,
    level: Optional[Union[RowLevel, str]] = None,
    wrap: bool = False,
) -> None:
    """Write one body row.

    Parameters
    ----------
    sink:
        Response body to write into.
    cells:
        Cell values; each is converted with ``str`` and HTML-escaped.
    level:
        Optional row class (``low``, ``medium``, ``high`` or ``error``)
        styled by the preamble CSS.
    wrap:
        Pass each cell through :func:`wrappable` before escaping.

    Raises
    ------
    ValueError
        If *level* is not a known row level.
    """
    if level is None:
        open_tag = "<tr>"
    else:
        open_tag = f'<tr class="{RowLevel(level).value}">'
    body = "".join(f"<td>{_cell_text(c, wrap=wrap)}</td>" for c in cells)
    _write(sink, f"{open_tag}{body}</tr>\n".encode("utf-8"))
