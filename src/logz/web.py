"""
HTTP adapter
============
Serve gridtable pages from FastAPI/Starlette handlers.

Example::

    @router.get("/querylogz", response_class=HTMLResponse)
    async def querylogz():
        def rows(sink):
            write_table_header(sink, ["Query", "Time"])
            ...
        return html_table_response(rows)
"""
from __future__ import annotations

import logging
from typing import Callable

from fastapi.responses import HTMLResponse

from logz.tables import Sink, html_table

logger = logging.getLogger(__name__)

RowWriter = Callable[[Sink], None]


class BufferSink:
    """In-memory response body; one per request."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def write(self, data: bytes) -> int:
        self._buf += data
        return len(data)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)


def render_table_page(write_rows: RowWriter) -> bytes:
    """Render a complete page; *write_rows* fills in the table rows.

    If *write_rows* raises, the footer is still written and the exception
    propagates.
    """
    sink = BufferSink()
    with html_table(sink):
        write_rows(sink)
    return sink.getvalue()


def html_table_response(write_rows: RowWriter, *, status_code: int = 200) -> HTMLResponse:
    """Render a page into an ``HTMLResponse``.

    A failing row writer yields a 500 whose body is the rows written so far,
    framed as a complete document.
    """
    sink = BufferSink()
    try:
        with html_table(sink):
            write_rows(sink)
    except Exception:
        logger.exception("rendering table rows failed after %d bytes", len(sink))
        status_code = 500
    return HTMLResponse(content=sink.getvalue(), status_code=status_code)
