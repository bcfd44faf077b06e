"""logz — sortable HTML tables for diagnostic web pages."""

__all__ = [
    "__version__",
    "start_html_table",
    "end_html_table",
    "html_table",
    "wrappable",
    "write_table_header",
    "write_table_row",
    "open_table_body",
    "close_table_body",
    "RowLevel",
    "LatencyThresholds",
    "level_for_duration",
]
__version__ = "0.1.0"

from logz.policy import (  # noqa: E402, F401
    LatencyThresholds,
    RowLevel,
    level_for_duration,
)
from logz.tables import (  # noqa: E402, F401
    close_table_body,
    end_html_table,
    html_table,
    open_table_body,
    start_html_table,
    write_table_header,
    write_table_row,
    wrappable,
)
