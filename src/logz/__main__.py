"""CLI entry-point for logz.

Usage:
    python -m logz render <rows.json> [--output FILE] [--wrap] [-v]
    python -m logz wrap <text>
"""

from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from logz import __version__
from logz.config import Settings, settings as default_settings
from logz.exit_codes import ExitCode
from logz.policy import thresholds_from_settings
from logz.schemas import TableDocument
from logz.tables import (
    Sink,
    close_table_body,
    html_table,
    open_table_body,
    write_table_header,
    write_table_row,
    wrappable,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="logz",
        description="Sortable HTML tables for diagnostic pages.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging on stderr.",
    )
    sub = p.add_subparsers(dest="command")

    # ── render subcommand ───────────────────────────────────────────
    render_p = sub.add_parser(
        "render",
        help="Render a JSON table document as a sortable HTML page.",
    )
    render_p.add_argument(
        "render_input",
        type=Path,
        help="JSON file with 'columns' and 'rows'.",
    )
    render_p.add_argument(
        "--output",
        dest="render_output",
        type=Path,
        default=None,
        help="Write the page to FILE instead of stdout.",
    )
    render_p.add_argument(
        "--wrap",
        dest="render_wrap",
        action="store_true",
        help="Allow long cells to wrap after ',' and ')'.",
    )

    # ── wrap subcommand ─────────────────────────────────────────────
    wrap_p = sub.add_parser(
        "wrap",
        help="Print TEXT with zero-width spaces after ',' and ')'.",
    )
    wrap_p.add_argument("wrap_text", metavar="text")

    return p


def _write_document(sink: Sink, doc: TableDocument, *, wrap: bool, cfg: Settings) -> None:
    thresholds = thresholds_from_settings(cfg)
    columns = doc.columns or cfg.DEFAULT_COLUMNS
    with html_table(sink):
        if columns:
            write_table_header(sink, columns)
        open_table_body(sink)
        for row in doc.rows:
            write_table_row(sink, row.cells, level=row.resolve_level(thresholds), wrap=wrap)
        close_table_body(sink)


def _write_stdout(data: bytes) -> None:
    """Write raw UTF-8 bytes, bypassing the text layer and its encoding."""
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def _log_level(args: argparse.Namespace, cfg: Settings) -> int | None:
    """Resolve the logging level; None when LOG_LEVEL names no known level."""
    if args.verbose:
        return logging.DEBUG
    level = logging.getLevelName(cfg.LOG_LEVEL.strip().upper())
    return level if isinstance(level, int) else None


def _handle_render(args: argparse.Namespace, cfg: Settings) -> int:
    """Dispatch ``logz render <rows.json>``."""
    source: Path = args.render_input
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"error: cannot read {source}: {exc}", file=sys.stderr)
        return ExitCode.ERROR

    try:
        doc = TableDocument.model_validate_json(raw)
    except ValidationError as exc:
        print(f"error: invalid table document {source}:\n{exc}", file=sys.stderr)
        return ExitCode.VIOLATION
    logger.debug("rendering %d rows from %s", len(doc.rows), source)

    page = io.BytesIO()
    _write_document(page, doc, wrap=args.render_wrap, cfg=cfg)

    if args.render_output:
        out: Path = args.render_output
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_bytes(page.getvalue())
        except OSError as exc:
            print(f"error: cannot write {out}: {exc}", file=sys.stderr)
            return ExitCode.ERROR
        print(f"Page written to {out}", file=sys.stderr)
    else:
        try:
            _write_stdout(page.getvalue())
        except OSError as exc:
            print(f"error: cannot write page to stdout: {exc}", file=sys.stderr)
            return ExitCode.ERROR

    return ExitCode.SUCCESS


def main(argv: list[str] | None = None, *, cfg: Settings | None = None) -> int:
    """Entry-point — returns an exit code."""
    cfg = cfg or default_settings
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = _log_level(args, cfg)
    if level is None:
        print(f"error: unknown log level: {cfg.LOG_LEVEL!r}", file=sys.stderr)
        return ExitCode.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "render":
        return _handle_render(args, cfg)

    if args.command == "wrap":
        try:
            _write_stdout((wrappable(args.wrap_text) + "\n").encode("utf-8"))
        except OSError as exc:
            print(f"error: cannot write to stdout: {exc}", file=sys.stderr)
            return ExitCode.ERROR
        return ExitCode.SUCCESS

    parser.print_help(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
