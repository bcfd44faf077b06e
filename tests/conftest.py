"""Shared fixtures: a tag-balance checker for rendered pages."""

from __future__ import annotations

from collections import Counter
from html.parser import HTMLParser

import pytest

_VOID_TAGS = {"meta", "link", "br", "hr", "img", "input"}


class TagBalance(HTMLParser):
    """Records open/close tags and whether they nest correctly."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.doctype: str | None = None
        self.stack: list[str] = []
        self.errors: list[str] = []
        self.opened: Counter[str] = Counter()
        self.closed: Counter[str] = Counter()
        self.table_classes: list[str | None] = []
        self.row_classes: list[str | None] = []
        self.cells: list[str] = []
        self._in_td = False

    def handle_decl(self, decl):
        self.doctype = decl

    def handle_starttag(self, tag, attrs):
        self.opened[tag] += 1
        attrs = dict(attrs)
        if tag == "table":
            self.table_classes.append(attrs.get("class"))
        if tag == "tr":
            self.row_classes.append(attrs.get("class"))
        if tag == "td":
            self._in_td = True
            self.cells.append("")
        if tag not in _VOID_TAGS:
            self.stack.append(tag)

    def handle_endtag(self, tag):
        self.closed[tag] += 1
        if tag == "td":
            self._in_td = False
        if self.stack and self.stack[-1] == tag:
            self.stack.pop()
        else:
            self.errors.append(f"unexpected </{tag}> with open {self.stack}")

    def handle_data(self, data):
        if self._in_td:
            self.cells[-1] += data

    @property
    def balanced(self) -> bool:
        return not self.errors and not self.stack


@pytest.fixture
def parse_html():
    """Return a callable that parses bytes/str into a ``TagBalance``."""

    def _parse(doc) -> TagBalance:
        if isinstance(doc, bytes):
            doc = doc.decode("utf-8")
        parser = TagBalance()
        parser.feed(doc)
        parser.close()
        return parser

    return _parse
