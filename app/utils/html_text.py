"""
Text-from-markup helpers for message payloads.

Comment html is sanitized with bleach with every tag stripped, so only the
text content of the markup (including custom tags such as mentions) is kept.
"""

from __future__ import annotations

import html
import re

import bleach

_LINE_BREAK_TAG = re.compile(r"<br\s*/?>", re.IGNORECASE)
_LINE_BREAK = re.compile(r"[\n\r\u2028\u2029]")
_ANCHOR_HREF = re.compile(r'<a\s+(?:[^>]*?\s+)?href="([^"]*)"', re.IGNORECASE)


def parse_html_to_text(markup: str) -> str:
    """Strip every tag from ``markup`` and unescape entities; ``<br>`` becomes a newline."""
    if not markup:
        return ""
    with_breaks = _LINE_BREAK_TAG.sub("\n", markup)
    stripped = bleach.clean(with_breaks, tags=set(), attributes={}, strip=True)
    return html.unescape(stripped)


def line_breaks_to_spaces(text: str) -> str:
    return _LINE_BREAK.sub(" ", text)


def extract_anchor_hrefs(markup: str) -> list[str]:
    """Return the href of every anchor in ``markup`` in document order."""
    if not markup:
        return []
    return _ANCHOR_HREF.findall(markup)
