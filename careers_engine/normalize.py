"""Normalization & text cleanup.

This module contains the deterministic cleanup shared by the site adapters:
- whitespace collapsing and safe selector text lookups
- location trimming (country suffixes, first comma part)
- structure-aware description text (bullets for list items, breaks for blocks)
- repair of the most common UTF-8-read-as-latin-1 artefacts

Keeping these helpers centralized makes each adapter a thin selector map.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

from bs4 import BeautifulSoup, Comment, NavigableString, Tag


WS_RE = re.compile(r"\s+")
DIGITS_RE = re.compile(r"[^0-9]")

BLOCK_TAGS = {"p", "div", "br", "ul", "ol", "h1", "h2", "h3", "h4", "h5", "h6", "tr"}
SKIP_TAGS = {"script", "style", "noscript"}

# Mis-decoded punctuation seen on career pages served with a wrong charset.
MOJIBAKE_FIXES = [
    ("â€™", "'"),
    ("â€˜", "'"),
    ("â€œ", '"'),
    ("â€\x9d", '"'),
    ("â€¢", ""),
    ("â€“", ""),
    ("Â ", " "),
    ("Â", ""),
]


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def collapse_ws(text: Optional[str]) -> str:
    """Collapse every whitespace run to one space and trim."""
    return WS_RE.sub(" ", text or "").strip()


def text_of(node: Optional[Tag], selector: Optional[str] = None) -> str:
    """Trimmed text of ``node`` (or of its first ``selector`` match), '' if absent."""
    if node is None:
        return ""
    if selector:
        node = node.select_one(selector)
        if node is None:
            return ""
    return node.get_text().strip()


def attr_of(node: Optional[Tag], selector: str, attr: str) -> str:
    """Attribute value of the first ``selector`` match, '' if absent."""
    if node is None:
        return ""
    found = node.select_one(selector)
    if found is None:
        return ""
    value = found.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def strip_suffixes(text: str, suffixes: Iterable[str]) -> str:
    """Remove every occurrence of the given suffix strings (e.g. ', India')."""
    for suffix in suffixes:
        text = text.replace(suffix, "")
    return text.strip()


def first_part(text: str, sep: str = ",") -> str:
    """First ``sep``-separated part of ``text``, trimmed."""
    if not text:
        return ""
    return text.split(sep)[0].strip()


def split_title_function(text: str, sep: str = " - ") -> Tuple[str, str]:
    """Split 'Title - Function' headings; function is '' when absent."""
    parts = (text or "").split(sep)
    title = parts[0].strip()
    function = parts[1].strip() if len(parts) > 1 else ""
    return title, function


def parse_int(text: Optional[str]) -> Optional[int]:
    """Integer made of the digits in ``text``, or None when there are none."""
    digits = DIGITS_RE.sub("", text or "")
    return int(digits) if digits else None


def fix_mojibake(text: str) -> str:
    for bad, good in MOJIBAKE_FIXES:
        text = text.replace(bad, good)
    return text


def formatted_text(node: Optional[Tag]) -> str:
    """Flatten a description container into readable multi-line text.

    List items become '• ' bullets on their own line, block elements and
    ``<br>`` start new lines, and inline whitespace is collapsed.
    """
    if node is None:
        return ""
    chunks: list = []
    _walk(node, chunks)
    lines = (collapse_ws(line) for line in "".join(chunks).split("\n"))
    return fix_mojibake("\n".join(line for line in lines if line)).strip()


def _walk(node: Tag, chunks: list) -> None:
    for child in node.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            chunks.append(str(child))
            continue
        if not isinstance(child, Tag) or child.name in SKIP_TAGS:
            continue
        if child.name == "li":
            chunks.append("\n• ")
            _walk(child, chunks)
            chunks.append("\n")
        elif child.name in BLOCK_TAGS:
            chunks.append("\n")
            _walk(child, chunks)
            chunks.append("\n")
        else:
            _walk(child, chunks)
