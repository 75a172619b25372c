#!/usr/bin/env python3
"""
highlight.py
------------
Wrap query matches in highlight markers.

The query is matched literally (regex metacharacters are escaped) and
case-insensitively; the matched text keeps its original casing.

Usage:
    highlight_text("Yabukita seedling", "yabu")
    # '<mark>Yabu</mark>kita seedling'
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import List, Optional

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"


def highlight_text(
    text: str,
    query: Optional[str],
    open_tag: str = MARK_OPEN,
    close_tag: str = MARK_CLOSE,
) -> str:
    """
    Wrap every occurrence of ``query`` in ``text`` with the given tags.

    Args:
        text: Text to annotate
        query: Literal search string; blank leaves the text unchanged
        open_tag: Marker inserted before each match
        close_tag: Marker inserted after each match

    Returns:
        Annotated text
    """
    if not query or not query.strip():
        return text

    pattern = re.compile(re.escape(query.strip()), re.IGNORECASE)
    return pattern.sub(lambda match: f"{open_tag}{match.group(0)}{close_tag}", text)


def extract_highlights(
    annotated: str, open_tag: str = MARK_OPEN, close_tag: str = MARK_CLOSE
) -> List[str]:
    """Return the wrapped substrings of an annotated text, in order."""
    pattern = re.compile(f"{re.escape(open_tag)}(.*?){re.escape(close_tag)}", re.DOTALL)
    return pattern.findall(annotated)


def strip_highlights(
    annotated: str, open_tag: str = MARK_OPEN, close_tag: str = MARK_CLOSE
) -> str:
    """Remove highlight markers, recovering the original text."""
    return annotated.replace(open_tag, "").replace(close_tag, "")
