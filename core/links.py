"""Shareable quiz links and category titles.

A link encodes only the category; every visit starts a fresh session.
"""
from __future__ import annotations

import os
from urllib.parse import quote, unquote, urlsplit

DEFAULT_SITE_URL = os.environ.get("QUIZ_SITE_URL", "http://localhost:5173")

QUIZ_PATH_PREFIX = "/quiz/"

CATEGORY_TITLES = {
    "frontend": "Frontend",
    "fullstack": "Fullstack",
    "python": "Python",
    "java": "Java",
}


def category_title(category: str) -> str:
    """Human readable name of a category."""
    if category in CATEGORY_TITLES:
        return CATEGORY_TITLES[category]
    return category[:1].upper() + category[1:]


def quiz_title(category: str) -> str:
    return f"{category_title(category)} Developer Test"


def category_from_title(title: str) -> str:
    """Best-effort category of a quiz title: its first word, lower-cased.

    Only for results stored without an explicit category. Titles that do not
    start with the category name give a wrong answer.
    """
    words = title.strip().lower().split()
    return words[0] if words else ""


def share_link(category: str, site_url: str | None = None) -> str:
    """Build the link a candidate follows to take the quiz."""
    base = (site_url or DEFAULT_SITE_URL).rstrip("/")
    return f"{base}{QUIZ_PATH_PREFIX}{quote(category, safe='')}"


def parse_share_link(link: str) -> str:
    """Extract the category from a share link (or a bare ``/quiz/<id>`` path)."""
    path = urlsplit(link).path
    marker = path.rfind(QUIZ_PATH_PREFIX)
    if marker == -1:
        raise ValueError(f"Not a quiz link: {link!r}")
    category = unquote(path[marker + len(QUIZ_PATH_PREFIX):].strip("/"))
    if not category or "/" in category:
        raise ValueError(f"Not a quiz link: {link!r}")
    return category
