"""HTML → plain text for retrieved source pages."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

# Elements whose text is never user-facing content
STRIP_TAGS = ("script", "style", "noscript", "template")

_WHITESPACE = re.compile(r"\s+")


def extract_text(html: str) -> str:
    """Return the readable text of a page.

    Script and style content is dropped, the <main> element is preferred over
    <body>, and all whitespace runs collapse to a single space.
    """
    soup = BeautifulSoup(html, "lxml")

    for tag_name in STRIP_TAGS:
        for tag in soup.find_all(tag_name):
            tag.decompose()

    root = soup.find("main")
    if root is None:
        root = soup.find("body")
    if root is None:
        return ""

    text = root.get_text(separator=" ")
    return _WHITESPACE.sub(" ", text).strip()
