"""Splitting of rich-text article submissions into titled sections."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass

_SECTION_RE = re.compile(r"<h4[^>]*>(.*?)</h4>([\s\S]*?)(?=<h4[^>]*>|$)", re.IGNORECASE | re.DOTALL)
_ENCODED_SECTION_RE = re.compile(r"&lt;h4&gt;(.*?)&lt;/h4&gt;([\s\S]*?)(?=&lt;h4&gt;|$)", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")


@dataclass(frozen=True)
class ArticleSection:
    title: str
    content: str


def sanitize_text(value: str | None) -> str:
    """Replace single quotes the way stored bodies always have been."""
    return (value or "").replace("'", " ")


def strip_tags(value: str) -> str:
    return _TAG_RE.sub("", value).strip()


def split_sections(body: str) -> list[ArticleSection]:
    """Return one section per ``<h4>`` heading; text before the first heading is dropped."""
    matches = list(_SECTION_RE.finditer(body or ""))
    encoded = False
    if not matches:
        matches = list(_ENCODED_SECTION_RE.finditer(body or ""))
        encoded = True

    sections: list[ArticleSection] = []
    for match in matches:
        raw_title, raw_content = match.group(1), match.group(2)
        if encoded:
            raw_title = html.unescape(raw_title)
            raw_content = html.unescape(raw_content)
        title = strip_tags(raw_title)
        if not title:
            continue
        sections.append(
            ArticleSection(
                title=sanitize_text(title),
                content=sanitize_text(raw_content.strip()),
            )
        )
    return sections
