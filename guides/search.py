"""Full-text search over the guide corpus."""
from __future__ import annotations

import re
from dataclasses import dataclass

from .corpus import Guide


SNIPPET_RADIUS = 60
TITLE_WEIGHT = 3
_HEADING_LINE = re.compile(r"^\s{0,3}#{1,6}\s")


@dataclass
class SearchResult:
    topic: str
    file: str
    title: str
    snippet: str
    score: int


def _snippet(text: str, index: int, length: int) -> str:
    start = max(0, index - SNIPPET_RADIUS)
    end = min(len(text), index + length + SNIPPET_RADIUS)
    snippet = " ".join(text[start:end].split())
    if start > 0:
        snippet = "…" + snippet
    if end < len(text):
        snippet += "…"
    return snippet


def _split_headings(body: str) -> tuple[str, str]:
    """(heading lines, remaining text) of a Markdown body."""
    headings, text = [], []
    for line in body.splitlines():
        (headings if _HEADING_LINE.match(line) else text).append(line)
    return "\n".join(headings), "\n".join(text)


def search(corpus: list[Guide], query: str, *, limit: int = 20) -> list[SearchResult]:
    """Guides containing every query term, best matches first.

    Title and heading hits weigh ``TITLE_WEIGHT`` times a body hit.
    """
    terms = [t.lower() for t in query.split() if t.strip()]
    if not terms:
        return []

    results = []
    for guide in corpus:
        title = guide.title.lower()
        if not all(t in guide.body.lower() or t in title for t in terms):
            continue
        headings, text = (part.lower() for part in _split_headings(guide.body))
        score = 0
        for t in terms:
            score += text.count(t)
            score += (title.count(t) + headings.count(t)) * TITLE_WEIGHT
        hits = [m for m in (re.search(re.escape(t), guide.body, re.IGNORECASE) for t in terms) if m]
        first = min(hits, key=lambda m: m.start()) if hits else None
        snippet = _snippet(guide.body, first.start(), first.end() - first.start()) if first else guide.title
        results.append(SearchResult(
            topic=guide.topic,
            file=guide.relative_path,
            title=guide.title,
            snippet=snippet,
            score=score,
        ))

    results.sort(key=lambda r: (-r.score, r.file))
    return results[:limit]


def highlight(snippet: str, query: str) -> str:
    """Wrap query terms in ``**`` for terminal/Markdown output."""
    for term in sorted({t for t in query.split() if t}, key=len, reverse=True):
        snippet = re.sub(f"({re.escape(term)})", r"**\1**", snippet, flags=re.IGNORECASE)
    return snippet
