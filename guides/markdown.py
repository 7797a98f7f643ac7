"""
Markdown parsing for the study guides: frontmatter, interview questions,
flashcards, fenced code snippets and "Common Mistakes" tables.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

import yaml


_FRONTMATTER_RE = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)(.*)\Z", re.DOTALL)
_QUESTION_RE = re.compile(r"^##\s+Question\s+(\d+):\s*(.+?)\s*$", re.MULTILINE)
_QA_RE = re.compile(r"\*\*Q:\*\*\s*(.*?)\n\s*\*\*A:\*\*\s*(.*)", re.DOTALL)
_FENCE_RE = re.compile(r"^(\s*)(```|~~~)\s*([\w+#-]*)[^\n]*$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
_TABLE_SEP_RE = re.compile(r"^\s*\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?\s*$")

BAD_EMOJI = re.compile(r"❌|🚫")
GOOD_EMOJI = re.compile(r"✅|✔")
BAD_MARKERS = re.compile(
    r"\b(bad|wrong|don'?t|avoid|incorrect|inaccessible|not accessible|anti-pattern|mistake)\b",
    re.IGNORECASE,
)
GOOD_MARKERS = re.compile(
    r"\b(good|correct|better|fixed|recommended)\b|\bdo:|(?<!not )\baccessible\b",
    re.IGNORECASE,
)


@dataclass
class Question:
    number: int
    title: str
    content: str


@dataclass
class Flashcard:
    number: int
    title: str
    question: str
    answer: str


@dataclass
class CodeBlock:
    language: str
    code: str
    line: int  # 1-based line of the opening fence
    heading: str | None = None
    verdict: str | None = None  # "bad" | "good" | None


def extract_frontmatter(text: str) -> tuple[dict, str]:
    """Split a leading YAML frontmatter block from the body."""
    match = _FRONTMATTER_RE.match(text or "")
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return {}, text
    if not isinstance(data, dict):
        return {}, text
    return data, match.group(2)


def extract_title(text: str) -> str | None:
    for line in (text or "").splitlines():
        if line.startswith("# "):
            return line[2:].strip()
    return None


def extract_questions(text: str) -> list[Question]:
    """``## Question N: Title`` sections, each running to the next question."""
    headers = list(_QUESTION_RE.finditer(text or ""))
    questions = []
    for i, header in enumerate(headers):
        end = headers[i + 1].start() if i + 1 < len(headers) else len(text)
        questions.append(Question(
            number=int(header.group(1)),
            title=header.group(2).strip(),
            content=text[header.end():end].strip(),
        ))
    return questions


def extract_flashcards(text: str) -> list[Flashcard]:
    """Question sections that contain a ``**Q:** ... **A:** ...`` pair."""
    cards = []
    for q in extract_questions(text):
        match = _QA_RE.search(q.content)
        if not match:
            continue
        cards.append(Flashcard(
            number=q.number,
            title=q.title,
            question=match.group(1).strip(),
            answer=match.group(2).strip(),
        ))
    return cards


def _last_match(pattern, text):
    match = None
    for match in pattern.finditer(text):
        pass
    return match


def classify_snippet(context: str) -> str | None:
    """Label a snippet from the text around it: "bad", "good" or None.

    Emoji markers outrank words. Among markers of the same kind the one
    closest to the snippet wins.
    """
    for bad_re, good_re in ((BAD_EMOJI, GOOD_EMOJI), (BAD_MARKERS, GOOD_MARKERS)):
        bad = _last_match(bad_re, context)
        good = _last_match(good_re, context)
        if bad and good:
            return "bad" if bad.start() > good.start() else "good"
        if bad:
            return "bad"
        if good:
            return "good"
    return None


def _leading_comment(code: str) -> str:
    first = code.lstrip().splitlines()[0] if code.strip() else ""
    if first.startswith(("<!--", "//", "/*", "#")):
        return first
    return ""


def extract_code_blocks(text: str) -> list[CodeBlock]:
    lines = (text or "").splitlines()
    blocks = []
    heading = None
    i = 0
    while i < len(lines):
        line = lines[i]
        heading_match = _HEADING_RE.match(line)
        if heading_match:
            heading = heading_match.group(2)
            i += 1
            continue

        fence = _FENCE_RE.match(line)
        if not fence:
            i += 1
            continue

        marker = fence.group(2)
        language = fence.group(3).lower()
        start = i
        body = []
        i += 1
        while i < len(lines) and not lines[i].strip().startswith(marker):
            body.append(lines[i])
            i += 1
        i += 1  # closing fence (or EOF for an unterminated block)

        code = "\n".join(body)
        above = [ln for ln in lines[max(0, start - 3):start] if ln.strip()]
        context = "\n".join(above)
        verdict = classify_snippet(_leading_comment(code)) or classify_snippet(context)
        blocks.append(CodeBlock(
            language=language,
            code=code,
            line=start + 1,
            heading=heading,
            verdict=verdict,
        ))
    return blocks


def _split_row(line: str) -> list[str]:
    line = line.strip()
    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|"):
        line = line[:-1]
    return [cell.strip() for cell in line.split("|")]


def extract_tables(text: str) -> list[dict]:
    """Pipe tables as ``{"heading": str|None, "rows": [{header: cell}]}``."""
    lines = (text or "").splitlines()
    tables = []
    heading = None
    in_fence = False
    i = 0
    while i < len(lines):
        line = lines[i]
        if _FENCE_RE.match(line):
            in_fence = not in_fence
        heading_match = None if in_fence else _HEADING_RE.match(line)
        if heading_match:
            heading = heading_match.group(2)
        if (
            not in_fence
            and "|" in line
            and i + 1 < len(lines)
            and _TABLE_SEP_RE.match(lines[i + 1])
        ):
            headers = _split_row(line)
            rows = []
            i += 2
            while i < len(lines) and "|" in lines[i] and lines[i].strip():
                cells = _split_row(lines[i])
                cells += [""] * (len(headers) - len(cells))
                rows.append(dict(zip(headers, cells)))
                i += 1
            tables.append({"heading": heading, "rows": rows})
            continue
        i += 1
    return tables


def extract_common_mistakes(text: str) -> list[dict]:
    """Rows of every table under a heading mentioning "Common Mistakes"."""
    rows = []
    for table in extract_tables(text):
        if table["heading"] and "common mistake" in table["heading"].lower():
            rows.extend(table["rows"])
    return rows
