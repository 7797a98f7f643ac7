"""
Load the Markdown study-guide corpus and build the topic manifest.

Layout (one folder per topic):

    guides/
      01-wcag-fundamentals/
        README.md
        pour-principles.md
      02-aria-roles/
        ...

The manifest has the same shape as the site's ``manifest.json``:
``{folder: {"folder", "icon", "name", "files", "count"}}``.
"""
from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from functools import cached_property
from pathlib import Path

from .config import DEFAULT_TOPIC_ICON, GUIDES_DIR
from .markdown import (
    CodeBlock,
    Flashcard,
    Question,
    extract_code_blocks,
    extract_common_mistakes,
    extract_flashcards,
    extract_frontmatter,
    extract_questions,
    extract_title,
)


class ManifestError(ValueError):
    """The manifest file is missing or malformed."""


@dataclass
class Guide:
    """A single Markdown study guide."""
    path: Path
    topic: str  # folder name relative to the corpus root ("" for top-level files)
    title: str
    frontmatter: dict
    body: str

    @property
    def relative_path(self) -> str:
        return f"{self.topic}/{self.path.name}" if self.topic else self.path.name

    @cached_property
    def questions(self) -> list[Question]:
        return extract_questions(self.body)

    @cached_property
    def flashcards(self) -> list[Flashcard]:
        return extract_flashcards(self.body)

    @cached_property
    def code_blocks(self) -> list[CodeBlock]:
        return extract_code_blocks(self.body)

    @cached_property
    def common_mistakes(self) -> list[dict]:
        return extract_common_mistakes(self.body)

    @cached_property
    def body_offset(self) -> int:
        """Lines taken by the frontmatter, so snippet lines map back to the file."""
        text = self.path.read_text(encoding="utf-8", errors="replace")
        return text.count("\n") - self.body.count("\n")


@dataclass
class Topic:
    folder: str
    icon: str
    name: str
    files: list[str] = field(default_factory=list)
    count: int = 0


def topic_name(folder: str) -> str:
    """``02-aria-roles`` -> ``ARIA Roles``."""
    name = re.sub(r"^\d+[-_.\s]*", "", folder)
    words = re.split(r"[-_\s]+", name)
    return " ".join(w.upper() if w.lower() in ("wcag", "aria", "css", "html", "js") else w.capitalize()
                    for w in words if w)


def load_guide(path: Path, root: Path | None = None) -> Guide:
    root = root or path.parent
    text = path.read_text(encoding="utf-8", errors="replace")
    frontmatter, body = extract_frontmatter(text)
    rel_parent = path.parent.relative_to(root).as_posix() if path.parent != root else ""
    title = str(frontmatter.get("title") or extract_title(body) or path.stem.replace("-", " ").title())
    return Guide(
        path=path,
        topic=rel_parent,
        title=title,
        frontmatter=frontmatter,
        body=body,
    )


def load_corpus(root: Path | None = None) -> list[Guide]:
    """Load every ``*.md`` guide under *root* (sorted by path)."""
    root = Path(root or GUIDES_DIR)
    if not root.is_dir():
        raise FileNotFoundError(f"Guide directory not found: {root}")
    return [load_guide(p, root) for p in sorted(root.rglob("*.md")) if p.is_file()]


def build_manifest(root: Path | None = None) -> dict[str, Topic]:
    """One topic per folder; README.md files are listed but not counted."""
    root = Path(root or GUIDES_DIR)
    manifest: dict[str, Topic] = {}
    for guide in load_corpus(root):
        if not guide.topic:
            continue
        folder = guide.topic.split("/")[0]
        topic = manifest.get(folder)
        if topic is None:
            topic = manifest[folder] = Topic(
                folder=folder,
                icon=DEFAULT_TOPIC_ICON,
                name=topic_name(folder),
            )
        # a README's frontmatter names the topic
        if guide.path.name.lower() == "readme.md":
            topic.name = str(guide.frontmatter.get("topic") or topic.name)
            topic.icon = str(guide.frontmatter.get("icon") or topic.icon)
        else:
            topic.count += 1
            if guide.frontmatter.get("icon") and topic.icon == DEFAULT_TOPIC_ICON:
                topic.icon = str(guide.frontmatter["icon"])
        topic.files.append(guide.relative_path)
    return manifest


def write_manifest(manifest: dict[str, Topic], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {key: asdict(topic) for key, topic in manifest.items()}
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def read_manifest(path: Path) -> dict[str, Topic]:
    path = Path(path)
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest is not valid JSON: {path} ({e})") from e
    if not isinstance(payload, dict):
        raise ManifestError(f"Manifest must be a JSON object: {path}")
    try:
        return {key: Topic(**value) for key, value in payload.items()}
    except TypeError as e:
        raise ManifestError(f"Malformed topic entry in {path}: {e}") from e
