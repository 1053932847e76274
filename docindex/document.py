"""Markdown document records and metadata extraction.

A Document is built fresh for every run from the file on disk:

```markdown
---
tags: [caching]
---
# Caching Design Pattern

Caches keep **hot** data close to the reader.
```

yields title "Caching Design Pattern", excerpt "Caches keep hot data close
to the reader." and a read time of 1 minute. Front matter is parsed only
so it can be skipped.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Iterator

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from .formatting import title_case, truncate_text
from .vcs import DateResolver, DateSource

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
ROOT_CATEGORY = "root"

EXCERPT_MAX_CHARS = 180
WORDS_PER_MINUTE = 200

CODE_FENCE = "```"
_TITLE_RE = re.compile(r"^# (.*)$")
_INLINE_MARKUP = (
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
)


@dataclass
class Document:
    """Metadata for one markdown article."""

    path: str
    title: str
    date: str
    excerpt: str = ""
    read_time: int = 1
    directory: str = "."
    date_source: DateSource = "git"

    @property
    def html_path(self) -> str:
        """Path of the page the static site generator emits for this file."""
        if self.path.endswith(".md"):
            return self.path[: -len(".md")] + ".html"
        return self.path

    @property
    def category(self) -> str:
        return ROOT_CATEGORY if self.directory == "." else self.directory


def title_from_filename(path: str | PurePosixPath) -> str:
    """Derive a display title from a file name.

    ``system-design/load-balancing.md`` becomes ``Load Balancing``.
    """
    stem = PurePosixPath(str(path)).name
    if stem.endswith(".md"):
        stem = stem[: -len(".md")]
    return title_case(stem) or UNTITLED


def strip_front_matter(
    text: str,
    path: str | PurePosixPath | None = None,
) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from the markdown body.

    Only a ``---`` block on the first line counts as front matter. A block
    that is never closed runs to the end of the file, leaving an empty body.

    Args:
        text: Raw file contents
        path: Source path, used only in log messages

    Returns:
        Tuple of (metadata dict, body). Malformed YAML yields empty
        metadata but the block is still removed from the body.
    """
    handler = YAMLHandler()
    stripped = text.strip()
    if not handler.detect(stripped):
        return {}, stripped

    parts = handler.FM_BOUNDARY.split(stripped, 2)
    if len(parts) < 3:
        logger.warning("Unclosed front matter in %s; treating the whole file as metadata", path or "<text>")
        return {}, ""

    try:
        post = frontmatter.loads(stripped, handler=handler)
    except (yaml.YAMLError, ValueError) as e:
        logger.warning("Ignoring malformed front matter in %s: %s", path or "<text>", e)
        return {}, parts[2].strip()
    return dict(post.metadata), post.content


def _prose_lines(body: str) -> Iterator[str]:
    """Yield body lines that sit outside fenced code blocks."""
    in_code = False
    for line in body.splitlines():
        if line.startswith(CODE_FENCE):
            in_code = not in_code
            continue
        if in_code:
            continue
        yield line


def title_from_body(body: str, path: str | PurePosixPath) -> str:
    for line in _prose_lines(body):
        match = _TITLE_RE.match(line)
        if match:
            title = match.group(1).strip()
            if title:
                return title
            break
    return title_from_filename(path)


def extract_title(text: str, path: str | PurePosixPath) -> str:
    """Return the first level-1 heading, or a title derived from the filename."""
    _metadata, body = strip_front_matter(text, path)
    return title_from_body(body, path)


def strip_inline_markup(line: str) -> str:
    """Remove inline code, link, bold and emphasis markup."""
    for pattern, replacement in _INLINE_MARKUP:
        line = pattern.sub(replacement, line)
    return line.replace("\r", "")


def excerpt_from_body(body: str, max_chars: int = EXCERPT_MAX_CHARS) -> str:
    for line in _prose_lines(body):
        if line.startswith("#") or not line.strip():
            continue
        excerpt = strip_inline_markup(line).strip()
        return truncate_text(excerpt, max_chars)
    return ""


def extract_excerpt(text: str, max_chars: int = EXCERPT_MAX_CHARS) -> str:
    """Return the first prose line as plain text, truncated to max_chars."""
    _metadata, body = strip_front_matter(text)
    return excerpt_from_body(body, max_chars)


def count_body_words(body: str) -> int:
    return sum(len(line.split()) for line in _prose_lines(body))


def count_words(text: str) -> int:
    """Count whitespace separated words outside front matter and code fences."""
    _metadata, body = strip_front_matter(text)
    return count_body_words(body)


def estimate_read_time(words: int) -> int:
    """Minutes to read ``words`` words at 200 words per minute, at least 1."""
    if words <= 0:
        return 1
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def load_document(
    root: str | Path,
    rel_path: str | PurePosixPath,
    date_resolver: DateResolver,
) -> Document:
    """Build a Document for one file under root.

    Unreadable files degrade to a filename title, empty excerpt and a one
    minute read time. Only the date resolver may raise, and only in strict
    mode.
    """
    rel = PurePosixPath(str(rel_path))
    date, date_source = date_resolver(rel)
    directory = str(rel.parent)

    try:
        text = (Path(root) / rel).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Cannot read %s (%s); using filename defaults", rel, e)
        return Document(
            path=str(rel),
            title=title_from_filename(rel),
            date=date,
            directory=directory,
            date_source=date_source,
        )

    _metadata, body = strip_front_matter(text, rel)
    return Document(
        path=str(rel),
        title=title_from_body(body, rel),
        date=date,
        excerpt=excerpt_from_body(body),
        read_time=estimate_read_time(count_body_words(body)),
        directory=directory,
        date_source=date_source,
    )
