"""Single-pass index generation: discover, extract, group, render, write."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .categories import group_documents, order_categories
from .compose import build_page_context, render_index, write_index
from .config import IndexConfig, load_config
from .discovery import discover_markdown_files
from .document import Document, load_document
from .vcs import DateResolver, GitDateResolver

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"


@dataclass
class GenerationResult:
    """Summary of one generation run."""

    output_path: Path
    documents: list[Document]
    category_count: int

    @property
    def document_count(self) -> int:
        return len(self.documents)

    @property
    def fallback_dates(self) -> list[str]:
        """Paths whose date came from the current-date fallback."""
        return [doc.path for doc in self.documents if doc.date_source == "fallback"]


def generate(
    root: str | Path = ".",
    output: str | Path | None = None,
    config: Optional[IndexConfig] = None,
    date_resolver: Optional[DateResolver] = None,
    strict_dates: bool = False,
) -> GenerationResult:
    """Regenerate the landing page for a content root.

    Args:
        root: Content root to scan
        output: Output file (default: ROOT/index.html)
        config: Pre-loaded config (default: load_config(root))
        date_resolver: Date lookup (default: GitDateResolver on root)
        strict_dates: Fail instead of falling back to today's date; only
            applies to the default resolver

    Returns:
        GenerationResult with counts and the written path

    Raises:
        DiscoveryError: If root cannot be scanned (nothing is written)
        ConfigError: If the config file is invalid
        DateResolutionError: In strict mode, when a document has no history
    """
    root_path = Path(root)
    if config is None:
        config = load_config(root_path)
    if date_resolver is None:
        date_resolver = GitDateResolver(root_path, strict=strict_dates)
    output_path = Path(output) if output is not None else root_path / INDEX_FILENAME

    paths = discover_markdown_files(root_path, config.exclude_dirs)
    documents = [load_document(root_path, rel_path, date_resolver) for rel_path in paths]

    categories = order_categories(group_documents(documents), config.preferred_categories)
    context = build_page_context(documents, categories, config)
    html = render_index(context)
    write_index(html, output_path)
    logger.info(
        "Wrote %s with %d documents in %d categories",
        output_path,
        context.total_documents,
        context.total_categories,
    )

    return GenerationResult(
        output_path=output_path,
        documents=documents,
        category_count=context.total_categories,
    )
