"""Landing page composition.

Selects the documents shown in each section of the landing page and
renders the Jinja2 template. Selection is deterministic: "most recent"
means date descending with ties broken by path, so unchanged input always
yields the same page.
"""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from .categories import Category, category_label
from .config import IndexConfig, SiteConfig
from .document import Document

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "index.html.j2"

FEATURED_LIMIT = 1
EDITORS_PICKS_LIMIT = 3
RECOMMENDED_LIMIT = 4


@dataclass
class PageContext:
    """Everything the landing page template needs."""

    site: SiteConfig
    categories: list[Category]
    featured: Optional[Document] = None
    editors_picks: list[Document] = field(default_factory=list)
    recent: list[Document] = field(default_factory=list)
    recommended: list[Document] = field(default_factory=list)
    copyright_year: int = 1970

    @property
    def total_documents(self) -> int:
        return sum(len(category.documents) for category in self.categories)

    @property
    def total_categories(self) -> int:
        return len(self.categories)


def by_recency(documents: Iterable[Document]) -> list[Document]:
    """Sort newest first; equal dates keep path order."""
    return sorted(sorted(documents, key=lambda d: d.path), key=lambda d: d.date, reverse=True)


def resolve_configured(
    paths: Sequence[str],
    lookup: Mapping[str, Document],
    limit: int,
    section: str,
) -> list[Document]:
    """Map configured paths to discovered documents, skipping unknown ones."""
    resolved: list[Document] = []
    for path in paths:
        if len(resolved) >= limit:
            break
        doc = lookup.get(path)
        if doc is None:
            logger.debug("Configured %s entry %s is not an indexed document; skipping", section, path)
            continue
        if doc not in resolved:
            resolved.append(doc)
    return resolved


def select_featured(
    documents: Sequence[Document],
    config: IndexConfig,
    lookup: Mapping[str, Document],
) -> Optional[Document]:
    configured = resolve_configured(config.featured, lookup, FEATURED_LIMIT, "featured")
    if configured:
        return configured[0]
    ranked = by_recency(documents)
    return ranked[0] if ranked else None


def select_editors_picks(
    documents: Sequence[Document],
    config: IndexConfig,
    lookup: Mapping[str, Document],
    featured: Optional[Document],
) -> list[Document]:
    configured = resolve_configured(config.editors_picks, lookup, EDITORS_PICKS_LIMIT, "editors_picks")
    if configured:
        return configured
    return [doc for doc in by_recency(documents) if doc is not featured][:EDITORS_PICKS_LIMIT]


def select_recent(documents: Sequence[Document], limit: int = 6) -> list[Document]:
    return by_recency(documents)[:limit]


def select_recommended(
    documents: Sequence[Document],
    config: IndexConfig,
    lookup: Mapping[str, Document],
) -> list[Document]:
    """Configured recommendations, else the first path match per keyword."""
    configured = resolve_configured(config.recommended, lookup, RECOMMENDED_LIMIT, "recommended")
    if configured:
        return configured

    matched: list[Document] = []
    for keyword in config.recommended_keywords:
        for doc in documents:
            if keyword in doc.path:
                if doc not in matched:
                    matched.append(doc)
                break
    return matched


def default_copyright_year(documents: Sequence[Document], site: SiteConfig) -> int:
    """Configured year, else the newest document's year, else this year."""
    if site.copyright_year is not None:
        return site.copyright_year
    years = [int(doc.date[:4]) for doc in documents if doc.date[:4].isdigit()]
    if years:
        return max(years)
    return dt.date.today().year


def build_page_context(
    documents: Sequence[Document],
    categories: list[Category],
    config: IndexConfig,
) -> PageContext:
    """Select every section of the landing page.

    Args:
        documents: Documents in discovery order
        categories: Categories in display order
        config: Curation and site settings

    Returns:
        PageContext ready for render_index
    """
    lookup = {doc.path: doc for doc in documents}
    featured = select_featured(documents, config, lookup)
    return PageContext(
        site=config.site,
        categories=categories,
        featured=featured,
        editors_picks=select_editors_picks(documents, config, lookup, featured),
        recent=select_recent(documents, config.recent_limit),
        recommended=select_recommended(documents, config, lookup),
        copyright_year=default_copyright_year(documents, config.site),
    )


def make_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("docindex", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html", "j2"), default=True),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["category_label"] = category_label
    return env


def render_index(context: PageContext, env: Optional[Environment] = None) -> str:
    """Render the landing page HTML."""
    template = (env or make_environment()).get_template(TEMPLATE_NAME)
    return template.render(page=context, site=context.site)


def write_index(html: str, output_path: str | Path) -> Path:
    """Write the page in full, replacing any previous index.

    The HTML goes to a sibling temp file first so an interrupted run never
    leaves a truncated index behind.
    """
    path = Path(output_path)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_text(html, encoding="utf-8")
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    return path
