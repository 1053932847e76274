"""Grouping documents into display categories.

A category is the directory an article lives in. Files at the content
root form the "Getting Started" category.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .document import ROOT_CATEGORY, Document
from .formatting import anchor_id, title_case

ROOT_LABEL = "Getting Started"
ROOT_ICON = "fas fa-rocket"
DEFAULT_ICON = "fas fa-folder"

# Ordered: the first keyword contained in the directory name wins
CATEGORY_ICONS: tuple[tuple[str, str], ...] = (
    ("design-patterns", "fas fa-palette"),
    ("architecture", "fas fa-building"),
    ("scalability", "fas fa-chart-line"),
    ("security", "fas fa-shield-alt"),
    ("database", "fas fa-database"),
    ("system-design", "fas fa-sitemap"),
    ("youtube", "fab fa-youtube"),
)

DEFAULT_PREFERRED_CATEGORIES = (
    ROOT_CATEGORY,
    "architecture-patterns",
    "design-patterns",
    "scalability",
    "system-design",
)


def category_label(key: str) -> str:
    if key == ROOT_CATEGORY:
        return ROOT_LABEL
    return title_case(key)


def category_icon(key: str) -> str:
    if key == ROOT_CATEGORY:
        return ROOT_ICON
    for keyword, icon in CATEGORY_ICONS:
        if keyword in key:
            return icon
    return DEFAULT_ICON


@dataclass
class Category:
    """A directory of articles as shown on the landing page."""

    key: str
    documents: list[Document] = field(default_factory=list)

    @property
    def label(self) -> str:
        return category_label(self.key)

    @property
    def icon(self) -> str:
        return category_icon(self.key)

    @property
    def anchor(self) -> str:
        return f"category-{anchor_id(self.key)}"


def group_documents(documents: Iterable[Document]) -> dict[str, Category]:
    """Bucket documents by directory, keeping discovery order within each bucket."""
    categories: dict[str, Category] = {}
    for doc in documents:
        category = categories.get(doc.category)
        if category is None:
            category = categories[doc.category] = Category(key=doc.category)
        category.documents.append(doc)
    return categories


def order_categories(
    categories: dict[str, Category],
    preferred: Sequence[str] = DEFAULT_PREFERRED_CATEGORIES,
) -> list[Category]:
    """Preferred categories first (when present), then the rest by key."""
    ordered = [categories[key] for key in dict.fromkeys(preferred) if key in categories]
    seen = {category.key for category in ordered}
    ordered.extend(categories[key] for key in sorted(categories) if key not in seen)
    return ordered
