"""docindex: static landing page generator for markdown article trees.

Scans a repository for markdown articles and writes a single index.html
that links every article through its GitHub Pages ``.html`` path.

Main entry points:
- docindex CLI: ``docindex [ROOT]`` regenerates ROOT/index.html
- generate(): programmatic API returning a GenerationResult
"""
from __future__ import annotations

from .categories import Category, group_documents, order_categories
from .config import IndexConfig, SiteConfig, load_config
from .document import Document, load_document
from .errors import ConfigError, DateResolutionError, DiscoveryError, DocIndexError
from .generator import GenerationResult, generate

__all__ = [
    # Pipeline
    "generate",
    "GenerationResult",
    # Records
    "Category",
    "Document",
    "group_documents",
    "order_categories",
    "load_document",
    # Config
    "IndexConfig",
    "SiteConfig",
    "load_config",
    # Errors
    "ConfigError",
    "DateResolutionError",
    "DiscoveryError",
    "DocIndexError",
    # Version
    "__version__",
]

__version__ = "0.1.0"
