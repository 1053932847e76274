"""Markdown file discovery.

Walks a content root and returns every markdown article that belongs in
the index. Hidden paths, underscore-prefixed paths and non-content
folders are skipped.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable

from .errors import DiscoveryError

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"

# Top-level folders that hold tooling rather than articles
DEFAULT_EXCLUDE_DIRS = ("scripts", "assets", "node_modules")


def is_excluded(rel_path: PurePosixPath, exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS) -> bool:
    """Return True when a relative path should not be indexed.

    Args:
        rel_path: Path relative to the content root
        exclude_dirs: Top-level folder names to skip

    Returns:
        True for hidden or underscore-prefixed components and for paths
        under an excluded top-level folder
    """
    parts = rel_path.parts
    if not parts:
        return True
    if any(part.startswith((".", "_")) for part in parts):
        return True
    return len(parts) > 1 and parts[0] in set(exclude_dirs)


def _walk_error_handler(base: Path) -> Callable[[OSError], None]:
    def handle(error: OSError) -> None:
        if error.filename is None or Path(error.filename) == base:
            raise DiscoveryError(f"Cannot read content root {base}: {error.strerror}") from error
        logger.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror)

    return handle


def discover_markdown_files(
    root: str | Path,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> list[PurePosixPath]:
    """Find every indexable markdown file below root.

    Args:
        root: Content root directory
        exclude_dirs: Top-level folder names to skip in addition to hidden
            and underscore-prefixed paths

    Returns:
        Relative POSIX paths sorted lexicographically

    Raises:
        DiscoveryError: If root is missing, not a directory, or unreadable
    """
    base = Path(root)
    if not base.exists():
        raise DiscoveryError(f"Content root not found: {base}")
    if not base.is_dir():
        raise DiscoveryError(f"Content root is not a directory: {base}")

    excluded = tuple(exclude_dirs)
    found: list[PurePosixPath] = []
    for dirpath, dirnames, filenames in os.walk(base, onerror=_walk_error_handler(base)):
        rel_dir = Path(dirpath).relative_to(base)
        # Prune in place so os.walk never descends into skipped folders
        dirnames[:] = [d for d in dirnames if not d.startswith((".", "_"))]
        if rel_dir == Path("."):
            dirnames[:] = [d for d in dirnames if d not in excluded]
        for filename in filenames:
            if not filename.endswith(MARKDOWN_SUFFIX):
                continue
            rel_path = PurePosixPath((rel_dir / filename).as_posix())
            if is_excluded(rel_path, excluded):
                logger.debug("Skipping excluded file %s", rel_path)
                continue
            found.append(rel_path)

    found.sort(key=str)
    logger.info("Discovered %d markdown files under %s", len(found), base)
    return found
