"""Shared fixtures for docindex tests.

Trees are written into tmp_path and dated with FixedDateResolver so no
test depends on git or on today's date.
"""
import textwrap
from pathlib import Path

import pytest

from docindex.vcs import FixedDateResolver


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "git: tests that shell out to a real git executable",
    )


@pytest.fixture
def write_tree():
    """Write a {relative_path: content} mapping under a root directory."""

    def _write(root: Path, files: dict[str, str]) -> Path:
        for rel_path, content in files.items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return root

    return _write


@pytest.fixture
def fixed_dates():
    """Factory for a resolver returning fixed dates per path."""

    def _make(dates=None, default="2024-01-01"):
        return FixedDateResolver(dates or {}, default=default)

    return _make


@pytest.fixture
def sample_tree(tmp_path, write_tree):
    """A small article repository with nested categories and tooling folders."""
    return write_tree(
        tmp_path,
        {
            "README.md": """
                # System Design Deep Dive

                A library of **system design** articles.
            """,
            "design-patterns/caching.md": """
                # Caching Design Pattern

                Caches keep hot data close to the reader.
            """,
            "design-patterns/circuit-breaker.md": """
                Circuit breakers stop cascading failures.
            """,
            "scalability/horizontal-scaling.md": """
                ---
                tags: [scaling]
                ---
                # Horizontal Scaling

                Add machines, not bigger machines.
            """,
            "security/zero-trust.md": """
                # Zero Trust
            """,
            "scripts/NOTES.md": "# Tooling notes\n",
            "assets/readme.md": "# Asset notes\n",
            ".github/PULL_REQUEST_TEMPLATE.md": "# PR\n",
            "_site/ignored.md": "# Built output\n",
        },
    )
