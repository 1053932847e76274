"""Configuration loading for docindex.

Reads an optional YAML file that curates the landing page:

```yaml
featured:
  - system-design/url-shortener.md
editors_picks:
  - design-patterns/caching.md
recommended:
  - scalability/horizontal-scaling.md
site:
  title: System Design Deep Dive
  repo_url: https://github.com/example/systemdesign-deepdive
```

Every key is optional. Curated paths are relative to the content root and
are skipped at render time when they do not match a discovered article.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, field_validator

from .categories import DEFAULT_PREFERRED_CATEGORIES
from .discovery import DEFAULT_EXCLUDE_DIRS
from .errors import ConfigError

# Searched in order, relative to the content root
CONFIG_FILENAMES = ("scripts/config.yml", "docindex.yml")

DEFAULT_RECOMMENDED_KEYWORDS = (
    "microservices",
    "caching",
    "horizontal-scaling",
    "load-balancing",
)


def normalize_doc_path(value: str) -> str:
    """Normalise a curated path to the relative POSIX form used by discovery."""
    path = value.strip().replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path


class SiteConfig(BaseModel):
    """Static text and links rendered into the page shell."""

    model_config = ConfigDict(extra="forbid")

    title: str = "System Design Deep Dive"
    description: str = (
        "System Design Deep Dive - Comprehensive guide to architecture patterns, "
        "design patterns, and scalability best practices"
    )
    keywords: str = "system design, architecture patterns, microservices, scalability, design patterns"
    repo_url: str = "https://github.com/Anilinfo2015/systemdesign-deepdive"
    copyright_year: Optional[int] = None


class IndexConfig(BaseModel):
    """Landing page configuration (all fields optional)."""

    model_config = ConfigDict(extra="forbid")

    featured: list[str] = Field(default_factory=list)
    editors_picks: list[str] = Field(default_factory=list)
    recommended: list[str] = Field(default_factory=list)
    site: SiteConfig = Field(default_factory=SiteConfig)
    recent_limit: int = Field(default=6, ge=1)
    preferred_categories: list[str] = Field(default_factory=lambda: list(DEFAULT_PREFERRED_CATEGORIES))
    recommended_keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_RECOMMENDED_KEYWORDS))
    exclude_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))
    _path: Optional[Path] = PrivateAttr(default=None)

    @property
    def path(self) -> Optional[Path]:
        """File the config was loaded from, or None for defaults."""
        return self._path

    @field_validator("featured", "editors_picks", "recommended", mode="before")
    @classmethod
    def validate_doc_paths(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("expected a list of relative markdown paths")
        paths: list[str] = []
        for item in v:
            if not isinstance(item, str) or not item.strip():
                raise ValueError("document paths must be non-empty strings")
            paths.append(normalize_doc_path(item))
        return paths

    @field_validator("exclude_dirs")
    @classmethod
    def validate_exclude_dirs(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name.strip() or "/" in name:
                raise ValueError(f"exclude_dirs entries must be bare folder names, got {name!r}")
        return v


def find_config(root: Path) -> Optional[Path]:
    for filename in CONFIG_FILENAMES:
        candidate = root / filename
        if candidate.is_file():
            return candidate
    return None


def load_config(root: str | Path, config_path: str | Path | None = None) -> IndexConfig:
    """Load the index config for a content root.

    Args:
        root: Content root directory searched for CONFIG_FILENAMES
        config_path: Explicit config file; must exist when given

    Returns:
        Validated IndexConfig, or defaults when no file is found

    Raises:
        ConfigError: If the file is missing (explicit path only), unreadable,
            not valid YAML, or fails validation
    """
    if config_path is not None:
        path: Optional[Path] = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = find_config(Path(root))
    if path is None:
        return IndexConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {path}: expected a YAML mapping")

    try:
        config = IndexConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    config._path = path
    return config
