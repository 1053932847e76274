import textwrap

import pytest

from docindex.config import IndexConfig, load_config
from docindex.errors import ConfigError


def test_load_config_defaults_when_missing(tmp_path):
    config = load_config(tmp_path)

    assert config.path is None
    assert config.featured == []
    assert config.recent_limit == 6
    assert config.exclude_dirs == ["scripts", "assets", "node_modules"]
    assert config.preferred_categories[0] == "root"
    assert config.site.title == "System Design Deep Dive"


def test_load_config_reads_scripts_config(tmp_path):
    config_file = tmp_path / "scripts" / "config.yml"
    config_file.parent.mkdir()
    config_file.write_text(
        textwrap.dedent(
            """
            # Curated landing page content
            featured:
              - system-design/url-shortener.md
            editors_picks:
              - ./design-patterns/caching.md
              - scalability\\horizontal-scaling.md
            recommended:
            site:
              title: My Library
              copyright_year: 2025
            recent_limit: 3
            """
        ).strip()
    )

    config = load_config(tmp_path)

    assert config.path == config_file
    assert config.featured == ["system-design/url-shortener.md"]
    assert config.editors_picks == ["design-patterns/caching.md", "scalability/horizontal-scaling.md"]
    assert config.recommended == []
    assert config.site.title == "My Library"
    assert config.site.copyright_year == 2025
    assert config.recent_limit == 3


def test_scripts_config_takes_precedence(tmp_path):
    (tmp_path / "scripts").mkdir()
    (tmp_path / "scripts" / "config.yml").write_text("featured: [a.md]\n")
    (tmp_path / "docindex.yml").write_text("featured: [b.md]\n")

    assert load_config(tmp_path).featured == ["a.md"]


def test_explicit_config_path(tmp_path):
    custom = tmp_path / "custom.yml"
    custom.write_text("recommended: [x.md]\n")

    config = load_config(tmp_path, custom)

    assert config.recommended == ["x.md"]
    assert config.path == custom


def test_explicit_config_path_must_exist(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "missing.yml")


def test_empty_file_gives_defaults(tmp_path):
    (tmp_path / "docindex.yml").write_text("")

    assert load_config(tmp_path).featured == []


@pytest.mark.parametrize(
    "content, message",
    [
        ("featured: [unclosed\n", "Invalid YAML"),
        ("- just\n- a list\n", "expected a YAML mapping"),
        ("unknown_key: 1\n", "unknown_key"),
        ("featured: not-a-list\n", "featured"),
        ("featured: ['']\n", "non-empty"),
        ("recent_limit: 0\n", "recent_limit"),
        ("exclude_dirs: [docs/drafts]\n", "bare folder names"),
    ],
)
def test_invalid_config_raises(tmp_path, content, message):
    (tmp_path / "docindex.yml").write_text(content)

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_model_rejects_extra_site_fields():
    with pytest.raises(ValueError):
        IndexConfig.model_validate({"site": {"logo": "x.png"}})
