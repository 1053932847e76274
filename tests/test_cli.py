"""Tests for the docindex command line entry point."""
import logging

from docindex.cli import main
from docindex.cli.main import configure_logging
from docindex import vcs


def _no_git(monkeypatch):
    monkeypatch.setattr(vcs, "_run_git", lambda args, cwd, timeout: None)


def test_generates_index_and_reports(sample_tree, monkeypatch, capsys):
    _no_git(monkeypatch)

    exit_code = main([str(sample_tree)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert (sample_tree / "index.html").exists()
    assert "index.html generated successfully!" in out
    assert "Found 5 articles in 4 categories" in out
    assert "5 article(s) dated from the current date" in out


def test_defaults_to_current_directory(sample_tree, monkeypatch, capsys):
    _no_git(monkeypatch)
    monkeypatch.chdir(sample_tree)

    assert main([]) == 0
    assert (sample_tree / "index.html").exists()


def test_quiet_suppresses_summary(sample_tree, monkeypatch, capsys):
    _no_git(monkeypatch)

    assert main([str(sample_tree), "--quiet"]) == 0
    assert capsys.readouterr().out == ""


def test_missing_root_exits_non_zero(tmp_path, capsys):
    exit_code = main([str(tmp_path / "missing")])

    err = capsys.readouterr().err
    assert exit_code == 1
    assert "Error: Content root not found" in err
    assert not (tmp_path / "missing" / "index.html").exists()


def test_strict_dates_fail_without_history(sample_tree, monkeypatch, capsys):
    _no_git(monkeypatch)

    exit_code = main([str(sample_tree), "--strict-dates"])

    assert exit_code == 1
    assert "No git history" in capsys.readouterr().err
    assert not (sample_tree / "index.html").exists()


def test_invalid_config_exits_non_zero(sample_tree, capsys):
    (sample_tree / "docindex.yml").write_text("featured: [unclosed\n")

    assert main([str(sample_tree)]) == 1
    assert "Invalid YAML" in capsys.readouterr().err


def test_custom_output(sample_tree, tmp_path, monkeypatch):
    _no_git(monkeypatch)
    out = tmp_path / "public" / "home.html"
    out.parent.mkdir()

    assert main([str(sample_tree), "--output", str(out), "-q"]) == 0
    assert out.exists()


def test_configure_logging_levels():
    configure_logging(0)
    logger = logging.getLogger("docindex")
    assert logger.level == logging.WARNING
    configure_logging(2)
    assert logger.level == logging.DEBUG
    # handler is installed once
    assert len(logger.handlers) == 1
