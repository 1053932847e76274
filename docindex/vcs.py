"""Document dates from git history.

Each article is dated by its most recent commit. When git cannot answer
(no repository, shallow clone without the file's history, git not
installed) the resolver falls back to today's date and records that it
did so, because such dates make the generated index non-reproducible.
"""
from __future__ import annotations

import datetime as dt
import logging
import subprocess
from pathlib import Path, PurePosixPath
from typing import Literal, Optional, Protocol

from .errors import DateResolutionError

logger = logging.getLogger(__name__)

DateSource = Literal["git", "fallback"]

# Timeout in seconds for a single git invocation
DEFAULT_TIMEOUT = 10


class DateResolver(Protocol):
    def __call__(self, rel_path: PurePosixPath | str) -> tuple[str, DateSource]: ...


def _run_git(args: list[str], cwd: Path, timeout: int) -> Optional[str]:
    """Run a git command and return stripped stdout, or None on any failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            timeout=timeout,
            shell=False,
        )
    except subprocess.TimeoutExpired:
        logger.debug("git %s timed out after %s seconds", args, timeout)
        return None
    except FileNotFoundError:
        logger.debug("git executable not found")
        return None
    except PermissionError:
        logger.debug("Permission denied running git")
        return None

    if result.returncode != 0:
        logger.debug("git %s exited with %d", args, result.returncode)
        return None
    return result.stdout.decode("utf-8", errors="replace").strip()


class GitDateResolver:
    """Resolve a document's last-change date from ``git log``.

    Args:
        root: Content root; git commands run with this as working directory
        today: Date used when history is unavailable (default: local today)
        strict: Raise DateResolutionError instead of falling back
        timeout: Per-command timeout in seconds
    """

    def __init__(
        self,
        root: str | Path,
        today: Optional[dt.date] = None,
        strict: bool = False,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.root = Path(root)
        self.today = today or dt.date.today()
        self.strict = strict
        self.timeout = timeout
        self.fallback_count = 0
        self._in_work_tree: Optional[bool] = None

    @property
    def in_work_tree(self) -> bool:
        if self._in_work_tree is None:
            output = _run_git(["rev-parse", "--is-inside-work-tree"], self.root, self.timeout)
            self._in_work_tree = output == "true"
            if not self._in_work_tree:
                logger.debug("%s is not inside a git work tree", self.root)
        return self._in_work_tree

    def lookup(self, rel_path: PurePosixPath | str) -> Optional[str]:
        """Return the ISO date of the last commit touching rel_path, if any."""
        if not self.in_work_tree:
            return None
        output = _run_git(
            ["log", "-1", "--format=%ci", "--", str(rel_path)],
            self.root,
            self.timeout,
        )
        if not output:
            return None
        # %ci looks like "2024-05-01 12:34:56 +0200"
        return output.split()[0]

    def __call__(self, rel_path: PurePosixPath | str) -> tuple[str, DateSource]:
        date = self.lookup(rel_path)
        if date:
            return date, "git"

        if self.strict:
            raise DateResolutionError(f"No git history for {rel_path}; refusing to use today's date")
        if self.fallback_count == 0:
            logger.warning(
                "No git history for %s; dating it %s. The index will not be reproducible.",
                rel_path,
                self.today.isoformat(),
            )
        else:
            logger.debug("No git history for %s; using fallback date", rel_path)
        self.fallback_count += 1
        return self.today.isoformat(), "fallback"


class FixedDateResolver:
    """Resolver that dates every document from a fixed mapping.

    Paths missing from the mapping get ``default`` and count as fallbacks.
    Useful for previews and for deterministic tests.
    """

    def __init__(self, dates: Optional[dict[str, str]] = None, default: str = "1970-01-01"):
        self.dates = dict(dates or {})
        self.default = default
        self.fallback_count = 0

    def __call__(self, rel_path: PurePosixPath | str) -> tuple[str, DateSource]:
        key = str(rel_path)
        if key in self.dates:
            return self.dates[key], "git"
        self.fallback_count += 1
        return self.default, "fallback"
