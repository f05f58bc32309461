"""Git-related utility functions."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from grove.exceptions import GitHistoryUnavailableError, RepositoryNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_GIT_TIMEOUT = 5.0


def _run_git(args: list[str], *, cwd: Path, timeout: float) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
        timeout=timeout,
    )
    return result.stdout.strip()


def discover_repository_root(start: Path, *, timeout: float = DEFAULT_GIT_TIMEOUT) -> Path:
    """Return the top-level directory of the git work tree enclosing ``start``.

    Raises:
        RepositoryNotFoundError: If ``start`` is not inside a work tree or git is missing.

    """
    directory = start if start.is_dir() else start.parent
    try:
        toplevel = _run_git(["rev-parse", "--show-toplevel"], cwd=directory, timeout=timeout)
    except (
        subprocess.CalledProcessError,
        subprocess.TimeoutExpired,
        FileNotFoundError,
        NotADirectoryError,
    ) as exc:
        raise RepositoryNotFoundError(str(start)) from exc
    if not toplevel:
        raise RepositoryNotFoundError(str(start))
    return Path(toplevel).resolve()


@dataclass(frozen=True, slots=True)
class GitRepository:
    """Read-only handle on a discovered git work tree.

    Instances are immutable and safe to share between threads.
    """

    root: Path
    timeout: float = DEFAULT_GIT_TIMEOUT

    @classmethod
    def discover(cls, start: Path, *, timeout: float = DEFAULT_GIT_TIMEOUT) -> GitRepository:
        return cls(root=discover_repository_root(start, timeout=timeout), timeout=timeout)

    def relative_path(self, file_path: Path) -> Path:
        try:
            return file_path.resolve().relative_to(self.root)
        except ValueError as exc:
            raise GitHistoryUnavailableError(str(file_path), "outside of repository") from exc

    def latest_commit_time(self, file_path: Path) -> datetime:
        """Committer time of the most recent commit touching ``file_path``.

        Raises:
            GitHistoryUnavailableError: If the file is untracked or git fails.

        """
        relative = self.relative_path(file_path)
        try:
            output = _run_git(
                ["log", "-1", "--format=%ct", "--", relative.as_posix()],
                cwd=self.root,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise GitHistoryUnavailableError(str(file_path), "git log timed out") from exc
        except (subprocess.CalledProcessError, FileNotFoundError) as exc:
            raise GitHistoryUnavailableError(str(file_path), "git log failed") from exc

        if not output:
            raise GitHistoryUnavailableError(str(file_path))
        return datetime.fromtimestamp(int(output), tz=UTC)
