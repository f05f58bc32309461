"""Per-build context shared by every document's date resolution."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from grove.exceptions import RepositoryNotFoundError
from grove.utils.datetime_utils import utcnow
from grove.utils.git import DEFAULT_GIT_TIMEOUT, GitRepository

logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """State owned by a single build.

    Holds the working directory relative source paths are resolved against, the
    clock used for "now" fallbacks, and the registry of discovered git
    repositories keyed by work-tree root. ``repository_for`` is a get-or-create
    guarded by a lock, so each root is discovered at most once even when
    documents resolve concurrently. Discovered handles are read-only.
    """

    cwd: Path = field(default_factory=Path.cwd)
    git_timeout: float = DEFAULT_GIT_TIMEOUT
    clock: Callable[[], datetime] = utcnow
    _repositories: dict[Path, GitRepository] = field(default_factory=dict, init=False, repr=False)
    _untracked_dirs: set[Path] = field(default_factory=set, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def repositories(self) -> dict[Path, GitRepository]:
        with self._lock:
            return dict(self._repositories)

    def _known_repository(self, directory: Path) -> GitRepository | None:
        # Longest matching root wins so a nested repository shadows its parent.
        best: GitRepository | None = None
        for root, repository in self._repositories.items():
            if directory == root or root in directory.parents:
                if best is None or len(root.parts) > len(best.root.parts):
                    best = repository
        return best

    def repository_for(self, path: Path) -> GitRepository:
        """Return the repository enclosing ``path``, discovering it on first use.

        Raises:
            RepositoryNotFoundError: If no work tree encloses ``path``.

        """
        directory = (path if path.is_dir() else path.parent).resolve()
        with self._lock:
            known = self._known_repository(directory)
            if known is not None:
                return known
            if directory in self._untracked_dirs:
                raise RepositoryNotFoundError(str(path))

            try:
                repository = GitRepository.discover(directory, timeout=self.git_timeout)
            except RepositoryNotFoundError:
                self._untracked_dirs.add(directory)
                raise

            logger.debug("Discovered git repository at %s", repository.root)
            return self._repositories.setdefault(repository.root, repository)

    def now(self) -> datetime:
        return self.clock()
