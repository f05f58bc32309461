from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

from grove.content.markdown_tree import MarkdownTree
from grove.data_primitives.document import Document

FIXED_NOW = datetime(2025, 6, 15, 9, 30, tzinfo=UTC)
COMMIT_DATE = "2023-05-01T12:00:00+00:00"


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep GROVE_* variables and enclosing git repositories out of tests."""
    for key in list(os.environ):
        if key.startswith("GROVE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))


@pytest.fixture
def make_document() -> Callable[..., Document]:
    def _make(
        slug: str,
        *,
        body: str = "",
        frontmatter: dict | None = None,
        title: str | None = None,
        raw_path: str | None = None,
        **kwargs,
    ) -> Document:
        return Document(
            raw_path=raw_path or f"content/{slug}.md",
            slug=slug,
            frontmatter=frontmatter or {},
            tree=MarkdownTree(body),
            title=title if title is not None else slug.rsplit("/", 1)[-1],
            **kwargs,
        )

    return _make


def _git(repo: Path, *args: str, env: dict[str, str] | None = None) -> None:
    subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        env={**os.environ, **(env or {})},
    )


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A repository with ``tracked.md`` committed at COMMIT_DATE."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.email", "author@example.com")
    _git(repo, "config", "user.name", "Author")
    (repo / "tracked.md").write_text("# Tracked\n", encoding="utf-8")
    _git(repo, "add", "tracked.md")
    _git(
        repo,
        "commit",
        "-q",
        "-m",
        "Add tracked note",
        env={"GIT_AUTHOR_DATE": COMMIT_DATE, "GIT_COMMITTER_DATE": COMMIT_DATE},
    )
    return repo


@pytest.fixture
def commit_date() -> datetime:
    return datetime.fromisoformat(COMMIT_DATE)
