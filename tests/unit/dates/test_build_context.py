from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from grove.dates.context import BuildContext
from grove.exceptions import RepositoryNotFoundError
from grove.utils import git as git_module


@pytest.fixture
def discovery_calls(monkeypatch, tmp_path):
    calls: list[Path] = []

    def fake_discover(start: Path, *, timeout: float = 5.0) -> Path:
        calls.append(start)
        return tmp_path.resolve()

    monkeypatch.setattr(git_module, "discover_repository_root", fake_discover)
    return calls


def test_repository_is_discovered_once_per_root(tmp_path, discovery_calls):
    (tmp_path / "a").mkdir()
    (tmp_path / "b" / "c").mkdir(parents=True)
    context = BuildContext(cwd=tmp_path)

    first = context.repository_for(tmp_path / "a" / "one.md")
    second = context.repository_for(tmp_path / "b" / "c" / "two.md")

    assert first is second
    assert len(discovery_calls) == 1
    assert list(context.repositories) == [tmp_path.resolve()]


def test_concurrent_lookups_share_one_discovery(tmp_path, discovery_calls):
    context = BuildContext(cwd=tmp_path)

    with ThreadPoolExecutor(max_workers=16) as pool:
        handles = list(pool.map(lambda i: context.repository_for(tmp_path / f"{i}.md"), range(64)))

    assert len(discovery_calls) == 1
    assert all(handle is handles[0] for handle in handles)


def test_missing_repository_is_remembered(monkeypatch, tmp_path):
    calls: list[Path] = []

    def fake_discover(start: Path, *, timeout: float = 5.0) -> Path:
        calls.append(start)
        raise RepositoryNotFoundError(str(start))

    monkeypatch.setattr(git_module, "discover_repository_root", fake_discover)
    context = BuildContext(cwd=tmp_path)

    for _ in range(3):
        with pytest.raises(RepositoryNotFoundError):
            context.repository_for(tmp_path / "note.md")

    assert len(calls) == 1
    assert context.repositories == {}


def test_real_discovery(git_repo):
    context = BuildContext(cwd=git_repo)
    repository = context.repository_for(git_repo / "tracked.md")
    assert repository.root == git_repo.resolve()


def test_clock_is_injectable(tmp_path, fixed_now):
    context = BuildContext(cwd=tmp_path, clock=lambda: fixed_now)
    assert context.now() == fixed_now
