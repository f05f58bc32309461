from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from grove.constants import DateSource
from grove.dates.context import BuildContext
from grove.dates.sources import (
    DateCandidates,
    WarningKind,
    filesystem_candidates,
    first_non_empty,
    frontmatter_candidates,
    git_candidates,
    is_empty,
)
from grove.exceptions import SourceFileInaccessibleError


@pytest.mark.parametrize("value", [None, "", "  ", [], 0, False])
def test_is_empty(value):
    assert is_empty(value)


@pytest.mark.parametrize("value", ["2024-01-01", 1700000000, date(2024, 1, 1), "garbage"])
def test_is_not_empty(value):
    assert not is_empty(value)


def test_first_non_empty():
    assert first_non_empty([None, "", "b", "c"]) == "b"
    assert first_non_empty([None, ""]) is None


def test_frontmatter_candidates_reads_known_keys():
    candidates = frontmatter_candidates(
        {
            "date": "2024-01-01",
            "lastmod": "",
            "updated": "2024-02-01",
            "last-modified": "2024-02-15",
            "publishDate": "2024-03-01",
            "tags": ["a", "b"],
            "cssclasses": ["wide"],
        }
    )
    assert candidates == DateCandidates(
        DateSource.FRONTMATTER,
        created="2024-01-01",
        modified="2024-02-01",
        published="2024-03-01",
    )


def test_frontmatter_modified_aliases_precedence():
    frontmatter = {"last-modified": "2024-03-03", "updated": "2024-02-02", "lastmod": "2024-01-01"}
    assert frontmatter_candidates(frontmatter).modified == "2024-01-01"
    del frontmatter["lastmod"]
    assert frontmatter_candidates(frontmatter).modified == "2024-02-02"
    del frontmatter["updated"]
    assert frontmatter_candidates(frontmatter).modified == "2024-03-03"


@pytest.mark.parametrize("frontmatter", [None, {}, {"title": "No dates"}])
def test_frontmatter_candidates_without_dates(frontmatter):
    assert frontmatter_candidates(frontmatter) == DateCandidates(DateSource.FRONTMATTER)


def test_filesystem_candidates(tmp_path):
    note = tmp_path / "note.md"
    note.write_text("hello", encoding="utf-8")

    candidates = filesystem_candidates(note)

    assert candidates.source is DateSource.FILESYSTEM
    assert candidates.created.tzinfo is UTC
    assert candidates.modified == datetime.fromtimestamp(note.stat().st_mtime, tz=UTC)
    assert candidates.created <= candidates.modified
    assert candidates.published is None


def test_filesystem_candidates_missing_file_is_fatal(tmp_path):
    with pytest.raises(SourceFileInaccessibleError) as excinfo:
        filesystem_candidates(tmp_path / "missing.md")
    assert "missing.md" in str(excinfo.value)


def test_git_candidates_outside_repository(tmp_path):
    note = tmp_path / "loose" / "note.md"
    note.parent.mkdir()
    note.write_text("x", encoding="utf-8")

    candidates, warnings = git_candidates(note, "loose/note.md", BuildContext(cwd=tmp_path))

    assert candidates == DateCandidates(DateSource.GIT)
    assert [w.kind for w in warnings] == [WarningKind.NO_REPOSITORY]


def test_git_candidates_untracked_file(git_repo):
    note = git_repo / "draft.md"
    note.write_text("draft", encoding="utf-8")

    candidates, warnings = git_candidates(note, "draft.md", BuildContext(cwd=git_repo))

    assert candidates.modified is None
    assert len(warnings) == 1
    assert warnings[0].kind is WarningKind.UNTRACKED
    assert "draft.md isn't yet tracked by git" in warnings[0].message


def test_git_candidates_tracked_file(git_repo, commit_date):
    candidates, warnings = git_candidates(
        git_repo / "tracked.md", "tracked.md", BuildContext(cwd=git_repo)
    )

    assert warnings == []
    assert candidates.modified == commit_date
