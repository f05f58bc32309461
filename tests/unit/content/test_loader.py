import logging

import pytest

from grove.constants import InaccessiblePolicy
from grove.content.loader import iter_source_files, load_document, load_documents
from grove.exceptions import ContentLoadError
from grove.listing.aggregator import build_folder_listing


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    files = {
        "index.md": "---\ntitle: Home\n---\nWelcome to the garden.\n",
        "Notes/index.md": "---\ndescription: Everything I write down\n---\n",
        "Notes/First Note.md": "---\ndate: 2024-01-01\ntags: [a]\n---\n# Heading\n\nBody text.\n",
        "Notes/Deep/leaf.markdown": "Leaf body\n",
        "private/secret.md": "hidden\n",
        ".obsidian/workspace.md": "hidden\n",
        "Notes/image.png": "not markdown",
    }
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


def test_iter_source_files_skips_ignored_and_non_markdown(content_dir):
    found = [p.relative_to(content_dir).as_posix() for p in iter_source_files(content_dir, ["private", ".obsidian"])]
    assert found == ["Notes/Deep/leaf.markdown", "Notes/First Note.md", "Notes/index.md", "index.md"]


def test_load_documents(content_dir, tmp_path):
    docs = {d.slug: d for d in load_documents(content_dir, cwd=tmp_path, ignore_patterns=["private", ".obsidian"])}

    assert set(docs) == {"index", "notes/index", "notes/first-note", "notes/deep/leaf"}

    home = docs["index"]
    assert home.title == "Home"
    assert home.canonical_slug == ""
    assert home.is_folder_index
    assert home.raw_path == "content/index.md"

    note = docs["notes/first-note"]
    assert note.title == "First Note"
    assert note.frontmatter["tags"] == ["a"]
    assert not note.has_empty_tree()
    assert note.description.startswith("Heading Body text.")
    assert note.dates is None

    folder = docs["notes/index"]
    assert folder.has_empty_tree()
    assert folder.description == "Everything I write down"


def test_invalid_frontmatter_is_ignored(tmp_path, caplog):
    root = tmp_path / "content"
    root.mkdir()
    (root / "broken.md").write_text("---\ntitle: [unclosed\n---\nbody\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        document = load_document(root / "broken.md", root)

    assert document.frontmatter == {}
    assert document.title == "broken"
    assert "Failed to parse frontmatter" in caplog.text


def test_duplicate_slugs_keep_first(tmp_path, caplog):
    root = tmp_path / "content"
    root.mkdir()
    (root / "Hello World.md").write_text("one", encoding="utf-8")
    (root / "hello-world.md").write_text("two", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        docs = load_documents(root)

    assert [d.slug for d in docs] == ["hello-world"]
    assert docs[0].title == "Hello World"
    assert "already used" in caplog.text


def test_unreadable_file_raises_content_load_error(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    (root / "latin1.md").write_bytes(b"caf\xe9")
    with pytest.raises(ContentLoadError):
        load_document(root / "latin1.md", root)


@pytest.fixture
def content_with_bad_bytes(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    (root / "good.md").write_text("fine", encoding="utf-8")
    (root / "bad.md").write_bytes(b"\xff\xfe broken")
    return root


def test_unreadable_files_are_skipped_by_default(content_with_bad_bytes, caplog):
    with caplog.at_level(logging.WARNING, logger="grove.content.loader"):
        docs = load_documents(content_with_bad_bytes)

    assert [d.slug for d in docs] == ["good"]
    assert "bad.md" in caplog.text


def test_unreadable_files_fail_when_configured(content_with_bad_bytes):
    with pytest.raises(ContentLoadError):
        load_documents(content_with_bad_bytes, on_error=InaccessiblePolicy.FAIL)


@pytest.mark.parametrize("page_name", ["b.md", "B.md"])
def test_folder_index_wins_over_same_named_page(tmp_path, caplog, page_name):
    root = tmp_path / "content"
    (root / "a" / "b").mkdir(parents=True)
    (root / "a" / page_name).write_text("page body", encoding="utf-8")
    (root / "a" / "b" / "index.md").write_text("folder intro", encoding="utf-8")
    (root / "a" / "c.md").write_text("sibling", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="grove.content.loader"):
        docs = load_documents(root)

    by_slug = {d.canonical_slug: d for d in docs}
    assert sorted(by_slug) == ["a/b", "a/c"]
    assert by_slug["a/b"].is_folder_index
    assert "already used" in caplog.text

    listing = build_folder_listing("a", docs)
    assert sorted(entry.slug for entry in listing.children) == ["a/b", "a/c"]
    assert listing.item_count == 2


def test_non_latin_file_names_are_all_loaded(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    for name in ("메모.md", "일기.md", "日記.md"):
        (root / name).write_text(f"# {name}\n", encoding="utf-8")

    docs = load_documents(root)

    assert sorted(d.slug for d in docs) == sorted(["메모", "일기", "日記"])
