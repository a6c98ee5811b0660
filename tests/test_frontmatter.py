"""Tests for frontmatter decoding and the NoteFrontmatter mapping."""

import datetime

from vaultmap.adapters.yaml_codec import YamlFrontmatter
from vaultmap.core.meta import NoteFrontmatter


def test_decode_frontmatter_and_body():
    meta, body = YamlFrontmatter().decode("---\ntitle: Test Note\ntags: [a, b]\n---\n\nContent here")

    assert meta == {"title": "Test Note", "tags": ["a", "b"]}
    assert body == "\nContent here"


def test_decode_without_frontmatter():
    text = "# Just a heading\n\nBody"
    meta, body = YamlFrontmatter().decode(text)

    assert meta == {}
    assert body == text


def test_decode_empty_block():
    meta, body = YamlFrontmatter().decode("---\n---\nContent")

    assert meta == {}
    assert body == "Content"


def test_decode_crlf_and_bom():
    meta, body = YamlFrontmatter().decode("\ufeff---\r\nid: x\r\n---\r\nBody")

    assert meta == {"id": "x"}
    assert body == "Body"


def test_decode_frontmatter_only():
    meta, body = YamlFrontmatter().decode("---\nid: only\n---")

    assert meta == {"id": "only"}
    assert body == ""


def test_decode_invalid_yaml_keeps_body():
    meta, body = YamlFrontmatter().decode("---\nkey: [broken\n---\nBody")

    assert meta == {}
    assert body == "Body"


def test_decode_unclosed_block_is_body():
    text = "---\nnot closed\n\nBody"
    meta, body = YamlFrontmatter().decode(text)

    assert meta == {}
    assert body == text


def test_decode_preserves_dates():
    meta, _ = YamlFrontmatter().decode("---\npublishedAt: 2024-01-02\n---\n")

    assert meta["publishedAt"] == datetime.date(2024, 1, 2)


def test_note_frontmatter_preserves_raw_keys():
    fm = NoteFrontmatter({"title": " Title ", "custom/key": 3})

    assert fm["custom/key"] == 3
    assert fm.title == "Title"
    assert len(fm) == 2
    assert dict(fm) == {"title": " Title ", "custom/key": 3}

    fm["slug"] = "new"
    assert fm.slug == "new"
    del fm["slug"]
    assert "slug" not in fm


def test_note_frontmatter_typed_accessors():
    fm = NoteFrontmatter({
        "id": 42,
        "isPublished": False,
        "showToc": True,
        "tags": ["go", 1],
        "type": "essay",
        "surfaces": ["notes", "home"],
        "coverImage": "cover.png",
        "publishedAt": "2024-01-01",
    })

    assert fm.id == "42"
    assert fm.is_published is False
    assert fm.show_toc is True
    assert fm.tags == ["go", "1"]
    assert fm.type == ["essay"]
    assert fm.surfaces == ["notes", "home"]
    assert fm.cover_image == "cover.png"
    assert fm.published_at == "2024-01-01"
    assert fm.updated_at is None


def test_note_frontmatter_missing_and_wrong_types():
    fm = NoteFrontmatter({"title": ["not", "text"], "isPublished": "yes", "surfaces": 3, "id": True})

    assert fm.title is None
    assert fm.is_published is None
    assert fm.surfaces == []
    assert fm.id is None
    assert NoteFrontmatter().tags == []
