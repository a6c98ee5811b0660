"""Tests for the static routes export."""

import json

import pytest

from vaultmap.export.static import StaticRoutesExporter, route_url
from vaultmap.manifest import ManifestValidationError, build_note_manifest


def make_notes(root):
    (root / "DDIA").mkdir(parents=True)
    (root / "index.md").write_text("---\ntitle: Notes\n---\nWelcome")
    (root / "DDIA" / "index.md").write_text("# DDIA\n")
    (root / "DDIA" / "Concurrency.md").write_text(
        "---\nid: ddia-concurrency\ntitle: Concurrency\nsurfaces: [notes]\n---\nBody text"
    )


def test_route_url():
    assert route_url("/notes", "ddia/concurrency") == "/notes/ddia/concurrency"
    assert route_url("/notes/", "") == "/notes/"
    assert route_url("", "x") == "/x"


def test_export_writes_manifest_and_redirects(tmp_path):
    notes = tmp_path / "notes"
    make_notes(notes)
    out = tmp_path / "out"

    StaticRoutesExporter(build_note_manifest(notes), out).export_all()

    data = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
    assert sorted(e["canonical_route"] for e in data["entries"]) == ["", "ddia", "ddia/concurrency"]
    assert all("body" not in e for e in data["entries"])

    redirects = (out / "_redirects").read_text(encoding="utf-8").splitlines()
    assert redirects == ["/notes/ddia-concurrency /notes/ddia/concurrency 301"]
    assert not (out / "pages").exists()


def test_export_pages(tmp_path):
    notes = tmp_path / "notes"
    make_notes(notes)
    out = tmp_path / "out"

    StaticRoutesExporter(build_note_manifest(notes), out, write_pages=True).export_all()

    assert (out / "pages" / "index.md").read_text(encoding="utf-8") == "# Notes\n\nWelcome"
    # Existing heading is kept as-is
    assert (out / "pages" / "ddia" / "index.md").read_text(encoding="utf-8") == "# DDIA\n"
    assert (out / "pages" / "ddia" / "concurrency" / "index.md").read_text(
        encoding="utf-8"
    ) == "# Concurrency\n\nBody text"


def test_export_refuses_invalid_manifest(tmp_path):
    notes = tmp_path / "notes"
    notes.mkdir()
    (notes / "a.md").write_text("---\nslug: dup\n---\n")
    (notes / "b.md").write_text("---\nslug: dup\n---\n")
    out = tmp_path / "out"

    with pytest.raises(ManifestValidationError):
        StaticRoutesExporter(build_note_manifest(notes), out).export_all()

    assert not out.exists()
