"""Tests for the vaultmap CLI."""

import json
import subprocess
import sys
from pathlib import Path


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "vaultmap.cli", "--root", str(root), *args],
        capture_output=True,
        text=True,
        cwd=root,
    )


def make_notes(root: Path) -> None:
    (root / "DDIA").mkdir()
    (root / "index.md").write_text("---\ntitle: Notes\n---\nWelcome")
    (root / "DDIA" / "Concurrency.md").write_text("""---
id: ddia-concurrency
title: Concurrency
surfaces: [notes]
isPublished: true
publishedAt: 2024-05-01
---

Body
""")
    (root / "Draft.md").write_text("---\ntitle: Draft\nisPublished: false\n---\n")


def test_build_json(tmp_path):
    make_notes(tmp_path)

    result = run_cli(tmp_path, "--json", "build")

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert [e["canonical_route"] for e in data["entries"]] == ["ddia/concurrency", "draft", ""]
    assert data["errors"] == []


def test_build_strict_fails_on_collision(tmp_path):
    (tmp_path / "a.md").write_text("---\nslug: dup\n---\n")
    (tmp_path / "b.md").write_text("---\nslug: dup\n---\n")

    assert run_cli(tmp_path, "build").returncode == 0
    result = run_cli(tmp_path, "build", "--strict")

    assert result.returncode == 1
    assert "[canonical_collision] dup: a, b" in result.stdout


def test_check(tmp_path):
    make_notes(tmp_path)
    assert run_cli(tmp_path, "check").returncode == 0

    (tmp_path / "ddia-concurrency.md").write_text("Clash")
    result = run_cli(tmp_path, "check")

    assert result.returncode == 1
    assert "Notes manifest validation failed:" in result.stderr
    assert "[alias_canonical_conflict]" in result.stderr


def test_routes_with_aliases(tmp_path):
    make_notes(tmp_path)

    result = run_cli(tmp_path, "routes", "--aliases")

    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert "/notes/ddia/concurrency\tddia-concurrency" in lines
    assert "/notes/\tindex" in lines
    assert "/notes/ddia-concurrency -> /notes/ddia/concurrency" in lines


def test_ls_published_and_surface(tmp_path):
    make_notes(tmp_path)

    published = json.loads(run_cli(tmp_path, "--json", "ls", "--published").stdout)
    assert [e["id"] for e in published] == ["ddia-concurrency"]

    on_notes = json.loads(run_cli(tmp_path, "--json", "ls", "--surface", "notes").stdout)
    assert [e["id"] for e in on_notes] == ["ddia-concurrency"]


def test_show_by_id_and_route(tmp_path):
    make_notes(tmp_path)

    by_id = run_cli(tmp_path, "show", "ddia-concurrency", "--body")
    assert by_id.returncode == 0
    data = json.loads(by_id.stdout)
    assert data["canonical_route"] == "ddia/concurrency"
    assert data["body"] == "\nBody\n"

    by_route = json.loads(run_cli(tmp_path, "show", "--route", "/ddia/concurrency/").stdout)
    assert by_route["id"] == "ddia-concurrency"
    assert "body" not in by_route

    missing = run_cli(tmp_path, "show", "nope")
    assert missing.returncode == 1
    assert "No entry with id 'nope'" in missing.stderr


def test_export(tmp_path):
    notes = tmp_path / "notes"
    notes.mkdir()
    make_notes(notes)
    out = tmp_path / "out"

    result = run_cli(notes, "export", "--out", str(out), "--prefix", "/garden")

    assert result.returncode == 0
    assert (out / "manifest.json").exists()
    assert (out / "_redirects").read_text(encoding="utf-8") == (
        "/garden/ddia-concurrency /garden/ddia/concurrency 301\n"
    )


def test_missing_root(tmp_path):
    result = subprocess.run(
        [sys.executable, "-m", "vaultmap.cli", "--root", str(tmp_path / "missing"), "build"],
        capture_output=True,
        text=True,
        cwd=tmp_path,
    )

    assert result.returncode == 1
    assert result.stderr.startswith("Error:")


def test_routes_resolve_names(tmp_path):
    make_notes(tmp_path)

    result = run_cli(tmp_path, "--json", "routes", "--resolve", "Concurrency", "--resolve", "Unknown Note")

    assert result.returncode == 0
    assert json.loads(result.stdout) == {
        "Concurrency": "concurrency",
        "Unknown Note": "unknown-note",
    }

    plain = run_cli(tmp_path, "routes", "--resolve", "Draft")
    assert plain.stdout.splitlines() == ["Draft\tdraft"]
