from __future__ import annotations

from pathlib import Path

import pytest

from gaplint.discovery import discover_gap_directories


def test_only_gap_prefixed_directories_are_returned(repo_root: Path) -> None:
    for name in ("GAP-0002", "GAP-0001", "GAP-draft", "notes", "gap-0003"):
        (repo_root / name).mkdir()
    (repo_root / "GAP-0004").write_text("not a directory", encoding="utf-8")

    found = discover_gap_directories(repo_root)

    assert [p.name for p in found] == ["GAP-0001", "GAP-0002", "GAP-draft"]
    assert all(p.parent == repo_root for p in found)


def test_nested_gap_directories_are_ignored(repo_root: Path) -> None:
    (repo_root / "docs" / "GAP-0001").mkdir()
    assert discover_gap_directories(repo_root) == []


def test_symlinked_gap_directories_are_skipped(repo_root: Path, tmp_path: Path) -> None:
    outside = tmp_path / "elsewhere"
    outside.mkdir()
    (repo_root / "GAP-0001").mkdir()
    try:
        (repo_root / "GAP-0009").symlink_to(outside, target_is_directory=True)
    except OSError:
        pytest.skip("symlinks unavailable")
    assert [p.name for p in discover_gap_directories(repo_root)] == ["GAP-0001"]
