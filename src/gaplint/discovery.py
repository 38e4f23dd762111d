from __future__ import annotations

from pathlib import Path

GAP_PREFIX = "GAP-"


def discover_gap_directories(repo_root: Path) -> list[Path]:
    """Immediate subdirectories of `repo_root` named `GAP-*`, sorted by name.

    Symlinks are skipped even when they point at a directory.
    """
    return sorted(
        (entry for entry in repo_root.iterdir() if entry.name.startswith(GAP_PREFIX) and entry.is_dir() and not entry.is_symlink()),
        key=lambda entry: entry.name,
    )
