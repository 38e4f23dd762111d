from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from gaplint.core.context import BUNDLED_SCHEMA
from gaplint.core.schema import MetadataSchema, load_metadata_schema
from helpers import VALID_METADATA

_ALLOWED_MARKERS = {"unit", "integration"}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(scope="session")
def metadata_schema() -> MetadataSchema:
    return load_metadata_schema(BUNDLED_SCHEMA)


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    (repo / ".git").mkdir(parents=True)
    (repo / "docs").mkdir()
    return repo


@pytest.fixture
def gap_factory(repo_root: Path) -> Callable[..., Path]:
    def _make(
        name: str = "GAP-0001",
        metadata: str | None = VALID_METADATA,
        readme: bool = True,
        root: Path | None = None,
    ) -> Path:
        gap = (root or repo_root) / name
        gap.mkdir(parents=True)
        if readme:
            (gap / "README.md").write_text(f"# {name}\n", encoding="utf-8")
        if metadata is not None:
            (gap / "metadata.yml").write_text(metadata, encoding="utf-8")
        return gap

    return _make
