"""Structural checks for a single GAP directory.

Every check returns a `Result`; the first `Err` ends validation of the
directory and is handed back to the caller untouched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..core.result import Err, Ok, Result
from ..core.schema import MetadataSchema, format_schema_issues
from ..core.yaml_utils import parse_yaml, yaml_error_message
from ..errors import ScriptError
from ..exit_codes import ERR_USAGE
from .semantic import SEMANTIC_CHECKS

README_NAME = "README.md"
METADATA_NAME = "metadata.yml"

_GAP_ZERO = "GAP-0"
_GAP_NAME = re.compile(r"^GAP-\d{4}$", re.ASCII)


@dataclass(frozen=True)
class GapFailure:
    gap_name: str
    message: str

    def render(self) -> str:
        return f"{self.gap_name}: {self.message}"


def gap_name_for(dir_path: Path) -> str:
    return dir_path.name or dir_path.resolve().name


def is_valid_gap_name(name: str) -> bool:
    return name == _GAP_ZERO or bool(_GAP_NAME.match(name))


def require_directory(dir_path: Path) -> None:
    if not dir_path.exists():
        raise ScriptError(f"Directory does not exist: {dir_path}", ERR_USAGE, "usage_error")
    if not dir_path.is_dir():
        raise ScriptError(f"Not a directory: {dir_path}", ERR_USAGE, "usage_error")


def check_directory_naming(dir_path: Path) -> Result[str, GapFailure]:
    name = gap_name_for(dir_path)
    if is_valid_gap_name(name):
        return Ok(name)
    return Err(GapFailure(name, "Invalid directory name format. Expected GAP-NNNN (4 digits, zero-padded)"))


def check_readme_exists(dir_path: Path, gap_name: str) -> Result[Path, GapFailure]:
    readme = dir_path / README_NAME
    if not readme.exists():
        return Err(GapFailure(gap_name, f"No {README_NAME} file found"))
    return Ok(readme)


def load_metadata(dir_path: Path, gap_name: str) -> Result[Mapping[str, Any], GapFailure]:
    metadata_path = dir_path / METADATA_NAME
    if not metadata_path.exists():
        return Err(GapFailure(gap_name, f"No {METADATA_NAME} file found"))
    try:
        content = metadata_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return Err(GapFailure(gap_name, f"Failed to read {METADATA_NAME}: {exc}"))
    try:
        metadata = parse_yaml(content)
    except yaml.YAMLError as exc:
        return Err(GapFailure(gap_name, f"Invalid YAML in {METADATA_NAME}: {yaml_error_message(exc)}"))
    if not isinstance(metadata, Mapping):
        return Err(GapFailure(gap_name, f"{METADATA_NAME} must contain a valid YAML object"))
    return Ok(metadata)


def check_metadata(dir_path: Path, gap_name: str, schema: MetadataSchema) -> Result[Mapping[str, Any], GapFailure]:
    loaded = load_metadata(dir_path, gap_name)
    if isinstance(loaded, Err):
        return loaded
    metadata = loaded.value

    valid, issues = schema.validate(metadata)
    if not valid:
        return Err(GapFailure(gap_name, f"{METADATA_NAME} validation failed:\n\n{format_schema_issues(issues)}"))

    for check in SEMANTIC_CHECKS:
        message = check(metadata)
        if message is not None:
            return Err(GapFailure(gap_name, message))
    return Ok(metadata)


def validate_gap_directory(dir_path: Path, schema: MetadataSchema) -> Result[str, GapFailure]:
    """Run naming, README and metadata checks in order, stopping at the first failure.

    Returns `Ok(gap_name)` on success. Raises `ScriptError` only when `dir_path`
    is missing or not a directory, which is a usage problem rather than a
    property of the GAP.
    """
    require_directory(dir_path)

    named = check_directory_naming(dir_path)
    if isinstance(named, Err):
        return named
    gap_name = named.value

    readme = check_readme_exists(dir_path, gap_name)
    if isinstance(readme, Err):
        return readme

    metadata = check_metadata(dir_path, gap_name, schema)
    if isinstance(metadata, Err):
        return metadata
    return Ok(gap_name)
