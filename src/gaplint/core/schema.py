"""Structural validation of metadata records against the JSON Schema document.

The schema is read and compiled once per process into a `MetadataSchema`,
which is immutable and safe to share across every directory validated.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG


@dataclass(frozen=True)
class SchemaIssue:
    path: str
    message: str

    def render(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


@dataclass(frozen=True)
class MetadataSchema:
    source: Path
    validator: Draft202012Validator

    def validate(self, payload: Any) -> tuple[bool, list[SchemaIssue]]:
        issues = [
            SchemaIssue(_pointer(err.absolute_path), err.message)
            for err in sorted(self.validator.iter_errors(payload), key=lambda e: _location_key(e.absolute_path))
        ]
        return (not issues), issues


def _location_key(parts: Any) -> list[tuple[int, int | str]]:
    return [(0, p) if isinstance(p, int) else (1, str(p)) for p in parts]


def _pointer(parts: Any) -> str:
    tokens = [str(p).replace("~", "~0").replace("/", "~1") for p in parts]
    return "".join(f"/{t}" for t in tokens)


def load_metadata_schema(schema_path: Path) -> MetadataSchema:
    try:
        raw = schema_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScriptError(f"unable to read metadata schema {schema_path}: {exc}", ERR_CONFIG, "schema_error") from exc
    try:
        schema = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ScriptError(f"metadata schema {schema_path} is not valid JSON: {exc}", ERR_CONFIG, "schema_error") from exc
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as exc:
        raise ScriptError(f"metadata schema {schema_path} is invalid: {exc.message}", ERR_CONFIG, "schema_error") from exc
    return MetadataSchema(source=schema_path, validator=Draft202012Validator(schema))


def format_schema_issues(issues: list[SchemaIssue]) -> str:
    return "\n".join(issue.render() for issue in issues)
