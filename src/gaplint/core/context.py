from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ..errors import ScriptError
from ..exit_codes import ERR_USAGE
from .repo_root import default_repo_root

LogFormat = Literal["text", "json"]

BUNDLED_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "metadata.schema.json"
REPO_SCHEMA_NAME = "metadata.schema.json"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class RunContext:
    repo_root: Path
    schema_path: Path
    log_format: LogFormat
    verbose: bool
    quiet: bool

    @property
    def log_json(self) -> bool:
        return self.log_format == "json"

    @classmethod
    def from_args(
        cls,
        repo_root: str | None = None,
        schema: str | None = None,
        log_format: str | None = None,
        verbose: bool = False,
        quiet: bool = False,
    ) -> "RunContext":
        raw_root = repo_root or os.environ.get("GAPLINT_REPO_ROOT")
        root = Path(raw_root).resolve() if raw_root else default_repo_root()

        raw_schema = schema or os.environ.get("GAPLINT_SCHEMA")
        if raw_schema:
            schema_path = Path(raw_schema)
            if not schema_path.is_absolute():
                schema_path = Path.cwd() / schema_path
        elif (root / REPO_SCHEMA_NAME).is_file():
            schema_path = root / REPO_SCHEMA_NAME
        else:
            schema_path = BUNDLED_SCHEMA

        resolved_format = (log_format or os.environ.get("GAPLINT_LOG_FORMAT") or "text").strip().lower()
        if resolved_format not in ("text", "json"):
            raise ScriptError(f"unsupported log format `{resolved_format}` (expected text or json)", ERR_USAGE)

        return cls(
            repo_root=root,
            schema_path=schema_path.resolve(),
            log_format=resolved_format,  # type: ignore[arg-type]
            verbose=verbose or _env_flag("GAPLINT_VERBOSE"),
            quiet=quiet,
        )
