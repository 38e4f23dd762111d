from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .checks.directory import GapFailure, validate_gap_directory
from .core.context import RunContext
from .core.logging import log_event
from .core.result import Err
from .core.schema import MetadataSchema, load_metadata_schema
from .discovery import discover_gap_directories
from .errors import ScriptError
from .exit_codes import ERR_INTERNAL, ERR_USAGE, ERR_VALIDATION, OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gaplint",
        description="Validate the structure of GAP directories. Without a target, every GAP-* directory in the repository root is checked.",
    )
    p.add_argument("--version", action="version", version=f"gaplint {__version__}")
    p.add_argument("gap_directory", nargs="?", metavar="gap-directory", help="single GAP directory to validate")
    p.add_argument("--repo-root", help="repository root searched in discovery mode")
    p.add_argument("--schema", help="metadata JSON Schema (Draft 2020-12) to validate against")
    p.add_argument("--log-format", choices=["text", "json"], default=None, help="diagnostic log line format")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="emit diagnostic events on stderr")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    return p


def _report_failure(ctx: RunContext, failure: GapFailure) -> int:
    log_event(ctx, "error", "directory", "fail", gap=failure.gap_name)
    print(failure.render(), file=sys.stderr)
    return ERR_VALIDATION


def _validate_one(ctx: RunContext, schema: MetadataSchema, dir_path: Path) -> int:
    log_event(ctx, "info", "directory", "start", path=dir_path)
    result = validate_gap_directory(dir_path, schema)
    if isinstance(result, Err):
        return _report_failure(ctx, result.error)
    log_event(ctx, "info", "directory", "pass", gap=result.value)
    if not ctx.quiet:
        print(f"✓ {result.value} validated successfully")
    return OK


def _run_discovery(ctx: RunContext, schema: MetadataSchema) -> int:
    if not ctx.repo_root.is_dir():
        raise ScriptError(f"Repository root is not a directory: {ctx.repo_root}", ERR_USAGE, "usage_error")
    gap_dirs = discover_gap_directories(ctx.repo_root)
    log_event(ctx, "info", "discovery", "found", root=ctx.repo_root, count=len(gap_dirs))
    if not gap_dirs:
        raise ScriptError("No GAP directories found", ERR_VALIDATION, "discovery_error")

    if not ctx.quiet:
        noun = "directory" if len(gap_dirs) == 1 else "directories"
        print(f"Found {len(gap_dirs)} GAP {noun}")
    for dir_path in gap_dirs:
        code = _validate_one(ctx, schema, dir_path)
        if code != OK:
            return code
    return OK


def _tolerate_unencodable_output() -> None:
    # consoles without UTF-8 (cp1252) cannot encode the success mark
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="replace")


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    _tolerate_unencodable_output()
    try:
        ctx = RunContext.from_args(ns.repo_root, ns.schema, ns.log_format, ns.verbose, ns.quiet)
        log_event(ctx, "info", "cli", "start", target=ns.gap_directory or "<discover>", repo_root=ctx.repo_root)
        schema = load_metadata_schema(ctx.schema_path)
        log_event(ctx, "info", "schema", "loaded", schema=schema.source)
        if ns.gap_directory is None:
            return _run_discovery(ctx, schema)
        return _validate_one(ctx, schema, Path(ns.gap_directory))
    except ScriptError as exc:
        print(str(exc), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(f"internal error: {exc}", file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
