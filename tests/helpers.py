from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def run_gaplint(*args: str, cwd: Path | None = None, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    run_env = os.environ.copy()
    for key in [k for k in run_env if k.startswith("GAPLINT_")]:
        del run_env[key]
    run_env["PYTHONPATH"] = str(ROOT / "src")
    run_env["PYTHONIOENCODING"] = "utf-8"
    run_env.update(env or {})
    return subprocess.run(
        [sys.executable, "-m", "gaplint", *args],
        cwd=(cwd or ROOT),
        env=run_env,
        text=True,
        encoding="utf-8",
        capture_output=True,
        check=False,
    )


VALID_METADATA = """\
title: Structured proposal metadata
authors:
  - Jane Doe <jane@example.com>
  - bob@example.org
sponsor: "@alice"
discussion: https://example.com/discuss/42
status: draft
"""
