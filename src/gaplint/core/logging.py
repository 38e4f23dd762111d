from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import RunContext


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def log_event(ctx: RunContext, level: str, component: str, action: str, **fields: object) -> None:
    if not ctx.verbose:
        return
    payload = {
        "ts": utc_now_iso(),
        "level": level,
        "component": component,
        "action": action,
        **fields,
    }
    if ctx.log_json:
        sys.stderr.write(json.dumps(payload, sort_keys=True, default=str) + "\n")
        return
    core = f"ts={payload['ts']} level={level} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")
