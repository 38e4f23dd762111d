"""Return values for GAP directory validation.

`validate_gap_directory` hands back `Ok(gap_name)` or `Err(GapFailure)`; only
the CLI turns an `Err` into output and an exit status. Usage and schema
loading problems are raised as `ScriptError` instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Ok[T] | Err[E]
