"""Tagged results for LuCI RPC calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Ok:
    value: str


@dataclass(frozen=True)
class Err:
    message: str


AuthResult = Union[Ok, Err]
ExecResult = Union[Ok, Err]
