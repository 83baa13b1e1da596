"""Success/failure values returned across the protocol object contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, NoReturn


@dataclass(frozen=True)
class Ok[T]:
    value: T

    @property
    def ok(self) -> Literal[True]:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err[E: Exception]:
    error: E

    @property
    def ok(self) -> Literal[False]:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


type Result[T, E: Exception] = Ok[T] | Err[E]
