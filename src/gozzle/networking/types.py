"""Result types returned by the gozzle networking layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


@dataclass(frozen=True)
class Ok(Generic[ValueT]):
    """Successful outcome carrying a value plus request metadata."""

    value: ValueT
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None


@dataclass(frozen=True)
class Err(Generic[ErrorT]):
    """Failed outcome carrying the error plus request metadata."""

    error: ErrorT
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None


Result = Union[Ok[ValueT], Err[ErrorT]]
