"""Type definitions: program entries, result dataclass and exceptions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Operand:
    """A numeric input recorded in the program log."""

    value: float


@dataclass(frozen=True)
class Operator:
    """An operator symbol recorded in the program log."""

    symbol: str


ProgramEntry = Union[Operand, Operator]


def _json_number(value: float) -> float | None:
    return value if math.isfinite(value) else None


@dataclass
class CalcResult:
    """Result of running a sequence of calculator inputs."""

    ok: bool
    result: float | None = None
    approx: str | None = None
    exact: str | None = None
    description: str | None = None
    is_partial: bool = False
    program: list[float | str] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        inf and NaN have no JSON literal, so a non-finite ``result`` (and any
        non-finite operand in ``program``) becomes None; ``approx`` still
        carries "inf" or "nan".
        """
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = _json_number(self.result)
        if self.approx is not None:
            result_dict["approx"] = self.approx
        if self.exact is not None:
            result_dict["exact"] = self.exact
        if self.description is not None:
            result_dict["description"] = self.description
            result_dict["is_partial"] = self.is_partial
        if self.program is not None:
            result_dict["program"] = [
                _json_number(item) if isinstance(item, float) else item
                for item in self.program
            ]
        if self.error is not None:
            result_dict["error"] = self.error
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"CalcResult(ok=False, error={self.error!r})"
        parts = [f"ok={self.ok}", f"result={self.result!r}"]
        if self.exact is not None:
            parts.append(f"exact={self.exact!r}")
        if self.description is not None:
            parts.append(f"description={self.description!r}")
        if self.is_partial:
            parts.append("is_partial=True")
        return f"CalcResult({', '.join(parts)})"


class ValidationError(Exception):
    """Raised when caller-supplied input is rejected."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class SymbolicError(Exception):
    """Raised when exact replay of a program fails."""

    def __init__(self, message: str, code: str = "SYMBOLIC_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
