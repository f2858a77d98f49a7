"""CalcBrain package: accumulator calculator brain, program codec, and CLI."""

from .brain import CalculatorBrain
from .types import CalcResult, Operand, Operator, ProgramEntry

__all__ = [
    "CalculatorBrain",
    "CalcResult",
    "Operand",
    "Operator",
    "ProgramEntry",
    "api",
    "brain",
    "cli",
    "config",
    "logging_config",
    "operations",
    "parser",
    "symbolic",
    "types",
]
