"""Command-line interface and interactive REPL for CalcBrain."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from . import config
from .api import available_symbols, evaluate, run_program
from .brain import CalculatorBrain
from .logging_config import get_logger
from .operations import symbols_by_kind
from .parser import (
    dumps_program,
    format_number,
    from_property_list,
    loads_program,
    tokenize,
)
from .symbolic import exact_for_result, format_exact
from .types import Operand, ProgramEntry, SymbolicError, ValidationError

logger = get_logger("cli")

HELP_TEXT = """\
Enter numbers and operator symbols separated by spaces, e.g. `3 + 4 x 5 =`.
The calculator evaluates strictly left to right (no precedence).

Commands:
  save       Remember the current program
  restore    Replay the remembered program
  clear      Reset the calculator
  program    Show the current program as JSON
  symbols    List the available operation symbols
  help       Show this help
  quit       Exit (also: exit, Ctrl-D)
"""


class CalculatorSession:
    """One long-lived brain driven by lines of user input.

    Each token is applied as soon as it is read: numbers go to
    ``set_operand`` and anything else to ``perform_operation``. The display
    shows the brain's result after the whole line. Holds a single saved
    program slot.
    """

    def __init__(self, brain: CalculatorBrain | None = None) -> None:
        self.brain = brain if brain is not None else CalculatorBrain()
        self.saved_program: tuple[ProgramEntry, ...] | None = None
        self.display_value = 0.0

    def enter(self, text: str) -> float:
        """Feed one line of tokens to the brain and return the display value."""
        for entry in tokenize(text):
            if isinstance(entry, Operand):
                self.brain.set_operand(entry.value)
            else:
                self.brain.perform_operation(entry.symbol)
        self.display_value = self.brain.result
        return self.display_value

    def save(self) -> None:
        self.saved_program = self.brain.program

    def restore(self) -> bool:
        """Replay the saved program. Returns False if nothing was saved."""
        if self.saved_program is None:
            return False
        self.brain.program = self.saved_program
        self.display_value = self.brain.result
        return True

    def clear(self) -> None:
        self.brain.clear()
        self.display_value = 0.0


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary (see CalcResult.to_dict)
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False, allow_nan=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    print(res.get("approx"))
    description = res.get("description")
    if description:
        suffix = "" if res.get("is_partial") else " ="
        print(f"  {description}{suffix}")
    exact = res.get("exact")
    if exact is not None and exact != res.get("approx"):
        exact_str = format_exact(exact)
        try:
            print(f"  Exact: {exact_str}")
        except UnicodeEncodeError:
            print(f"  Exact: {exact}")


def _print_display(session: CalculatorSession) -> None:
    brain = session.brain
    line = format_number(session.display_value)
    if brain.description:
        # Partial descriptions already end with "..."
        suffix = "" if brain.is_partial_result else " ="
        line = f"{line}    [{brain.description}{suffix}]"
    print(line)
    if config.EXACT_RESULTS and not brain.is_partial_result:
        try:
            exact = exact_for_result(brain.program, session.display_value)
        except SymbolicError as e:
            logger.debug(f"No exact form: {e}")
            return
        if exact is None:
            return
        exact_str = format_exact(exact)
        if exact_str != format_number(session.display_value):
            print(f"    Exact: {exact_str}")


def _print_symbols() -> None:
    for kind, symbols in symbols_by_kind().items():
        print(f"{kind}: {' '.join(symbols)}")


def repl_loop() -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    session = CalculatorSession()
    print("CalcBrain - type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        command = raw.lower()
        if command in ("quit", "exit"):
            print("Goodbye.")
            break
        if command == "help":
            print(HELP_TEXT)
            continue
        if command == "symbols":
            _print_symbols()
            continue
        if command == "program":
            print(dumps_program(session.brain.program))
            continue
        if command == "save":
            session.save()
            print(f"Saved {len(session.saved_program or ())} entries.")
            continue
        if command == "restore":
            if not session.restore():
                print("Nothing saved yet.")
                continue
            _print_display(session)
            continue
        if command == "clear":
            session.clear()
            _print_display(session)
            continue
        try:
            session.enter(raw)
        except ValidationError as e:
            print("Error:", e)
            continue
        _print_display(session)


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_failed = 0
    print("Running CalcBrain health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    res = evaluate("3 + 4 x 5 =")
    if res.ok and res.result == 35.0:
        print("[OK] Left-to-right evaluation works")
    else:
        print(f"[FAIL] Evaluation failed: expected 35, got {res!r}")
        checks_failed += 1

    res = evaluate("π x 2 =")
    if res.ok and res.exact == "2*pi":
        print("[OK] Exact replay works")
    else:
        print(f"[FAIL] Exact replay failed: expected 2*pi, got {res.exact!r}")
        checks_failed += 1

    print("-" * 50)
    if checks_failed:
        print("\n[WARN] Some health checks failed.")
        return 1
    print("\n[OK] All health checks passed!")
    return 0


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for CalcBrain CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="calcbrain",
        description="Accumulator calculator with left-to-right evaluation",
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate space-separated inputs and exit (e.g. '3 + 4 =')",
        dest="eval_expr",
    )
    parser.add_argument(
        "--program", type=str, help="Replay a JSON program file and exit"
    )
    parser.add_argument(
        "--save", type=str, help="Write the resulting program to a JSON file"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--no-exact", action="store_true", help="Do not report exact SymPy results"
    )
    parser.add_argument(
        "--list-symbols", action="store_true", help="List operation symbols and exit"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: CALCBRAIN_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level or config.LOG_LEVEL, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)
    if args.no_exact:
        config.EXACT_RESULTS = False

    if args.version:
        print(config.VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.list_symbols:
        if args.format == "json":
            print(json.dumps(available_symbols(), ensure_ascii=False))
        else:
            _print_symbols()
        return 0

    if args.program is not None:
        try:
            program = loads_program(Path(args.program).read_text(encoding="utf-8"))
        except OSError as e:
            print(f"Error: cannot read program file: {e}", file=sys.stderr)
            return 1
        except ValidationError as e:
            logger.info(f"Rejected program file {args.program}: {e.code}")
            print(f"Error: {e}", file=sys.stderr)
            return 1
        res = run_program(program)
    elif args.eval_expr is not None:
        res = evaluate(args.eval_expr)
    else:
        repl_loop()
        return 0

    print_result_pretty(res.to_dict(), args.format)
    if not res.ok:
        return 1

    if args.save:
        try:
            Path(args.save).write_text(
                dumps_program(from_property_list(res.program or [])),
                encoding="utf-8",
            )
        except OSError as e:
            print(f"Error: cannot write program file: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
