"""Centralized configuration for CalcBrain.

This module defines:
- Output formatting precision
- Logging defaults
- Exact (SymPy) result reporting
- Input limits for loaded programs and exact replay depth

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with CALCBRAIN_)
"""

import os

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("calcbrain")
except Exception:
    # Package not installed (running from a source checkout)
    VERSION = "1.0.0"

# Number of significant digits used when formatting results
OUTPUT_PRECISION = int(os.getenv("CALCBRAIN_OUTPUT_PRECISION", "12"))

LOG_LEVEL = os.getenv("CALCBRAIN_LOG_LEVEL", "WARNING").upper()

# Report the exact SymPy form alongside the float result
EXACT_RESULTS = os.getenv("CALCBRAIN_EXACT_RESULTS", "true").lower() == "true"

# Maximum number of entries accepted when loading a serialized program
MAX_PROGRAM_LENGTH = int(os.getenv("CALCBRAIN_MAX_PROGRAM_LENGTH", "10000"))

# Maximum nesting of operations replayed exactly; deeper programs get no exact form
MAX_EXACT_DEPTH = int(os.getenv("CALCBRAIN_MAX_EXACT_DEPTH", "40"))
