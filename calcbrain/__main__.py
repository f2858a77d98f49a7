"""Main entry point for running calcbrain as a module.

This allows running CalcBrain with:
    python -m calcbrain
    python -m calcbrain --health-check
    python -m calcbrain -e "3 + 4 x 5 ="

This is equivalent to running:
    python -m calcbrain.cli
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
