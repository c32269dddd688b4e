"""Run the cronreport CLI with ``python -m cronreport``."""

from __future__ import annotations

import sys

from cronreport.cli import main

if __name__ == "__main__":
    sys.exit(main())
