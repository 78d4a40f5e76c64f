#!/usr/bin/env python3
"""Run the spell trainer from a source checkout."""

import sys

from cli.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
