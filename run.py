#!/usr/bin/env python3
"""Run classregr: python run.py --config configs/example_config.yaml"""

import sys

from classregr.cli import main

if __name__ == "__main__":
    sys.exit(main())
