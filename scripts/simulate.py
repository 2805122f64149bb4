#!/usr/bin/env python3
"""
Monte-Carlo Swiss tournament simulation.

Usage:
    python scripts/simulate.py --players 32 --rounds 5 --iterations 1000

Examples:
    # Reproducible run
    python scripts/simulate.py -p 16 -r 4 -i 200 --seed 42

    # Best of three, print every iteration's standings
    python scripts/simulate.py -p 8 -r 3 -i 5 -f bo3 --show-iterations
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tourneysim.cli import main


if __name__ == "__main__":
    sys.exit(main())
