#!/usr/bin/env python3
"""regmachine Command Line Interface.

Run register machine programs and convert them to and from Gödel numbers.

Usage:
    python main.py run --program programs/add.rm --register 1=3 --register 2=4
    python main.py encode --program programs/multiply.rm
    python main.py decode 1441362986991091712
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from regmachine.cli import main


if __name__ == "__main__":
    sys.exit(main())
