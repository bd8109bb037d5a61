"""Dev launcher: `python main.py import owner/repo` without `pip install -e .`.

Puts `src/` on the import path and hands over to `src/main.py`, so both
launchers share one code path (including the Windows UTF-8 fix).
"""

import runpy
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parent / "src"

if __name__ == "__main__":
    sys.path.insert(0, str(SRC))
    runpy.run_path(str(SRC / "main.py"), run_name="__main__")
