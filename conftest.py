import sys
from pathlib import Path

# Ensure repo root on sys.path so tests can import the command-line scripts.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
