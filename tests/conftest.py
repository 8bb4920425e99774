import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

# Ensure the project root and backend/ are on sys.path so `polyroots` and `app` are importable
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "backend"))
