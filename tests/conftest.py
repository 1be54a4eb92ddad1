"""Root conftest: puts src/ on the path and exposes the shared fixtures."""
import sys
from pathlib import Path

src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from fixtures.conftest import *  # noqa: F403, F401, E402
