"""pytest configuration for the airdrop service."""

import sys
from pathlib import Path

# Put the repository root on sys.path so tests run without an editable install
root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))
