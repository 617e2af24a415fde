#!/usr/bin/env python3
"""
update_readme.py
Refresh the Code::Stats chart in README.md from a checkout, without installing
the package. Reads the same INPUT_* environment variables as the action:
  INPUT_CODESTATS_USERNAME (required)
  INPUT_README_FILE        -- default ./README.md
  INPUT_GRAPH_WIDTH        -- default 42
  INPUT_SHOW_TITLE / INPUT_SHOW_LINK / INPUT_DEBUG
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from codestats_readme.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
