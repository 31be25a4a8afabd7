"""
GitHub Search Feeds - Main Entry Point

Publishes every saved GitHub search as JSON Feed and Atom feeds.
"""

import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from github_search_feeds.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
