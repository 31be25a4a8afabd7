"""
GitHub Search Feeds Package

Publishes GitHub issue, pull request and repository search results as
JSON Feed and Atom feeds.
"""

from github_search_feeds.logger import setup_logging
from github_search_feeds.orchestrator import FeedOrchestrator, RunSummary

__version__ = "1.0.0"
__all__ = ["FeedOrchestrator", "RunSummary", "setup_logging"]
