"""Source adapters for fetching discussions."""

from idea_insight.adapters.sources.reddit_source import RedditSource

__all__ = ["RedditSource"]
