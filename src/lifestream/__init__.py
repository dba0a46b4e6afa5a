"""LifeStream: free-text time tracking with Notion sync."""

__version__ = "0.1.0"
