"""Poll NBA speed and distance statistics as records, or export them to CSV."""

__version__ = "0.1.0"
__all__ = ["config", "connector", "destination", "export", "nba", "source", "spec"]