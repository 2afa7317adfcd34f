"""Device watchlist storage on SQLite, with thread-pool, event-loop and logging utilities."""

__version__ = "0.0.1"