"""Interactive command-line bug tracker with per-user accounts in SQLite."""

__version__ = "0.1.0"
__all__ = ["__version__"]