"""Version information for favo-sdk."""

__version__ = "1.2.1"
