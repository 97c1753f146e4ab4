"""contextvault - retrieval context service for a personal knowledge workspace."""

__version__ = "0.1.0"
