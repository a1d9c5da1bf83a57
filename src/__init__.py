"""routedocs — regenerate API documentation without clobbering manual edits."""

__version__ = "0.1.0"
