"""
feedsmith: Atom/RSS feed generation with optional output caching.
"""

__version__ = "1.0.0"
