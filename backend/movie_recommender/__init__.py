"""
Movie Recommendation API.

Free-text movie preference in, five movie titles out, every request logged.
"""

__version__ = "1.0.0"
