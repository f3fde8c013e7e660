"""Signature Studio - email signature composition and export service"""

__version__ = "1.0.0"
