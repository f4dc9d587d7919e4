"""
Color Analyzer

Image color analysis service (palette extraction and pixel filters) and
the client that talks to it.
"""

__version__ = "1.0.0"
