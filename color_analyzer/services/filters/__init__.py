"""
Color Analyzer Filters Module

Pixel filters applied by the /apply-filter endpoint.
"""

__version__ = "1.0.0"
