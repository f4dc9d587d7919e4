"""
Color Analyzer Colors Module

Provides palette extraction for uploaded images: deterministic pixel
sampling and MiniBatchKMeans quantization ordered by dominance.
"""

__version__ = "1.0.0"
