"""
Color extraction service for uploaded images.

Implements the local palette pipeline: pixel sampling, MiniBatchKMeans
quantization and dominance ordering.
"""

from collections import Counter
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger
from sklearn.cluster import MiniBatchKMeans


def rgb_to_hex(rgb_u8: np.ndarray) -> str:
    """Convert RGB uint8 array to hex color string."""
    r, g, b = [int(x) for x in rgb_u8]
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color string to RGB tuple."""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def sample_pixels(rgb: np.ndarray,
                  mask: Optional[np.ndarray] = None,
                  max_samples: int = 20000,
                  rng_seed: int = 42) -> np.ndarray:
    """
    Flatten an image to pixels and downsample deterministically.
    
    Args:
        rgb: Input image (H, W, 3) uint8 RGB
        mask: Optional boolean (H, W) mask of pixels to keep (e.g. alpha > 0)
        max_samples: Maximum number of pixels to keep
        rng_seed: Random seed for deterministic sampling
        
    Returns:
        Pixel array (N, 3) uint8
        
    Raises:
        ValueError: If no pixels remain after masking
    """
    if mask is not None:
        pixels = rgb[mask]
    else:
        pixels = rgb.reshape(-1, 3)
    
    if pixels.size == 0:
        raise ValueError("Image has no visible pixels")
    
    initial_count = pixels.shape[0]
    if initial_count > max_samples:
        rng = np.random.default_rng(rng_seed)
        indices = rng.choice(initial_count, size=max_samples, replace=False)
        pixels = pixels[indices]
        logger.debug(f"Downsampled {initial_count} pixels to {max_samples}")
    
    return pixels


def unique_palette(pixels_rgb_u8: np.ndarray) -> List[Tuple[np.ndarray, float]]:
    """Exact colors of the sample with their share, most frequent first."""
    colors, counts = np.unique(pixels_rgb_u8, axis=0, return_counts=True)
    total = counts.sum()
    order = np.argsort(-counts, kind="stable")
    return [(colors[i], counts[i] / total) for i in order]


def cluster_palette(pixels_rgb_u8: np.ndarray, k: int = 8,
                    rng_seed: int = 42) -> List[Tuple[np.ndarray, float]]:
    """
    Quantize pixels into k colors using MiniBatchKMeans.
    
    When the sample holds k or fewer distinct colors those colors are
    returned as-is, since clustering could only merge or duplicate them.
    
    Args:
        pixels_rgb_u8: RGB pixels (N, 3) uint8
        k: Number of clusters
        rng_seed: Random seed for deterministic clustering
        
    Returns:
        List of (center_rgb_u8, ratio) ordered by dominance (descending).
        Empty clusters are dropped, so the list may be shorter than k.
        
    Raises:
        RuntimeError: If clustering fails
    """
    n_unique = len(np.unique(pixels_rgb_u8, axis=0))
    if n_unique <= k:
        logger.debug(f"Only {n_unique} unique colors, skipping clustering")
        return unique_palette(pixels_rgb_u8)
    
    logger.debug(f"Starting clustering with k={k}, {len(pixels_rgb_u8)} pixels")
    
    try:
        kmeans = MiniBatchKMeans(
            n_clusters=k,
            random_state=rng_seed,
            batch_size=min(2048, len(pixels_rgb_u8)),
            n_init="auto",
            max_iter=100
        )
        labels = kmeans.fit_predict(pixels_rgb_u8.astype(np.float32))
    except ValueError as e:
        logger.error(f"Clustering failed: {str(e)}")
        raise RuntimeError(f"K-means clustering failed: {str(e)}")
    
    centers = np.clip(np.rint(kmeans.cluster_centers_), 0, 255).astype(np.uint8)
    label_counts = Counter(labels)
    total_pixels = len(labels)
    
    cluster_stats = [
        (centers[i], label_counts[i] / total_pixels)
        for i in range(k)
        if label_counts.get(i, 0) > 0
    ]
    cluster_stats.sort(key=lambda stat: -stat[1])
    
    ratios_str = [f"{ratio:.3f}" for _, ratio in cluster_stats]
    logger.debug(f"Clustering successful: {ratios_str}")
    
    return cluster_stats


def extract_palette(rgb: np.ndarray,
                    mask: Optional[np.ndarray] = None,
                    k: int = 8,
                    max_samples: int = 20000,
                    rng_seed: int = 42) -> List[str]:
    """
    Extract the dominant colors of an image as hex strings.
    
    Returns:
        Hex colors (#RRGGBB, uppercase) ordered by pixel share; empty when
        the mask hides every pixel
    """
    if mask is not None and not mask.any():
        logger.debug("Image is fully transparent, palette is empty")
        return []

    pixels = sample_pixels(rgb, mask, max_samples=max_samples, rng_seed=rng_seed)
    palette = cluster_palette(pixels, k=k, rng_seed=rng_seed)
    return [rgb_to_hex(center) for center, _ in palette]
