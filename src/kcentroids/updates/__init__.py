"""Iteration steps for centroid-based clustering."""

from .lloyd_step import LloydStep, nearest_centroids

__all__ = [
    'LloydStep',
    'nearest_centroids'
]
