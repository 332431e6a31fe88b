"""Clustering algorithm implementations."""

from .kmeans import KMeans, centroids_from_assignments, CONVERGENCE_THRESHOLD, RESIDUAL_SENTINEL

__all__ = [
    'KMeans',
    'centroids_from_assignments',
    'CONVERGENCE_THRESHOLD',
    'RESIDUAL_SENTINEL'
]
