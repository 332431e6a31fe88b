"""
Clustering evaluation metrics.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


def inertia(X: Tensor, labels: Tensor, centers: Tensor,
            metric: Optional[DistanceMetric] = None) -> float:
    """Sum of squared distances of points to their assigned centers.

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels
        centers: (k, d) cluster centers
        metric: Distance metric; squared Euclidean if None

    Returns:
        Total inertia (lower is better)
    """
    total = 0.0
    n_clusters = centers.shape[0]

    for k in range(n_clusters):
        mask = labels == k
        if mask.sum() > 0:
            cluster_points = X[mask]
            if metric is None:
                distances = torch.sum((cluster_points - centers[k]) ** 2, dim=1)
            else:
                distances = metric.pairwise(cluster_points, centers[k:k + 1])[:, 0] ** 2
            total += distances.sum().item()

    return total
