"""
Lloyd update step for centroid-based clustering.

One step assigns every point to its nearest centroid and recomputes each
centroid as the mean of its points. This is where a run spends nearly all of
its time: O(n * k * d) per step.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import IterationStep, DistanceMetric


def nearest_centroids(points: Tensor, centroids: Tensor, metric: DistanceMetric,
                      batch_size: Optional[int] = None) -> Tensor:
    """Index of the nearest centroid for each point.

    Ties go to the lowest centroid index.

    Args:
        points: (n, d) data points
        centroids: (k, d) centroids, k >= 1
        metric: Distance metric
        batch_size: Points per distance block (None for all at once)

    Returns:
        (n,) long tensor
    """
    n_points = points.shape[0]
    if batch_size is None or batch_size >= n_points:
        return torch.argmin(metric.pairwise(points, centroids), dim=1)

    labels = torch.empty(n_points, dtype=torch.long, device=points.device)
    for start in range(0, n_points, batch_size):
        stop = min(start + batch_size, n_points)
        distances = metric.pairwise(points[start:stop], centroids)
        labels[start:stop] = torch.argmin(distances, dim=1)
    return labels


class LloydStep(IterationStep):
    """Standard Lloyd iteration.

    With `batch_size` set the points are processed in fixed blocks: each block
    contributes partial centroid sums and counts which are merged in block
    order. The result is deterministic for a given batch_size, but may differ
    in the last bits from an unblocked run because the summation order changes.
    """

    def __init__(self, points: Tensor, metric: DistanceMetric,
                 batch_size: Optional[int] = None, **kwargs):
        """
        Args:
            points: (n, d) dataset, read only during the run
            metric: Distance metric for nearest-centroid search
            batch_size: Points per block (None for a single block)
        """
        super().__init__(points, metric)
        if batch_size is not None and batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size

    def iterate(self, centroids: Tensor, new_centroids: Tensor,
                counts: Tensor) -> float:
        """Run one Lloyd iteration.

        Args:
            centroids: (k, d) centroids to assign against
            new_centroids: (k, d) output buffer; empty clusters are left at zero
            counts: (k,) output buffer of points per cluster

        Returns:
            Frobenius norm of the centroid change
        """
        new_centroids.zero_()
        counts.zero_()

        n_points = self.points.shape[0]
        n_clusters = centroids.shape[0]
        if n_clusters == 0:
            return 0.0

        block = n_points if self.batch_size is None else self.batch_size
        for start in range(0, n_points, max(block, 1)):
            chunk = self.points[start:start + block]
            labels = nearest_centroids(chunk, centroids, self.metric)

            # Partial sums for this block
            new_centroids.index_add_(0, labels, chunk)
            counts += torch.bincount(labels, minlength=n_clusters)

        self._distance_calculations += n_points * n_clusters

        # Normalize; zero-count rows are divided by one and stay zero
        divisor = counts.clamp(min=1).to(new_centroids.dtype).unsqueeze(1)
        new_centroids.div_(divisor)

        return torch.norm(centroids - new_centroids).item()
