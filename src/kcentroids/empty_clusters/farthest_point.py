"""
Farthest-point empty cluster policy.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from .base_policy import ReassignmentPolicy


class FarthestPointNewCluster(ReassignmentPolicy):
    """Reseed an empty cluster with the point farthest from its own centroid.

    Distances are measured to the new centroids of the current iteration.
    Points in single-point clusters are not eligible, so if no cluster has
    two or more points the empty cluster stays empty.
    """

    def empty_cluster(self, points: Tensor, cluster: int,
                      old_centroids: Tensor, new_centroids: Tensor,
                      counts: Tensor, metric: DistanceMetric,
                      iteration: int) -> int:
        self._ensure_cache(points, old_centroids, counts, metric, iteration)

        eligible = counts[self._assignments] > 1
        if not eligible.any():
            return 0

        distances = torch.empty(points.shape[0], dtype=points.dtype,
                                device=points.device)
        for k in torch.unique(self._assignments[eligible]).tolist():
            members = self._assignments == k
            distances[members] = metric.pairwise(
                points[members], new_centroids[k].unsqueeze(0))[:, 0]
        distances[~eligible] = -1.0

        farthest = int(torch.argmax(distances).item())
        donor = int(self._assignments[farthest].item())
        self._move_point(points, farthest, donor, cluster, new_centroids, counts)
        return 1
