"""
Max-variance empty cluster policy.

The default recovery: split the most spread-out cluster by giving its
outermost point to the empty cluster.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from .base_policy import ReassignmentPolicy


class MaxVarianceNewCluster(ReassignmentPolicy):
    """Reseed an empty cluster from the cluster with the largest variance.

    Variance of a cluster is the mean squared distance of its points to the
    centroid the iteration started from. Within the chosen cluster the point
    farthest from its new centroid becomes the empty cluster's centroid.
    Clusters with a single point are never split, so if no cluster has two
    or more points the empty cluster stays empty.
    """

    def __init__(self):
        super().__init__()
        self._variances = None

    def reset(self) -> None:
        super().reset()
        self._variances = None

    def _precalculate(self, points: Tensor, old_centroids: Tensor,
                      counts: Tensor, metric: DistanceMetric) -> None:
        super()._precalculate(points, old_centroids, counts, metric)
        variances = torch.zeros(old_centroids.shape[0], dtype=points.dtype,
                                device=points.device)
        variances.index_add_(0, self._assignments, self._distances ** 2)
        self._variances = variances / counts.clamp(min=1).to(points.dtype)

    def empty_cluster(self, points: Tensor, cluster: int,
                      old_centroids: Tensor, new_centroids: Tensor,
                      counts: Tensor, metric: DistanceMetric,
                      iteration: int) -> int:
        self._ensure_cache(points, old_centroids, counts, metric, iteration)

        splittable = counts > 1
        if not splittable.any():
            return 0

        candidates = torch.where(splittable, self._variances,
                                 torch.full_like(self._variances, -1.0))
        donor = int(torch.argmax(candidates).item())

        # Farthest member of the donor from its new centroid
        members = torch.where(self._assignments == donor)[0]
        member_distances = metric.pairwise(points[members],
                                           new_centroids[donor].unsqueeze(0))[:, 0] ** 2
        position = int(torch.argmax(member_distances).item())
        furthest = int(members[position].item())
        max_distance = member_distances[position].item()

        self._move_point(points, furthest, donor, cluster, new_centroids, counts)

        # Keep variances usable for further empty clusters in this iteration
        self._variances[cluster] = 0.0
        donor_count = counts[donor].item()
        if donor_count <= 1:
            self._variances[donor] = 0.0
        else:
            updated = ((donor_count + 1) * self._variances[donor].item()
                       - max_distance) / donor_count
            self._variances[donor] = max(updated, 0.0)

        return 1
