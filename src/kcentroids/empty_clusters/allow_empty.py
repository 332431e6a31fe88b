"""
Policy that leaves empty clusters empty.
"""

from torch import Tensor

from ..base.interfaces import EmptyClusterPolicy, DistanceMetric


class AllowEmptyClusters(EmptyClusterPolicy):
    """Leave the cluster empty and keep its centroid where it was.

    The count stays at zero; the centroid is copied from the iteration's
    starting centroids instead of collapsing to the origin.
    """

    @property
    def allows_empty(self) -> bool:
        return True

    def empty_cluster(self, points: Tensor, cluster: int,
                      old_centroids: Tensor, new_centroids: Tensor,
                      counts: Tensor, metric: DistanceMetric,
                      iteration: int) -> int:
        new_centroids[cluster] = old_centroids[cluster]
        return 0
