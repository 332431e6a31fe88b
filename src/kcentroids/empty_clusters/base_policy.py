"""
Base class with the bookkeeping shared by policies that reseed an empty
cluster with a point taken from another cluster.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import EmptyClusterPolicy, DistanceMetric


class ReassignmentPolicy(EmptyClusterPolicy):
    """Empty cluster policy that moves one point into the empty cluster.

    Point assignments against the iteration's starting centroids are computed
    on the first call of an iteration and kept up to date across the further
    calls of that iteration.
    """

    def __init__(self):
        self._iteration: Optional[int] = None
        self._assignments: Optional[Tensor] = None
        self._distances: Optional[Tensor] = None

    def reset(self) -> None:
        """Forget cached state from a previous run."""
        self._iteration = None
        self._assignments = None
        self._distances = None

    def _precalculate(self, points: Tensor, old_centroids: Tensor,
                      counts: Tensor, metric: DistanceMetric) -> None:
        """Assign points to the starting centroids and cache their distances."""
        distances = metric.pairwise(points, old_centroids)
        self._assignments = torch.argmin(distances, dim=1)
        self._distances = torch.gather(
            distances, 1, self._assignments.unsqueeze(1)).squeeze(1)

    def _ensure_cache(self, points: Tensor, old_centroids: Tensor,
                      counts: Tensor, metric: DistanceMetric,
                      iteration: int) -> None:
        if (self._iteration != iteration or self._assignments is None
                or self._assignments.shape[0] != points.shape[0]):
            self._precalculate(points, old_centroids, counts, metric)
            self._iteration = iteration

    def _move_point(self, points: Tensor, point: int, donor: int, cluster: int,
                    new_centroids: Tensor, counts: Tensor) -> None:
        """Move `point` from `donor` into the empty `cluster`.

        The donor centroid is downdated so it stays the mean of its points.
        """
        remaining = counts[donor].item() - 1
        value = points[point]
        new_centroids[donor] = (new_centroids[donor] * (remaining + 1) - value) / remaining
        counts[donor] -= 1
        counts[cluster] += 1
        new_centroids[cluster] = value
        self._assignments[point] = cluster
