"""
Random partition initialization.

Produces initial assignments rather than centroids: the engine derives the
starting centroids as the mean of each part.
"""

from typing import Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import InitialPartitioner
from ..utils.validation import check_random_state


class RandomPartition(InitialPartitioner):
    """Random partition of the points into K nearly equal parts.

    Labels 0, 1, ..., K-1 are laid out cyclically over the points and then
    shuffled, so part sizes differ by at most one.
    """

    def __init__(self, random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            random_state: Seed or generator (None for the global generator)
        """
        self.random_state = random_state

    @property
    def gives_centroids(self) -> bool:
        return False

    def initial_assignments(self, points: Tensor, n_clusters: int) -> Tensor:
        """Randomly partition the points.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters

        Returns:
            (n,) long tensor of cluster indices
        """
        if n_clusters < 1:
            raise ValueError(f"Cannot partition points into {n_clusters} clusters")

        n_points = points.shape[0]
        generator = check_random_state(self.random_state)

        labels = torch.arange(n_points) % n_clusters
        order = torch.randperm(n_points, generator=generator)
        return labels[order].to(points.device)

    def __repr__(self) -> str:
        return f"RandomPartition(random_state={self.random_state!r})"
