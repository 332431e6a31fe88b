"""
Sample initialization strategy.

Selects random points from the dataset as initial cluster centers.
"""

from typing import Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import InitialPartitioner
from ..utils.validation import check_random_state


class SampleInitialization(InitialPartitioner):
    """Random initialization by selecting points from the dataset.

    Selects n_clusters distinct points as initial centers. When more clusters
    than points are requested, every point is used once and the remaining
    centers are drawn with replacement.
    """

    def __init__(self, random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            random_state: Seed or generator (None for the global generator)
        """
        self.random_state = random_state

    @property
    def gives_centroids(self) -> bool:
        return True

    def initial_centroids(self, points: Tensor, n_clusters: int) -> Tensor:
        """Initialize centers with random points.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters

        Returns:
            (n_clusters, d) tensor of centers
        """
        n_points = points.shape[0]
        if n_points == 0 and n_clusters > 0:
            raise ValueError("Cannot sample initial centroids from an empty dataset")

        generator = check_random_state(self.random_state)

        # Select random indices without replacement
        indices = torch.randperm(n_points, generator=generator)[:n_clusters]
        if n_clusters > n_points:
            extra = torch.randint(n_points, (n_clusters - n_points,), generator=generator)
            indices = torch.cat([indices, extra])

        return points[indices.to(points.device)].clone()

    def __repr__(self) -> str:
        return f"SampleInitialization(random_state={self.random_state!r})"
