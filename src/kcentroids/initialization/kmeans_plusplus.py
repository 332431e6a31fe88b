"""
K-means++ initialization strategy.

Selects initial cluster centers using the K-means++ algorithm, which chooses
centers that are far apart to improve convergence speed and quality.
"""

import math
from typing import Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import InitialPartitioner, DistanceMetric
from ..utils.validation import check_random_state


class KMeansPlusPlusInit(InitialPartitioner):
    """K-means++ initialization for better starting positions.

    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute distance from each point to nearest existing center
       - Sample candidates with probability proportional to squared distance
       - Keep the candidate that most reduces the total squared distance
    """

    def __init__(self, n_local_trials: Optional[int] = None,
                 metric: Optional[DistanceMetric] = None,
                 random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            n_local_trials: Number of candidates to try for each center.
                           If None, uses 2 + log(k) as in sklearn
            metric: Distance used for seeding; squared Euclidean if None
            random_state: Seed or generator (None for the global generator)
        """
        self.n_local_trials = n_local_trials
        self.metric = metric
        self.random_state = random_state

    @property
    def gives_centroids(self) -> bool:
        return True

    def _squared_distances(self, points: Tensor, center: Tensor) -> Tensor:
        if self.metric is None:
            return torch.sum((points - center.unsqueeze(0)) ** 2, dim=1)
        return self.metric.pairwise(points, center.unsqueeze(0))[:, 0] ** 2

    def initial_centroids(self, points: Tensor, n_clusters: int) -> Tensor:
        """Initialize cluster centers using K-means++.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters

        Returns:
            (n_clusters, d) tensor of centers
        """
        n_points, dimension = points.shape
        if n_clusters == 0:
            return points.new_zeros(0, dimension)
        if n_points == 0:
            raise ValueError("Cannot seed centroids from an empty dataset")

        generator = check_random_state(self.random_state)

        # Number of candidates to try per iteration
        if self.n_local_trials is None:
            n_local_trials = 2 + int(math.log(n_clusters))
        else:
            n_local_trials = self.n_local_trials

        centers = points.new_empty(n_clusters, dimension)

        # Choose first center uniformly at random
        first_idx = torch.randint(n_points, (1,), generator=generator).item()
        centers[0] = points[first_idx]

        distances = self._squared_distances(points, centers[0])

        for c in range(1, n_clusters):
            total = distances.sum().item()
            if total > 0:
                probabilities = (distances / total).cpu()
            else:
                # Every point already coincides with a center
                probabilities = torch.full((n_points,), 1.0 / n_points,
                                           dtype=torch.float64)

            candidates_idx = torch.multinomial(probabilities, n_local_trials,
                                               replacement=True, generator=generator)

            # For each candidate, compute its potential (sum of min distances if chosen)
            best_potential = float('inf')
            best_candidate = None
            best_distances = None

            for idx in candidates_idx.tolist():
                candidate_distances = self._squared_distances(points, points[idx])
                new_distances = torch.minimum(distances, candidate_distances)
                potential = new_distances.sum().item()

                if potential < best_potential:
                    best_potential = potential
                    best_candidate = idx
                    best_distances = new_distances

            centers[c] = points[best_candidate]
            distances = best_distances

        return centers

    def __repr__(self) -> str:
        return (f"KMeansPlusPlusInit(n_local_trials={self.n_local_trials!r}, "
                f"random_state={self.random_state!r})")
