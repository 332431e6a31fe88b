"""
Refined start initialization (Bradley and Fayyad, 1998).

Runs K-means on several small random subsamples, pools the centroids found,
then clusters the pool once per subsample solution and keeps the solution
with the lowest distortion on the pool.
"""

from typing import Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import InitialPartitioner, ClusteringReporter
from ..utils.validation import check_random_state


class RefinedStart(InitialPartitioner):
    """Centroid-producing partitioner built on repeated subsample clustering.

    Cost is roughly `samplings` K-means runs on `percentage` of the data plus
    `samplings` runs on the pooled centroids, so it pays off on large
    datasets where a good start saves many full iterations.
    """

    def __init__(self, samplings: int = 100, percentage: float = 0.02,
                 max_iter: int = 1000,
                 random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            samplings: Number of subsamples to cluster
            percentage: Fraction of the dataset in each subsample
            max_iter: Iteration limit of the inner K-means runs
            random_state: Seed or generator (None for the global generator)
        """
        if samplings < 1:
            raise ValueError(f"samplings must be positive, got {samplings}")
        if not 0.0 < percentage <= 1.0:
            raise ValueError(f"percentage must be in (0, 1], got {percentage}")
        self.samplings = samplings
        self.percentage = percentage
        self.max_iter = max_iter
        self.random_state = random_state

    @property
    def gives_centroids(self) -> bool:
        return True

    def initial_centroids(self, points: Tensor, n_clusters: int) -> Tensor:
        """Compute refined initial centroids.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters

        Returns:
            (n_clusters, d) tensor of centers
        """
        # Imported here: the engine itself depends on this package
        from ..algorithms.kmeans import KMeans
        from .sample import SampleInitialization

        n_points, dimension = points.shape
        if n_clusters == 0:
            return points.new_zeros(0, dimension)
        if n_points == 0:
            raise ValueError("Cannot refine centroids for an empty dataset")

        generator = check_random_state(self.random_state)
        sample_size = min(n_points, max(int(self.percentage * n_points), n_clusters))

        engine = KMeans(
            max_iter=self.max_iter,
            partitioner=SampleInitialization(random_state=generator),
            reporter=ClusteringReporter(),
            dtype=points.dtype,
            device=points.device
        )

        solutions = []
        for _ in range(self.samplings):
            indices = torch.randperm(n_points, generator=generator)[:sample_size]
            sample = points[indices.to(points.device)]
            result = engine.cluster(sample, n_clusters, return_assignments=False)
            solutions.append(result.centroids)

        pool = torch.cat(solutions, dim=0)

        best_centroids = None
        best_distortion = float('inf')
        for start in solutions:
            result = engine.cluster(pool, n_clusters, initial_centroids=start)
            distances = engine.metric.pairwise(pool, result.centroids)
            distortion = torch.gather(
                distances, 1, result.assignments.unsqueeze(1)).sum().item()
            if distortion < best_distortion:
                best_distortion = distortion
                best_centroids = result.centroids

        if best_centroids is None:
            best_centroids = solutions[0]
        return best_centroids.clone()

    def __repr__(self) -> str:
        return (f"RefinedStart(samplings={self.samplings}, "
                f"percentage={self.percentage}, random_state={self.random_state!r})")
