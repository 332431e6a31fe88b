"""
Core interfaces for the k-centroids clustering engine.

This module defines the abstract base classes for the pluggable policies the
engine composes: the distance metric, the initial partitioner, the empty
cluster policy, the per-iteration step and the diagnostics reporter.
"""

from abc import ABC, abstractmethod
from typing import Optional
import torch
from torch import Tensor


class DistanceMetric(ABC):
    """Abstract base class for point-to-point dissimilarities.

    The engine does not assume symmetry or the triangle inequality; it only
    needs a non-negative scalar per pair of points.
    """

    @abstractmethod
    def evaluate(self, a: Tensor, b: Tensor) -> float:
        """Compute the dissimilarity between two points.

        Args:
            a: (d,) tensor
            b: (d,) tensor

        Returns:
            Non-negative distance
        """
        pass

    def pairwise(self, points: Tensor, centroids: Tensor) -> Tensor:
        """Compute distances from every point to every centroid.

        The default evaluates each pair with `evaluate`; metrics with a
        vectorized form should override this.

        Args:
            points: (n, d) tensor of points
            centroids: (k, d) tensor of centroids

        Returns:
            (n, k) tensor of distances
        """
        distances = torch.empty(points.shape[0], centroids.shape[0],
                                dtype=points.dtype, device=points.device)
        for i in range(points.shape[0]):
            for j in range(centroids.shape[0]):
                distances[i, j] = self.evaluate(points[i], centroids[j])
        return distances


class InitialPartitioner(ABC):
    """Abstract base class for initial partition strategies.

    A partitioner produces either an initial assignment per point or an
    initial centroid set. Which one is declared by `gives_centroids`; the
    engine calls the matching method and never the other.
    """

    @property
    @abstractmethod
    def gives_centroids(self) -> bool:
        """True if this partitioner produces centroids, False for assignments."""
        pass

    def initial_assignments(self, points: Tensor, n_clusters: int) -> Tensor:
        """Return (n,) long tensor of cluster indices in [0, n_clusters)."""
        raise NotImplementedError(
            f"{self.__class__.__name__} does not produce initial assignments")

    def initial_centroids(self, points: Tensor, n_clusters: int) -> Tensor:
        """Return (n_clusters, d) tensor of initial centroids."""
        raise NotImplementedError(
            f"{self.__class__.__name__} does not produce initial centroids")


class EmptyClusterPolicy(ABC):
    """Abstract base class for empty cluster recovery."""

    @property
    def allows_empty(self) -> bool:
        """Whether this policy may leave an empty cluster empty."""
        return False

    def reset(self) -> None:
        """Clear any state kept from a previous run."""
        pass

    @abstractmethod
    def empty_cluster(self, points: Tensor, cluster: int,
                      old_centroids: Tensor, new_centroids: Tensor,
                      counts: Tensor, metric: DistanceMetric,
                      iteration: int) -> int:
        """Handle a cluster that received no points in this iteration.

        Args:
            points: (n, d) dataset
            cluster: Index of the empty cluster
            old_centroids: (k, d) centroids the iteration started from
            new_centroids: (k, d) centroids just computed; modified in place
            counts: (k,) points per cluster; modified in place
            metric: Distance metric of the run
            iteration: Zero-based iteration index

        Returns:
            Number of points whose cluster changed
        """
        pass


class IterationStep(ABC):
    """Abstract base class for one assignment-and-update pass.

    Instances are bound to one dataset and metric for the duration of a run.
    """

    def __init__(self, points: Tensor, metric: DistanceMetric, **kwargs):
        self.points = points
        self.metric = metric
        self._distance_calculations = 0

    @abstractmethod
    def iterate(self, centroids: Tensor, new_centroids: Tensor,
                counts: Tensor) -> float:
        """Run one pass from `centroids` into `new_centroids`.

        Args:
            centroids: (k, d) current centroids; read only
            new_centroids: (k, d) buffer overwritten with the updated centroids
            counts: (k,) long buffer overwritten with points per cluster

        Returns:
            Residual measuring centroid movement
        """
        pass

    @property
    def distance_calculations(self) -> int:
        """Number of metric evaluations performed so far."""
        return self._distance_calculations


class ClusteringReporter:
    """Receiver for diagnostics emitted during a clustering run.

    All hooks are no-ops; subclasses override what they care about.
    """

    def degenerate_configuration(self, message: str) -> None:
        pass

    def empty_cluster(self, cluster: int, iteration: int) -> None:
        pass

    def iteration_completed(self, iteration: int, residual: float) -> None:
        pass

    def finished(self, iterations: int, converged: bool,
                 distance_calculations: Optional[int] = None) -> None:
        pass
