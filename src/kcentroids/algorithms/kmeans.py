"""
K-means clustering engine.

Lloyd's algorithm with pluggable distance metric, initial partitioner,
empty cluster policy and iteration step.
"""

import math
from typing import Optional, Dict, Any, Type, Union
import numpy as np
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import (
    DistanceMetric, InitialPartitioner, EmptyClusterPolicy,
    IterationStep, ClusteringReporter
)
from ..base.data_structures import CentroidBuffers, ClusteringResult, IterationRecord
from ..distances.euclidean import EuclideanDistance
from ..initialization.sample import SampleInitialization
from ..empty_clusters.max_variance import MaxVarianceNewCluster
from ..updates.lloyd_step import LloydStep, nearest_centroids
from ..utils.validation import (
    check_n_clusters, check_max_iter,
    validate_initial_centroids, validate_initial_assignments
)
from ..utils.reporting import VerboseReporter
from ..utils.metrics import inertia


# The run stops once the centroids move less than this
CONVERGENCE_THRESHOLD = 1e-5

# NaN or infinite residuals are replaced by this value, which keeps the loop going
RESIDUAL_SENTINEL = 1e-4


def centroids_from_assignments(points: Tensor, assignments: Tensor,
                               n_clusters: int) -> Tensor:
    """Mean of the points assigned to each cluster.

    Clusters without points get an all-zero centroid.

    Args:
        points: (n, d) data points
        assignments: (n,) cluster indices in [0, n_clusters)
        n_clusters: Number of clusters K

    Returns:
        (K, d) tensor
    """
    centroids = points.new_zeros(n_clusters, points.shape[1])
    centroids.index_add_(0, assignments, points)
    counts = torch.bincount(assignments, minlength=n_clusters)
    centroids.div_(counts.clamp(min=1).to(points.dtype).unsqueeze(1))
    return centroids


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering with Lloyd's algorithm.

    Each iteration assigns every point to its nearest centroid and moves
    each centroid to the mean of its points. Clusters left without points
    are handed to the empty cluster policy. The run stops when the centroids
    move less than CONVERGENCE_THRESHOLD (Frobenius norm) or after max_iter
    iterations. In an iteration with empty clusters the movement is measured
    after the policy has run, so a centroid the policy keeps in place does
    not count as moved.

    Parameters
    ----------
    n_clusters : int, default=8
        Number of clusters used by fit()
    max_iter : int, default=1000
        Maximum number of iterations; 0 removes the limit (and warns)
    metric : DistanceMetric, optional
        Distance for nearest-centroid search, EuclideanDistance() by default
    partitioner : InitialPartitioner, optional
        Initial partition strategy, SampleInitialization() by default
    empty_cluster_policy : EmptyClusterPolicy, optional
        Empty cluster recovery, MaxVarianceNewCluster() by default
    step : type, default=LloydStep
        IterationStep class, instantiated once per run
    batch_size : int, optional
        Points per block in the nearest-centroid scans
    verbose : int, default=0
        Verbosity level of the default reporter
    reporter : ClusteringReporter, optional
        Receiver for diagnostics; VerboseReporter(verbose) if None
    random_state : int, optional
        Seed for the global torch generator, applied at the start of each run
    dtype : torch.dtype, default=torch.float64
        Floating point type of the computation
    device : torch.device or str, optional
        Device for computation, CPU if None

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
    labels_ : Tensor of shape (n_samples,)
    inertia_ : float
        Sum of squared distances to the assigned centroids
    n_iter_ : int
    converged_ : bool

    A KMeans instance keeps per-run state in its empty cluster policy; use one
    instance per thread when clustering concurrently.
    """

    def __init__(self,
                 n_clusters: int = 8,
                 max_iter: int = 1000,
                 metric: Optional[DistanceMetric] = None,
                 partitioner: Optional[InitialPartitioner] = None,
                 empty_cluster_policy: Optional[EmptyClusterPolicy] = None,
                 step: Type[IterationStep] = LloydStep,
                 batch_size: Optional[int] = None,
                 verbose: int = 0,
                 reporter: Optional[ClusteringReporter] = None,
                 random_state: Optional[int] = None,
                 dtype: torch.dtype = torch.float64,
                 device: Optional[Union[str, torch.device]] = None):
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state,
            dtype=dtype,
            device=device
        )
        self.metric = metric if metric is not None else EuclideanDistance()
        self.partitioner = partitioner if partitioner is not None else SampleInitialization()
        self.empty_cluster_policy = (empty_cluster_policy if empty_cluster_policy is not None
                                     else MaxVarianceNewCluster())
        self.step = step
        self.batch_size = batch_size
        self.reporter = reporter

        self.inertia_: Optional[float] = None

    def _get_reporter(self) -> ClusteringReporter:
        if self.reporter is not None:
            return self.reporter
        return VerboseReporter(self.verbose)

    def cluster(self, X: Union[Tensor, np.ndarray, list],
                n_clusters: int,
                initial_assignments: Optional[Union[Tensor, np.ndarray, list]] = None,
                initial_centroids: Optional[Union[Tensor, np.ndarray, list]] = None,
                return_assignments: bool = True) -> ClusteringResult:
        """Cluster X into n_clusters clusters.

        Args:
            X: (n, d) data; never modified
            n_clusters: Number of clusters K
            initial_assignments: Optional (n,) starting assignments; the
                starting centroids are their cluster means. Takes precedence
                over initial_centroids.
            initial_centroids: Optional (K, d) starting centroids
            return_assignments: Whether to compute final assignments

        Returns:
            ClusteringResult with (K, d) centroids and optional (n,) assignments

        Raises:
            ConfigurationError: If an initial guess does not match X or K
        """
        X = self._validate_data(X)
        n_points, dimension = X.shape
        reporter = self._get_reporter()

        messages = check_n_clusters(n_clusters, n_points) + check_max_iter(self.max_iter)
        n_clusters = int(n_clusters)

        # Initial guesses are checked before any work is done
        centroids = None
        if initial_assignments is not None:
            assignments = validate_initial_assignments(
                initial_assignments, n_points, n_clusters, device=self.device)
            centroids = centroids_from_assignments(X, assignments, n_clusters)
        elif initial_centroids is not None:
            centroids = validate_initial_centroids(
                initial_centroids, n_clusters, dimension,
                dtype=self.dtype, device=self.device)

        for message in messages:
            reporter.degenerate_configuration(message)

        self._seed()
        self.empty_cluster_policy.reset()

        if centroids is None:
            centroids = self._initial_centroids(X, n_clusters)

        buffers = CentroidBuffers(centroids)
        counts = torch.zeros(n_clusters, dtype=torch.long, device=self.device)
        step = self.step(X, self.metric, batch_size=self.batch_size)

        iteration = 0
        history = []
        converged = False
        while True:
            residual = step.iterate(buffers.current, buffers.next, counts)

            empty = torch.where(counts == 0)[0].tolist()
            for cluster in empty:
                reporter.empty_cluster(cluster, iteration)
                self.empty_cluster_policy.empty_cluster(
                    X, cluster, buffers.current, buffers.next, counts,
                    self.metric, iteration)
            if empty:
                # Recovery rewrites rows the step already measured
                residual = torch.norm(buffers.current - buffers.next).item()

            buffers.swap()
            reporter.iteration_completed(iteration, residual)
            iteration += 1

            if math.isnan(residual) or math.isinf(residual):
                residual = RESIDUAL_SENTINEL
            history.append(IterationRecord(iteration=iteration - 1,
                                           residual=residual,
                                           empty_clusters=empty))

            if residual <= CONVERGENCE_THRESHOLD:
                converged = True
                break
            if iteration == self.max_iter:
                break

        centroids = buffers.steal()
        reporter.finished(iteration, converged, step.distance_calculations)

        assignments = None
        if return_assignments:
            assignments = self._assign(X, centroids)

        return ClusteringResult(
            centroids=centroids,
            assignments=assignments,
            n_iter=iteration,
            converged=converged,
            residual=residual,
            history=history,
            distance_calculations=step.distance_calculations
        )

    def _initial_centroids(self, X: Tensor, n_clusters: int) -> Tensor:
        """Starting centroids from the partitioner, whichever shape it gives."""
        if n_clusters == 0:
            return X.new_zeros(0, X.shape[1])

        if self.partitioner.gives_centroids:
            centroids = self.partitioner.initial_centroids(X, n_clusters)
            return validate_initial_centroids(centroids, n_clusters, X.shape[1],
                                              dtype=self.dtype, device=self.device)

        assignments = self.partitioner.initial_assignments(X, n_clusters)
        assignments = validate_initial_assignments(assignments, X.shape[0],
                                                   n_clusters, device=self.device)
        return centroids_from_assignments(X, assignments, n_clusters)

    def _assign(self, X: Tensor, centroids: Tensor) -> Tensor:
        """Nearest centroid per point, ties to the lowest index.

        With no centroids every point is labelled -1.
        """
        if centroids.shape[0] == 0:
            return torch.full((X.shape[0],), -1, dtype=torch.long, device=X.device)
        return nearest_centroids(X, centroids.to(dtype=X.dtype, device=X.device),
                                 self.metric, self.batch_size)

    def fit(self, X: Union[Tensor, np.ndarray, list],
            y: Optional[Tensor] = None) -> 'KMeans':
        """Fit K-means clustering.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            Training data
        y : Ignored
            Not used, present for API consistency

        Returns
        -------
        self : KMeans
            Fitted estimator
        """
        X = self._validate_data(X)
        super().fit(X, y)
        self.inertia_ = inertia(X, self.labels_, self.cluster_centers_, self.metric)
        return self

    def score(self, X: Union[Tensor, np.ndarray, list],
              y: Optional[Tensor] = None) -> float:
        """Opposite of the value of X on the K-means objective.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            New data
        y : Ignored

        Returns
        -------
        score : float
            Negative of sum of squared distances to centers
        """
        labels = self.predict(X)
        X = self._validate_data(X)
        return -inertia(X, labels, self.cluster_centers_, self.metric)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Flat configuration record; KMeans(**get_params()) rebuilds the engine."""
        params = super().get_params(deep)
        params.update({
            'metric': self.metric,
            'partitioner': self.partitioner,
            'empty_cluster_policy': self.empty_cluster_policy,
            'step': self.step,
            'batch_size': self.batch_size,
            'reporter': self.reporter
        })
        return params
