"""
k-centroids: a pluggable Lloyd's algorithm (K-means) engine.

The engine composes four policies:
- a distance metric
- an initial partitioner (giving either assignments or centroids)
- an empty cluster policy
- an iteration step (Lloyd's update)

Example usage:
    >>> import torch
    >>> from kcentroids import KMeans, KMeansPlusPlusInit
    >>>
    >>> X = torch.randn(1000, 10)
    >>>
    >>> kmeans = KMeans(n_clusters=5, partitioner=KMeansPlusPlusInit(), verbose=1)
    >>> kmeans.fit(X)
    >>> labels = kmeans.predict(X)
    >>>
    >>> # Or call the engine directly
    >>> result = kmeans.cluster(X, 5, initial_centroids=kmeans.cluster_centers_)
    >>> result.n_iter
    1
"""

__version__ = '0.1.0'

# Import main algorithm
from .algorithms.kmeans import KMeans

# Policies
from .distances import (
    EuclideanDistance,
    WeightedEuclideanDistance,
    LMetric,
    ManhattanDistance,
    ChebyshevDistance
)
from .initialization import (
    RandomPartition,
    SampleInitialization,
    KMeansPlusPlusInit,
    RefinedStart
)
from .empty_clusters import (
    MaxVarianceNewCluster,
    FarthestPointNewCluster,
    AllowEmptyClusters
)
from .updates import LloydStep

# Convenience imports
from .base import (
    DistanceMetric,
    InitialPartitioner,
    EmptyClusterPolicy,
    IterationStep,
    ClusteringReporter,
    ConfigurationError,
    DegenerateConfigurationWarning,
    ClusteringResult
)
from .utils.reporting import VerboseReporter, RecordingReporter

__all__ = [
    # Algorithm
    'KMeans',

    # Distances
    'EuclideanDistance',
    'WeightedEuclideanDistance',
    'LMetric',
    'ManhattanDistance',
    'ChebyshevDistance',

    # Initial partitioners
    'RandomPartition',
    'SampleInitialization',
    'KMeansPlusPlusInit',
    'RefinedStart',

    # Empty cluster policies
    'MaxVarianceNewCluster',
    'FarthestPointNewCluster',
    'AllowEmptyClusters',

    # Iteration step
    'LloydStep',

    # Interfaces and results
    'DistanceMetric',
    'InitialPartitioner',
    'EmptyClusterPolicy',
    'IterationStep',
    'ClusteringReporter',
    'ConfigurationError',
    'DegenerateConfigurationWarning',
    'ClusteringResult',

    # Reporters
    'VerboseReporter',
    'RecordingReporter',

    # Version
    '__version__'
]
