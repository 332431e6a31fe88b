"""Base classes and interfaces for the k-centroids engine."""

from .interfaces import (
    DistanceMetric,
    InitialPartitioner,
    EmptyClusterPolicy,
    IterationStep,
    ClusteringReporter
)

from .exceptions import (
    ConfigurationError,
    DegenerateConfigurationWarning
)

from .data_structures import (
    CentroidBuffers,
    IterationRecord,
    ClusteringResult
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'DistanceMetric',
    'InitialPartitioner',
    'EmptyClusterPolicy',
    'IterationStep',
    'ClusteringReporter',

    # Errors
    'ConfigurationError',
    'DegenerateConfigurationWarning',

    # Data structures
    'CentroidBuffers',
    'IterationRecord',
    'ClusteringResult',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
