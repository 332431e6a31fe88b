"""Distance metrics for clustering algorithms."""

from .euclidean import EuclideanDistance, WeightedEuclideanDistance
from .lmetric import LMetric, ManhattanDistance, ChebyshevDistance

__all__ = [
    # Euclidean distances
    'EuclideanDistance',
    'WeightedEuclideanDistance',

    # Minkowski family
    'LMetric',
    'ManhattanDistance',
    'ChebyshevDistance'
]
