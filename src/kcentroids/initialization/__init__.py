"""Initial partition strategies for clustering algorithms."""

from .random_partition import RandomPartition
from .sample import SampleInitialization
from .kmeans_plusplus import KMeansPlusPlusInit
from .refined_start import RefinedStart

__all__ = [
    # Assignment-producing
    'RandomPartition',

    # Centroid-producing
    'SampleInitialization',
    'KMeansPlusPlusInit',
    'RefinedStart'
]
