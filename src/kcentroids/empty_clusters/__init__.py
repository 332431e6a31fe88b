"""Empty cluster recovery policies."""

from .base_policy import ReassignmentPolicy
from .max_variance import MaxVarianceNewCluster
from .farthest_point import FarthestPointNewCluster
from .allow_empty import AllowEmptyClusters

__all__ = [
    'ReassignmentPolicy',
    'MaxVarianceNewCluster',
    'FarthestPointNewCluster',
    'AllowEmptyClusters'
]
