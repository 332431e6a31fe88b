"""
Euclidean distance metrics.

The default metric of the engine.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """Euclidean distance ||a - b||.

    Nearest-centroid decisions are the same whether or not the root is taken;
    the squared form is cheaper.
    """

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                    If False (default), return actual Euclidean distances.
        """
        self.squared = squared

    def evaluate(self, a: Tensor, b: Tensor) -> float:
        diff = a - b
        squared_distance = torch.dot(diff, diff).item()
        if self.squared:
            return squared_distance
        return squared_distance ** 0.5

    def pairwise(self, points: Tensor, centroids: Tensor) -> Tensor:
        """Compute Euclidean distances from each point to each centroid.

        Args:
            points: (n, d) tensor of points
            centroids: (k, d) tensor of centroids

        Returns:
            (n, k) tensor of distances
        """
        diff = points.unsqueeze(1) - centroids.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"


class WeightedEuclideanDistance(DistanceMetric):
    """Weighted Euclidean distance with feature weights.

    Computes sqrt(sum_i w_i * (a_i - b_i)²) where w_i are feature weights.
    """

    def __init__(self, weights: Tensor, squared: bool = False):
        """
        Args:
            weights: (d,) tensor of non-negative feature weights
            squared: Whether to return squared distances
        """
        weights = torch.as_tensor(weights)
        if weights.dim() != 1:
            raise ValueError(f"Weights must be 1D, got {weights.dim()}D")
        if (weights < 0).any():
            raise ValueError("Weights must be non-negative")
        self.weights = weights
        self.squared = squared

    def evaluate(self, a: Tensor, b: Tensor) -> float:
        weights = self.weights.to(device=a.device, dtype=a.dtype)
        diff = a - b
        squared_distance = torch.sum(weights * diff * diff).item()
        if self.squared:
            return squared_distance
        return squared_distance ** 0.5

    def pairwise(self, points: Tensor, centroids: Tensor) -> Tensor:
        # Ensure weights are on same device
        weights = self.weights.to(device=points.device, dtype=points.dtype)

        diff = points.unsqueeze(1) - centroids.unsqueeze(0)
        weighted_sq_diff = weights.view(1, 1, -1) * diff * diff
        squared_distances = torch.sum(weighted_sq_diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)
