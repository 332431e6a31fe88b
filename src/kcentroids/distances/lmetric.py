"""
Minkowski (L-p) distance family.
"""

import math
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class LMetric(DistanceMetric):
    """L-p distance (sum_i |a_i - b_i|^p)^(1/p).

    p = inf gives the Chebyshev distance max_i |a_i - b_i|.
    """

    def __init__(self, power: float = 2.0, take_root: bool = True):
        """
        Args:
            power: Order p of the metric, p >= 1 (math.inf allowed)
            take_root: If False, skip the final 1/p power
        """
        if power < 1:
            raise ValueError(f"power must be >= 1, got {power}")
        self.power = power
        self.take_root = take_root

    def evaluate(self, a: Tensor, b: Tensor) -> float:
        return self.pairwise(a.unsqueeze(0), b.unsqueeze(0))[0, 0].item()

    def pairwise(self, points: Tensor, centroids: Tensor) -> Tensor:
        diff = torch.abs(points.unsqueeze(1) - centroids.unsqueeze(0))
        if math.isinf(self.power):
            if diff.shape[2] == 0:
                return diff.sum(dim=2)
            return diff.max(dim=2).values

        powered = torch.sum(diff ** self.power, dim=2)
        if self.take_root:
            return powered ** (1.0 / self.power)
        return powered

    def __repr__(self) -> str:
        return f"LMetric(power={self.power}, take_root={self.take_root})"


class ManhattanDistance(LMetric):
    """L1 distance."""

    def __init__(self):
        super().__init__(power=1.0)


class ChebyshevDistance(LMetric):
    """L-infinity distance."""

    def __init__(self):
        super().__init__(power=math.inf)
