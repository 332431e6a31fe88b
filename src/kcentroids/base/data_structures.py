"""
Core data structures for the k-centroids engine.

The centroid set is double buffered: one buffer holds the centroids an
iteration reads, the other receives the centroids it writes, and the roles
swap after every iteration so nothing is copied.
"""

from typing import Optional, List
import torch
from torch import Tensor
from dataclasses import dataclass, field


class CentroidBuffers:
    """Two (K, d) centroid buffers with explicit current/next roles."""

    def __init__(self, initial: Tensor):
        """
        Args:
            initial: (K, d) starting centroids; becomes the current buffer
        """
        if initial.dim() != 2:
            raise ValueError(f"Expected 2D centroid tensor, got {initial.dim()}D")
        self._buffers = [initial, torch.zeros_like(initial)]
        self._current = 0

    @property
    def current(self) -> Tensor:
        """Centroids the next iteration reads."""
        return self._buffers[self._current]

    @property
    def next(self) -> Tensor:
        """Buffer the next iteration writes."""
        return self._buffers[1 - self._current]

    @property
    def n_clusters(self) -> int:
        return self._buffers[0].shape[0]

    @property
    def dimension(self) -> int:
        return self._buffers[0].shape[1]

    def swap(self) -> None:
        """Make the most recently written buffer current."""
        self._current = 1 - self._current

    def steal(self) -> Tensor:
        """Hand over the current buffer and drop the other one."""
        result = self.current
        self._buffers = [result, result]
        return result


@dataclass
class IterationRecord:
    """Summary of one engine iteration."""
    iteration: int
    residual: float
    empty_clusters: List[int] = field(default_factory=list)


@dataclass
class ClusteringResult:
    """Outcome of a clustering run.

    Attributes:
        centroids: (K, d) final centroids
        assignments: (n,) final cluster indices, or None if not requested
        n_iter: Number of iterations performed
        converged: Whether the residual dropped below the threshold
        residual: Residual of the last iteration
        history: Per-iteration records
        distance_calculations: Metric evaluations spent in the iteration steps
    """
    centroids: Tensor
    assignments: Optional[Tensor]
    n_iter: int
    converged: bool
    residual: float
    history: List[IterationRecord] = field(default_factory=list)
    distance_calculations: int = 0

    @property
    def n_clusters(self) -> int:
        return self.centroids.shape[0]

    def counts(self) -> Tensor:
        """Points per cluster from the final assignments."""
        if self.assignments is None:
            raise ValueError("Assignments were not computed for this result")
        return torch.bincount(self.assignments, minlength=self.n_clusters)
