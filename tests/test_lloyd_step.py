"""
LloydStep: one assignment + mean update pass.

Covers:
- centroids are the means of the points nearest to the previous centroids
- counts sum to n
- empty clusters come back as zero rows
- ties go to the lowest centroid index
- residual is the Frobenius norm of the centroid change
- blocked (batch_size) processing agrees with the single-block pass
"""

from __future__ import annotations

import pytest
import torch

from kcentroids.distances import EuclideanDistance
from kcentroids.updates import LloydStep, nearest_centroids


def _buffers(k, d):
    return (torch.zeros(k, d, dtype=torch.float64),
            torch.zeros(k, dtype=torch.long))


def test_single_iteration_means_and_counts():
    X = torch.tensor([[0.0, 0.0], [0.0, 2.0], [10.0, 10.0], [12.0, 10.0]],
                     dtype=torch.float64)
    C = torch.tensor([[1.0, 1.0], [9.0, 9.0]], dtype=torch.float64)
    new, counts = _buffers(2, 2)

    step = LloydStep(X, EuclideanDistance())
    residual = step.iterate(C, new, counts)

    expected = torch.tensor([[0.0, 1.0], [11.0, 10.0]], dtype=torch.float64)
    assert torch.allclose(new, expected)
    assert counts.tolist() == [2, 2]
    assert residual == pytest.approx(torch.norm(C - expected).item())
    assert step.distance_calculations == 4 * 2


def test_empty_cluster_left_at_zero():
    X = torch.tensor([[0.0], [1.0], [2.0]], dtype=torch.float64)
    C = torch.tensor([[1.0], [100.0]], dtype=torch.float64)
    new, counts = _buffers(2, 1)
    new.fill_(7.0)  # stale values must be overwritten

    LloydStep(X, EuclideanDistance()).iterate(C, new, counts)

    assert counts.tolist() == [3, 0]
    assert new[1].tolist() == [0.0]
    assert int(counts.sum()) == X.shape[0]


def test_ties_go_to_lowest_index():
    X = torch.tensor([[0.0, 0.0]], dtype=torch.float64)
    C = torch.tensor([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0]], dtype=torch.float64)
    labels = nearest_centroids(X, C, EuclideanDistance())
    assert labels.tolist() == [0]


def test_fixed_point_has_zero_residual():
    X = torch.tensor([[0.0, 0.0], [2.0, 0.0], [10.0, 0.0], [12.0, 0.0]],
                     dtype=torch.float64)
    C = torch.tensor([[1.0, 0.0], [11.0, 0.0]], dtype=torch.float64)
    new, counts = _buffers(2, 2)
    assert LloydStep(X, EuclideanDistance()).iterate(C, new, counts) == 0.0


@pytest.mark.parametrize("batch_size", [1, 3, 64])
def test_batched_matches_unbatched(batch_size):
    gen = torch.Generator().manual_seed(3)
    X = torch.randn(50, 4, generator=gen, dtype=torch.float64)
    C = X[:5].clone()

    new_a, counts_a = _buffers(5, 4)
    new_b, counts_b = _buffers(5, 4)
    r_a = LloydStep(X, EuclideanDistance()).iterate(C, new_a, counts_a)
    r_b = LloydStep(X, EuclideanDistance(), batch_size=batch_size).iterate(C, new_b, counts_b)

    assert torch.equal(counts_a, counts_b)
    assert torch.allclose(new_a, new_b, atol=1e-12)
    assert r_a == pytest.approx(r_b, abs=1e-12)


def test_invalid_batch_size():
    with pytest.raises(ValueError):
        LloydStep(torch.zeros(2, 2), EuclideanDistance(), batch_size=0)
