"""
Initial partitioners: shape, capability flag and reproducibility.
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from kcentroids.initialization import (
    RandomPartition,
    SampleInitialization,
    KMeansPlusPlusInit,
    RefinedStart,
)
from kcentroids import KMeans
from data_gen import make_blobs, match_centers


@pytest.fixture
def blobs():
    X, y, C = make_blobs(n_per=60, seed=11)
    return torch.as_tensor(X), C


def test_random_partition_balanced_and_reproducible(blobs):
    X, _ = blobs
    part = RandomPartition(random_state=5)
    assert part.gives_centroids is False

    a1 = part.initial_assignments(X, 4)
    a2 = part.initial_assignments(X, 4)
    assert a1.shape == (X.shape[0],)
    assert a1.dtype == torch.long
    assert torch.equal(a1, a2)

    counts = torch.bincount(a1, minlength=4)
    assert int(counts.max() - counts.min()) <= 1

    with pytest.raises(NotImplementedError):
        part.initial_centroids(X, 4)


def test_sample_initialization_picks_data_points(blobs):
    X, _ = blobs
    init = SampleInitialization(random_state=1)
    assert init.gives_centroids is True

    C = init.initial_centroids(X, 3)
    assert C.shape == (3, X.shape[1])
    for row in C:
        assert (X == row).all(dim=1).any()
    # Distinct points when K <= n
    assert torch.unique(C, dim=0).shape[0] == 3

    with pytest.raises(NotImplementedError):
        init.initial_assignments(X, 3)


def test_sample_initialization_more_clusters_than_points():
    X = torch.tensor([[0.0], [1.0]], dtype=torch.float64)
    C = SampleInitialization(random_state=0).initial_centroids(X, 5)
    assert C.shape == (5, 1)
    # Every point is used at least once
    assert set(C[:2, 0].tolist()) == {0.0, 1.0}


def test_kmeans_plusplus_spreads_centers(blobs):
    X, centers = blobs
    init = KMeansPlusPlusInit(random_state=3)
    assert init.gives_centroids is True

    C = init.initial_centroids(X, 3)
    assert C.shape == (3, 2)
    # One seed near each blob
    assert (match_centers(C.numpy(), centers) < 1.5).all()
    assert torch.equal(C, KMeansPlusPlusInit(random_state=3).initial_centroids(X, 3))


def test_kmeans_plusplus_duplicate_points():
    X = torch.ones(4, 2, dtype=torch.float64)
    C = KMeansPlusPlusInit(random_state=0).initial_centroids(X, 3)
    assert torch.equal(C, torch.ones(3, 2, dtype=torch.float64))


def test_refined_start_seeds_recover_blobs(blobs):
    X, centers = blobs
    init = RefinedStart(samplings=20, percentage=0.3, random_state=2)
    assert init.gives_centroids is True

    C = init.initial_centroids(X, 3)
    assert C.shape == (3, 2)
    assert np.isfinite(C.numpy()).all()
    # One seed near each blob
    assert (match_centers(C.numpy(), centers) < 1.5).all()

    # Lloyd iterations from those seeds settle on the blob means
    result = KMeans().cluster(X, 3, initial_centroids=C)
    assert result.converged
    assert (match_centers(result.centroids.numpy(), centers) < 0.2).all()


def test_refined_start_rejects_bad_parameters():
    with pytest.raises(ValueError):
        RefinedStart(samplings=0)
    with pytest.raises(ValueError):
        RefinedStart(percentage=1.5)
