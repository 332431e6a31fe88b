"""
Reproducibility and termination properties of the KMeans engine.

- same seed, same inputs: bit-identical centroids and assignments
- restarting from the final centroids converges in one iteration, also
  with a cluster that stays empty
- the iteration count never exceeds max_iter
- assignments are valid and counts sum to n for every partitioner/policy pair
"""

from __future__ import annotations

import itertools

import pytest
import torch

from kcentroids import (
    KMeans,
    RandomPartition,
    SampleInitialization,
    KMeansPlusPlusInit,
    MaxVarianceNewCluster,
    FarthestPointNewCluster,
    AllowEmptyClusters,
    RecordingReporter,
)
from data_gen import make_blobs


def _resolved_seed(val, default=1337) -> int:
    return int(val) if isinstance(val, int) else int(default)


@pytest.mark.parametrize("make_partitioner", [
    lambda seed: RandomPartition(random_state=seed),
    lambda seed: SampleInitialization(random_state=seed),
    lambda seed: KMeansPlusPlusInit(random_state=seed),
])
def test_bit_identical_runs(seed_all, make_partitioner):
    seed = _resolved_seed(seed_all)
    X, _, _ = make_blobs(n_per=80, centers=[[0, 0], [3, 0], [0, 3], [3, 3]],
                         scale=0.8, seed=seed)

    r1 = KMeans(partitioner=make_partitioner(seed)).cluster(X, 4)
    r2 = KMeans(partitioner=make_partitioner(seed)).cluster(X, 4)

    assert torch.equal(r1.centroids, r2.centroids)
    assert torch.equal(r1.assignments, r2.assignments)
    assert r1.n_iter == r2.n_iter


def test_same_engine_twice_with_random_state(seed_all):
    seed = _resolved_seed(seed_all)
    X, _, _ = make_blobs(n_per=50, seed=seed)
    km = KMeans(random_state=seed)

    r1 = km.cluster(X, 3)
    r2 = km.cluster(X, 3)
    assert torch.equal(r1.centroids, r2.centroids)
    assert torch.equal(r1.assignments, r2.assignments)


@pytest.mark.parametrize("make_policy", [
    MaxVarianceNewCluster, FarthestPointNewCluster, AllowEmptyClusters,
])
def test_restart_from_final_centroids_converges_immediately(seed_all, make_policy):
    seed = _resolved_seed(seed_all)
    X, _, _ = make_blobs(n_per=60, seed=seed)
    km = KMeans(partitioner=KMeansPlusPlusInit(random_state=seed),
                empty_cluster_policy=make_policy())

    first = km.cluster(X, 3)
    assert first.converged

    second = km.cluster(X, 3, initial_centroids=first.centroids)
    assert second.n_iter == 1
    assert second.converged
    assert second.residual <= 1e-5
    assert torch.allclose(first.centroids, second.centroids, atol=1e-9)
    assert torch.equal(first.assignments, second.assignments)


def test_restart_with_persistent_empty_cluster():
    X, _, _ = make_blobs(n_per=40, centers=[[0, 0], [5, 5]], seed=4)
    guess = [[0.0, 0.0], [5.0, 5.0], [100.0, -100.0]]
    km = KMeans(empty_cluster_policy=AllowEmptyClusters(), max_iter=0,
                reporter=RecordingReporter())

    first = km.cluster(X, 3, initial_centroids=guess)
    assert first.converged
    assert first.counts().tolist()[2] == 0

    second = km.cluster(X, 3, initial_centroids=first.centroids)
    assert second.n_iter == 1
    assert second.converged
    assert second.history[0].empty_clusters == [2]
    assert torch.equal(first.centroids, second.centroids)
    assert torch.equal(first.assignments, second.assignments)


def test_restart_with_more_clusters_than_points():
    X = torch.tensor([[0.0, 0.0], [5.0, 5.0], [9.0, 1.0]], dtype=torch.float64)
    km = KMeans(partitioner=SampleInitialization(random_state=0),
                empty_cluster_policy=AllowEmptyClusters(), max_iter=0,
                reporter=RecordingReporter())

    first = km.cluster(X, 5)
    assert first.converged
    assert int((first.counts() > 0).sum()) == 3

    second = km.cluster(X, 5, initial_centroids=first.centroids)
    assert second.n_iter == 1
    assert second.converged
    assert torch.equal(first.centroids, second.centroids)
    assert torch.equal(first.assignments, second.assignments)


@pytest.mark.parametrize("max_iter", [1, 2, 5])
def test_iteration_limit_is_respected(max_iter):
    X, _, _ = make_blobs(n_per=100, centers=[[0, 0], [1, 0], [0, 1], [1, 1]],
                         scale=1.0, seed=0)
    result = KMeans(max_iter=max_iter,
                    partitioner=RandomPartition(random_state=0)).cluster(X, 8)

    assert result.n_iter <= max_iter
    assert len(result.history) == result.n_iter
    assert [r.iteration for r in result.history] == list(range(result.n_iter))


@pytest.mark.parametrize("partitioner,policy", list(itertools.product(
    [RandomPartition(random_state=2), SampleInitialization(random_state=2),
     KMeansPlusPlusInit(random_state=2)],
    [MaxVarianceNewCluster(), FarthestPointNewCluster(), AllowEmptyClusters()],
)))
def test_assignments_valid_for_all_policy_pairs(partitioner, policy):
    X, _, _ = make_blobs(n_per=25, seed=2)
    K = 5
    result = KMeans(partitioner=partitioner, empty_cluster_policy=policy,
                    max_iter=50).cluster(X, K)

    assert result.centroids.shape == (K, X.shape[1])
    assert result.assignments.shape == (X.shape[0],)
    assert ((result.assignments >= 0) & (result.assignments < K)).all()
    assert int(result.counts().sum()) == X.shape[0]
    assert torch.isfinite(result.centroids).all()
