"""
Input validation utilities.

Provides functions for validating data, initial guesses and configuration
before a clustering run, including conversion to tensors and the checks whose
failure aborts a run.
"""

from typing import Optional, Union, List
import torch
from torch import Tensor
import numpy as np

from ..base.exceptions import ConfigurationError


def validate_data(X: Union[Tensor, np.ndarray, list],
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None,
                  ensure_finite: bool = True,
                  copy: bool = False) -> Tensor:
    """Validate and convert input data to a 2D tensor.

    Args:
        X: Input data (tensor, numpy array, or list)
        dtype: Target data type
        device: Target device
        ensure_finite: Whether to check for inf/nan
        copy: Whether to force a copy

    Returns:
        Validated (n, d) tensor

    Raises:
        TypeError: If X cannot be converted
        ValueError: If validation fails
    """
    if isinstance(X, Tensor):
        X = X.to(dtype=dtype, device=device, copy=copy)
    elif isinstance(X, np.ndarray):
        X = torch.as_tensor(X).to(dtype=dtype, device=device, copy=copy)
    elif isinstance(X, list):
        X = torch.tensor(X, dtype=dtype, device=device)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() == 1:
        X = X.unsqueeze(1)
    elif X.dim() != 2:
        raise ValueError(f"Expected 2D array, got {X.dim()}D")

    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> Optional[torch.Generator]:
    """Create generator from random state.

    Args:
        random_state: Seed or generator

    Returns:
        Generator or None (use the global generator)
    """
    if random_state is None:
        return None
    elif isinstance(random_state, (int, np.integer)):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def check_n_clusters(n_clusters: int, n_samples: int) -> List[str]:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Returns:
        Messages describing degenerate but runnable configurations

    Raises:
        TypeError: If n_clusters is not an integer
        ValueError: If n_clusters is negative
    """
    if not isinstance(n_clusters, (int, np.integer)) or isinstance(n_clusters, bool):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")
    if n_clusters < 0:
        raise ValueError(f"n_clusters must be non-negative, got {n_clusters}")

    messages = []
    if n_clusters > n_samples:
        messages.append(f"more clusters requested ({n_clusters}) than points "
                        f"given ({n_samples}); some clusters may stay empty")
    elif n_clusters == 0:
        messages.append("zero clusters requested; the run will not produce "
                        "meaningful clusters")
    return messages


def check_max_iter(max_iter: int) -> List[str]:
    """Validate the iteration budget; 0 means no limit."""
    if not isinstance(max_iter, (int, np.integer)) or isinstance(max_iter, bool):
        raise TypeError(f"max_iter must be int, got {type(max_iter)}")
    if max_iter < 0:
        raise ValueError(f"max_iter must be non-negative, got {max_iter}")
    if max_iter == 0:
        return ["max_iter=0 removes the iteration limit; the run only stops "
                "once the residual falls below the convergence threshold"]
    return []


def validate_initial_centroids(centroids: Union[Tensor, np.ndarray, list],
                               n_clusters: int, dimension: int,
                               dtype: torch.dtype = torch.float64,
                               device: Optional[torch.device] = None) -> Tensor:
    """Validate an initial centroid guess and return a private copy.

    Args:
        centroids: (n_clusters, dimension) initial centroids
        n_clusters: Expected number of clusters
        dimension: Dimension of the data

    Returns:
        (n_clusters, dimension) tensor not shared with the caller

    Raises:
        ConfigurationError: If the shape does not match
    """
    centroids = torch.as_tensor(centroids)
    if centroids.dim() != 2:
        raise ConfigurationError(f"Initial centroids must be 2D, got "
                                 f"{centroids.dim()}D")
    if centroids.shape[0] != n_clusters:
        raise ConfigurationError(f"Wrong number of initial cluster centroids "
                                 f"({centroids.shape[0]}, should be {n_clusters})")
    if centroids.shape[1] != dimension:
        raise ConfigurationError(f"Initial cluster centroids have wrong "
                                 f"dimensionality ({centroids.shape[1]}, "
                                 f"should be {dimension})")
    return centroids.to(dtype=dtype, device=device, copy=True)


def validate_initial_assignments(assignments: Union[Tensor, np.ndarray, list],
                                 n_samples: int, n_clusters: int,
                                 device: Optional[torch.device] = None) -> Tensor:
    """Validate an initial assignment guess.

    Args:
        assignments: (n_samples,) cluster indices
        n_samples: Number of points in the dataset
        n_clusters: Number of clusters

    Returns:
        (n_samples,) long tensor

    Raises:
        ConfigurationError: If the length or a value is out of range
    """
    assignments = torch.as_tensor(assignments)
    if assignments.dim() != 1 or assignments.shape[0] != n_samples:
        raise ConfigurationError(f"Initial cluster assignments (length "
                                 f"{assignments.numel()}) not the same size as "
                                 f"the dataset (size {n_samples})")
    if assignments.is_floating_point():
        raise ConfigurationError("Initial cluster assignments must be integers")
    assignments = assignments.to(dtype=torch.long, device=device, copy=True)
    if n_samples > 0 and (assignments.min() < 0 or assignments.max() >= n_clusters):
        raise ConfigurationError(f"Initial cluster assignments must lie in "
                                 f"[0, {n_clusters})")
    return assignments
