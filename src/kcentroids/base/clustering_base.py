"""
Base class for clustering estimators in the k-centroids package.

Provides the estimator surface shared by the engines: data validation,
device and seed handling, fit/predict and sklearn-style parameters.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, Union
import numpy as np
import torch
from torch import Tensor

from .data_structures import ClusteringResult
from ..utils.validation import validate_data
from ..utils.device import parse_device


class BaseClusteringAlgorithm:
    """Base class wrapping a `cluster` call into a fit/predict estimator.

    Subclasses implement:
    - cluster(): the actual clustering run
    - _assign(): nearest-centroid labels for new data
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 1000,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 dtype: torch.dtype = torch.float64,
                 device: Optional[Union[str, torch.device]] = None):
        """
        Args:
            n_clusters: Number of clusters K used by fit()
            max_iter: Maximum iterations (0 disables the limit)
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Random seed applied at the start of every run
            dtype: Floating point type of the computation
            device: Torch device (None for CPU)
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.verbose = verbose
        self.random_state = random_state
        self.dtype = dtype
        self.device = parse_device(device)

        # Fitted state
        self.fitted_ = False
        self.result_: Optional[ClusteringResult] = None

    @abstractmethod
    def cluster(self, X, n_clusters: int, **kwargs) -> ClusteringResult:
        """Run the clustering algorithm on X."""
        pass

    @abstractmethod
    def _assign(self, X: Tensor, centroids: Tensor) -> Tensor:
        """Label each row of X with its nearest centroid."""
        pass

    def fit(self, X: Union[Tensor, np.ndarray, list],
            y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) data
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        self.result_ = self.cluster(X, self.n_clusters, return_assignments=True)
        self.fitted_ = True
        return self

    def fit_predict(self, X: Union[Tensor, np.ndarray, list],
                    y: Optional[Tensor] = None) -> Tensor:
        """Fit and return cluster assignments of the training data."""
        self.fit(X)
        return self.labels_

    def predict(self, X: Union[Tensor, np.ndarray, list]) -> Tensor:
        """Predict cluster assignments for new data.

        Args:
            X: (n, d) data

        Returns:
            (n,) tensor of cluster indices
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        X = self._validate_data(X)
        centroids = self.result_.centroids
        if X.shape[1] != centroids.shape[1]:
            raise ValueError(f"Expected dimension {centroids.shape[1]}, "
                             f"got {X.shape[1]}")
        return self._assign(X, centroids)

    def _validate_data(self, X: Union[Tensor, np.ndarray, list]) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, dtype=self.dtype, device=self.device)

    def _seed(self) -> None:
        """Seed the global torch generator for a reproducible run."""
        if self.random_state is not None:
            torch.manual_seed(self.random_state)
            if torch.cuda.is_available():
                torch.cuda.manual_seed(self.random_state)

    @property
    def cluster_centers_(self) -> Tensor:
        """(K, d) centroids of the last fit."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.centroids

    @property
    def labels_(self) -> Tensor:
        """(n,) assignments of the training data."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.assignments

    @property
    def n_iter_(self) -> int:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.n_iter

    @property
    def converged_(self) -> bool:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.converged

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'dtype': self.dtype,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter {key!r} for "
                                 f"{self.__class__.__name__}")
            if key == 'device':
                value = parse_device(value)
            setattr(self, key, value)
        return self
