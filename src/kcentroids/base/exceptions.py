"""Errors and warnings raised by the clustering engine."""


class ConfigurationError(ValueError):
    """Initial guess does not match the dataset or the number of clusters.

    Raised before the first iteration; no output is produced.
    """
    pass


class DegenerateConfigurationWarning(UserWarning):
    """Configuration is unlikely to give meaningful clusters (K=0, K>N, max_iter=0)."""
    pass
