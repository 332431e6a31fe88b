"""Utility functions for the k-centroids engine."""

from .validation import (
    validate_data,
    check_random_state,
    check_n_clusters,
    check_max_iter,
    validate_initial_centroids,
    validate_initial_assignments
)

from .reporting import (
    VerboseReporter,
    RecordingReporter
)

from .metrics import (
    inertia
)

from .device import (
    get_default_device,
    parse_device
)

__all__ = [
    # Validation
    'validate_data',
    'check_random_state',
    'check_n_clusters',
    'check_max_iter',
    'validate_initial_centroids',
    'validate_initial_assignments',

    # Reporting
    'VerboseReporter',
    'RecordingReporter',

    # Metrics
    'inertia',

    # Device management
    'get_default_device',
    'parse_device'
]
