"""
Diagnostics reporters for clustering runs.

The engine emits events to a ClusteringReporter instead of printing. The
verbose reporter reproduces the familiar `verbose` behaviour: warnings for
degenerate configurations, progress lines on stdout.
"""

from typing import Optional, List, Tuple, Any
import warnings

from ..base.interfaces import ClusteringReporter
from ..base.exceptions import DegenerateConfigurationWarning


class VerboseReporter(ClusteringReporter):
    """Reporter driven by a verbosity level.

    Degenerate configurations always raise a DegenerateConfigurationWarning.
    verbose=1 prints every tenth iteration and the final status, verbose=2
    also prints every iteration and each empty cluster.
    """

    def __init__(self, verbose: int = 0):
        self.verbose = verbose

    def degenerate_configuration(self, message: str) -> None:
        warnings.warn(message, DegenerateConfigurationWarning, stacklevel=3)

    def empty_cluster(self, cluster: int, iteration: int) -> None:
        if self.verbose >= 2:
            print(f"Cluster {cluster} is empty (iteration {iteration})")

    def iteration_completed(self, iteration: int, residual: float) -> None:
        if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
            print(f"Iteration {iteration:3d}: residual = {residual:.6g}")

    def finished(self, iterations: int, converged: bool,
                 distance_calculations: Optional[int] = None) -> None:
        if not self.verbose:
            return
        if converged:
            print(f"Converged after {iterations} iterations")
        else:
            print(f"Terminated after limit of {iterations} iterations")
        if distance_calculations is not None:
            print(f"{distance_calculations} distance calculations")


class RecordingReporter(ClusteringReporter):
    """Reporter that stores every event as (name, payload) for later inspection."""

    def __init__(self):
        self.events: List[Tuple[str, Any]] = []

    def degenerate_configuration(self, message: str) -> None:
        self.events.append(('degenerate_configuration', message))

    def empty_cluster(self, cluster: int, iteration: int) -> None:
        self.events.append(('empty_cluster', (cluster, iteration)))

    def iteration_completed(self, iteration: int, residual: float) -> None:
        self.events.append(('iteration_completed', (iteration, residual)))

    def finished(self, iterations: int, converged: bool,
                 distance_calculations: Optional[int] = None) -> None:
        self.events.append(('finished', (iterations, converged, distance_calculations)))

    def of(self, name: str) -> List[Any]:
        """Payloads of all events with the given name."""
        return [payload for event, payload in self.events if event == name]

    def clear(self) -> None:
        self.events = []
