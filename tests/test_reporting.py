"""
Reporters: the verbose reporter warns and prints, the recording reporter keeps events.
"""

from __future__ import annotations

import pytest

from kcentroids.base.exceptions import DegenerateConfigurationWarning
from kcentroids.utils.reporting import VerboseReporter, RecordingReporter


def test_verbose_reporter_warns_on_degenerate_configuration():
    with pytest.warns(DegenerateConfigurationWarning, match="zero clusters"):
        VerboseReporter(verbose=0).degenerate_configuration("zero clusters requested")


def test_verbose_reporter_silent_at_level_zero(capsys):
    reporter = VerboseReporter(verbose=0)
    reporter.empty_cluster(1, 0)
    reporter.iteration_completed(0, 0.5)
    reporter.finished(3, True, 120)
    assert capsys.readouterr().out == ""


def test_verbose_reporter_levels(capsys):
    reporter = VerboseReporter(verbose=1)
    reporter.iteration_completed(0, 0.5)
    reporter.iteration_completed(3, 0.25)
    reporter.empty_cluster(2, 3)
    reporter.finished(4, False, 80)
    out = capsys.readouterr().out
    assert "Iteration   0" in out
    assert "Iteration   3" not in out
    assert "Cluster 2" not in out
    assert "Terminated after limit of 4 iterations" in out
    assert "80 distance calculations" in out

    reporter = VerboseReporter(verbose=2)
    reporter.iteration_completed(3, 0.25)
    reporter.empty_cluster(2, 3)
    reporter.finished(4, True)
    out = capsys.readouterr().out
    assert "Iteration   3" in out
    assert "Cluster 2 is empty" in out
    assert "Converged after 4 iterations" in out


def test_recording_reporter():
    reporter = RecordingReporter()
    reporter.degenerate_configuration("msg")
    reporter.empty_cluster(1, 0)
    reporter.iteration_completed(0, 1.0)
    reporter.finished(1, True, 10)

    assert reporter.of("degenerate_configuration") == ["msg"]
    assert reporter.of("empty_cluster") == [(1, 0)]
    assert reporter.of("iteration_completed") == [(0, 1.0)]
    assert reporter.of("finished") == [(1, True, 10)]

    reporter.clear()
    assert reporter.events == []
