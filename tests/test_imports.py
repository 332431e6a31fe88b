import importlib
import pytest


@pytest.mark.parametrize("module", [
    "kcentroids",
    "kcentroids.algorithms",
    "kcentroids.base",
    "kcentroids.distances",
    "kcentroids.initialization",
    "kcentroids.empty_clusters",
    "kcentroids.updates",
    "kcentroids.utils",
])
def test_submodules_exist(module):
    mod = importlib.import_module(module)
    assert mod is not None


def test_public_names_resolve():
    import kcentroids
    for name in kcentroids.__all__:
        assert hasattr(kcentroids, name), name
