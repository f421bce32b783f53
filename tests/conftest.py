import numpy as np
import pytest

from normfix.test_options import pytest_addoption  # noqa: F401


@pytest.fixture
def rng(request):
    """Pseudo-random number generator seeded from the ``--seed`` option."""
    return np.random.RandomState(request.config.getoption("--seed"))


@pytest.fixture
def unit_samples(request, rng):
    """Representative values in [0, 1] followed by ``--samples`` pseudo-random
    values in the same range.
    """
    n_samples = request.config.getoption("--samples")
    return np.concatenate(([0.0, 0.25, 0.5, 0.75, 1.0],
                           rng.uniform(0.0, 1.0, size=n_samples)))


@pytest.fixture
def signed_samples(request, rng):
    """Representative values in [-1, 1] followed by pseudo-random ones."""
    n_samples = request.config.getoption("--samples")
    return np.concatenate(([-1.0, -0.5, 0.0, 0.5, 1.0],
                           rng.uniform(-1.0, 1.0, size=n_samples)))
