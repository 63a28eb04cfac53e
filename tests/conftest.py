import numpy as np
import pytest

from texture_memory.memory.training import TrainingPair


def pytest_addoption(parser):
    parser.addoption(
        "--run-display",
        action="store_true",
        help="Run tests that open a pygame window",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "display: tests that need a real display surface",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-display"):
        return
    skip = pytest.mark.skip(reason="need --run-display option to run")
    for item in items:
        if "display" in item.keywords:
            item.add_marker(skip)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def striped_image():
    """An 8x5 image whose columns cycle through three colors."""
    palette = np.array([[200, 30, 30], [30, 200, 30], [30, 30, 200]], dtype=np.uint8)
    image = np.empty((8, 5, 3), dtype=np.uint8)
    for i in range(8):
        image[i, :] = palette[i % 3]
    return image


@pytest.fixture
def single_pair():
    context = np.linspace(0.0, 1.0, 24)
    target = np.array([10, 128, 250]) / 255.0
    return TrainingPair(context, target)


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, dt):
        self.now += dt
        return self.now


@pytest.fixture
def clock():
    return FakeClock()
