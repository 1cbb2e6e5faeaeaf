import logging

import numpy as np
import pytest

from forwardnet import Tensor, checkerboard


@pytest.fixture(autouse=True)
def setup_logging():
    """Keep library debug logging quiet during tests."""
    logging.getLogger("forwardnet").setLevel(logging.CRITICAL)

    yield

    logging.getLogger("forwardnet").setLevel(logging.NOTSET)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def board():
    """The 5x5 binary checkerboard used by the demo."""
    return checkerboard(5)


def correlate_valid(image, kernel):
    """Reference valid-mode cross-correlation written out with loops."""
    image = np.asarray(image)
    kernel = np.asarray(kernel)
    k = kernel.shape[0]
    out = np.zeros((image.shape[0] - k + 1, image.shape[1] - k + 1))
    for i in range(out.shape[0]):
        for j in range(out.shape[1]):
            out[i, j] = np.sum(image[i:i + k, j:j + k] * kernel)
    return Tensor(out)
