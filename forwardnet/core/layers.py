"""
Neural network layers for the forwardnet package.
Provides the fully connected Dense layer and the Conv2D convolutional layer.
"""

import logging
import warnings
from abc import ABC, abstractmethod
from typing import Optional, Union, Tuple, Callable, List

import numpy as np
from scipy.signal import correlate2d

from .tensor import Tensor
from ..errors import ShapeMismatchError, KernelSizeError

logger = logging.getLogger(__name__)

RandomState = Optional[Union[int, np.random.Generator]]

MERGE_MODES = ('last', 'stack')


def make_rng(rng: RandomState = None) -> np.random.Generator:
    """
    Turn a seed or generator into a numpy Generator.

    Args:
        rng: None for fresh OS entropy, an int seed, or an existing Generator
             (returned as is so several layers can share one stream)
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None or isinstance(rng, (int, np.integer)):
        return np.random.default_rng(rng)
    raise TypeError(f"rng must be None, an int seed or a numpy Generator, got {type(rng)}")


class Layer(ABC):
    """
    Abstract base class for all layers.

    A layer owns its parameters and maps one Tensor to another. Subclasses
    implement forward() and compute_output_shape().
    """

    def __init__(self, name: Optional[str] = None):
        """
        Initialize the layer.

        Args:
            name: Optional name for the layer
        """
        self.name = name or self.__class__.__name__
        self.built = False
        self.input_shape = None
        self.output_shape = None

    @abstractmethod
    def forward(self, x: Tensor) -> Tensor:
        """
        Forward pass through the layer.

        Args:
            x: Input tensor

        Returns:
            Output tensor
        """
        pass

    @abstractmethod
    def compute_output_shape(self, input_shape: Tuple[int, int]) -> Tuple[int, int]:
        """
        Return the output shape for an input of the given shape.

        Raises:
            ShapeError: If the layer cannot accept that shape
        """
        pass

    def build(self, input_shape: Tuple[int, int]) -> Tuple[int, int]:
        """Record the input and output shapes for the given input shape."""
        output_shape = self.compute_output_shape(tuple(input_shape))
        self.input_shape = tuple(input_shape)
        self.output_shape = output_shape
        self.built = True
        return output_shape

    def get_weights(self) -> List[Tensor]:
        """Get all parameters."""
        return []

    def set_weights(self, weights: List[Tensor]):
        """Set all parameters."""
        pass

    def count_params(self) -> int:
        return sum(w.size for w in self.get_weights())

    def get_config(self) -> dict:
        """Get layer configuration."""
        return {'name': self.name}

    def __call__(self, x: Tensor) -> Tensor:
        """Make the layer callable."""
        return self.forward(x)

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.get_config().items() if k != 'name')
        return f"{self.__class__.__name__}({args})"


class Dense(Layer):
    """
    Fully connected (dense) layer.

    Performs the operation: output = dot(flatten(input), weights) + bias
    """

    def __init__(self, input_size: int, output_size: int, rng: RandomState = None,
                 bias_initializer: str = 'uniform', name: Optional[str] = None):
        """
        Initialize Dense layer.

        Args:
            input_size: Number of values in the flattened input
            output_size: Number of output units
            rng: Seed or numpy Generator used to draw the parameters
            bias_initializer: 'uniform' for [0, 1) values, 'zeros' for a zero bias
            name: Layer name
        """
        super().__init__(name)
        if input_size <= 0 or output_size <= 0:
            raise ValueError(
                f"input_size and output_size must be positive, got {input_size} and {output_size}"
            )
        self.input_size = input_size
        self.output_size = output_size
        self.bias_initializer = bias_initializer

        rng = make_rng(rng)
        self.weights = Tensor(uniform_initializer(rng, (input_size, output_size)))
        self.bias = Tensor(get_initializer(bias_initializer)(rng, (1, output_size)))

        logger.debug("Created %s with weights %s and %s bias",
                     self.name, self.weights.shape, bias_initializer)

    def compute_output_shape(self, input_shape: Tuple[int, int]) -> Tuple[int, int]:
        rows, cols = input_shape
        if rows * cols != self.input_size:
            raise ShapeMismatchError(
                f"{self.name} expects {self.input_size} input values, "
                f"got shape {input_shape} ({rows * cols} values)"
            )
        return (1, self.output_size)

    def forward(self, x: Tensor) -> Tensor:
        """Forward pass."""
        if x.size != self.input_size:
            raise ShapeMismatchError(
                f"{self.name} expects {self.input_size} input values, "
                f"got shape {x.shape} ({x.size} values)"
            )
        flat = Tensor.row(x.flatten())
        return flat.dot(self.weights).add(self.bias)

    def get_weights(self) -> List[Tensor]:
        """Get the weight matrix and bias."""
        return [self.weights, self.bias]

    def set_weights(self, weights: List[Tensor]):
        """Set the weight matrix and bias, keeping their shapes."""
        if len(weights) != 2:
            raise ShapeMismatchError(
                f"Expected weights and bias (2 arrays), got {len(weights)}"
            )
        kernel, bias = (w if isinstance(w, Tensor) else Tensor(w) for w in weights)
        if kernel.shape != self.weights.shape or bias.shape != self.bias.shape:
            raise ShapeMismatchError(
                f"Expected weights {self.weights.shape} and bias {self.bias.shape}, "
                f"got {kernel.shape} and {bias.shape}"
            )
        self.weights = kernel
        self.bias = bias

    def get_config(self) -> dict:
        config = super().get_config()
        config.update({
            'input_size': self.input_size,
            'output_size': self.output_size,
            'bias_initializer': self.bias_initializer,
        })
        return config


class Conv2D(Layer):
    """
    2D convolutional layer.

    Applies a bank of square filters to a 2-D input using valid-mode
    cross-correlation (no padding, stride 1).

    With merge='last' every filter overwrites the output and only the last
    filter's map is returned. merge='stack' keeps all maps, stacked
    vertically in filter order.
    """

    def __init__(self, num_filters: int, kernel_size: int, rng: RandomState = None,
                 merge: str = 'last', name: Optional[str] = None):
        """
        Initialize Conv2D layer.

        Args:
            num_filters: Number of filters in the bank
            kernel_size: Side length of each square filter
            rng: Seed or numpy Generator used to draw the filters
            merge: How filter outputs are combined ('last' or 'stack')
            name: Layer name
        """
        super().__init__(name)
        if num_filters <= 0:
            raise ValueError(f"num_filters must be positive, got {num_filters}")
        if kernel_size <= 0:
            raise ValueError(f"kernel_size must be positive, got {kernel_size}")
        if merge not in MERGE_MODES:
            raise ValueError(f"Unknown merge mode: {merge}, use one of {MERGE_MODES}")

        self.num_filters = num_filters
        self.kernel_size = kernel_size
        self.merge = merge

        rng = make_rng(rng)
        self.filters = [Tensor(uniform_initializer(rng, (kernel_size, kernel_size)))
                        for _ in range(num_filters)]

        if merge == 'last' and num_filters > 1:
            warnings.warn(
                f"Conv2D with merge='last' returns only the output of filter "
                f"{num_filters - 1}; filters 0-{num_filters - 2} are discarded. "
                f"Use merge='stack' to keep every filter's output.",
                UserWarning, stacklevel=2
            )

        logger.debug("Created %s with %d filter(s) of size %d, merge=%s",
                     self.name, num_filters, kernel_size, merge)

    def _check_input(self, input_shape: Tuple[int, int]):
        rows, cols = input_shape
        if rows < self.kernel_size or cols < self.kernel_size:
            raise KernelSizeError(self.kernel_size, input_shape)

    def compute_output_shape(self, input_shape: Tuple[int, int]) -> Tuple[int, int]:
        self._check_input(input_shape)
        rows, cols = input_shape
        out_rows = rows - self.kernel_size + 1
        out_cols = cols - self.kernel_size + 1
        if self.merge == 'stack':
            out_rows *= self.num_filters
        return (out_rows, out_cols)

    def convolve(self, x: Tensor) -> Tensor:
        """
        Cross-correlate the input with the filter bank.

        Raises:
            KernelSizeError: If the input is smaller than the kernel in either dimension
        """
        self._check_input(x.shape)
        maps = [correlate2d(x.data, f.data, mode='valid') for f in self.filters]
        if self.merge == 'stack':
            return Tensor(np.vstack(maps))
        return Tensor(maps[-1])

    def forward(self, x: Tensor) -> Tensor:
        """Forward pass."""
        return self.convolve(x)

    def get_weights(self) -> List[Tensor]:
        """Get the filter bank."""
        return list(self.filters)

    def set_weights(self, weights: List[Tensor]):
        """Replace the filter bank, keeping the number and size of filters."""
        filters = [w if isinstance(w, Tensor) else Tensor(w) for w in weights]
        expected = (self.kernel_size, self.kernel_size)
        if len(filters) != self.num_filters or any(f.shape != expected for f in filters):
            raise ShapeMismatchError(
                f"Expected {self.num_filters} filter(s) of shape {expected}, "
                f"got {[f.shape for f in filters]}"
            )
        self.filters = filters

    def get_config(self) -> dict:
        config = super().get_config()
        config.update({
            'num_filters': self.num_filters,
            'kernel_size': self.kernel_size,
            'merge': self.merge,
        })
        return config


# Parameter initializers
def uniform_initializer(rng: np.random.Generator, shape: Tuple[int, int]) -> np.ndarray:
    """Uniform values in [0, 1)."""
    return rng.random(shape)


def zeros_initializer(rng: np.random.Generator, shape: Tuple[int, int]) -> np.ndarray:
    """All zeros; rng is unused."""
    return np.zeros(shape)


def get_initializer(name: str) -> Callable:
    """Get parameter initializer by name."""
    initializers = {
        'uniform': uniform_initializer,
        'zeros': zeros_initializer,
    }

    if name not in initializers:
        raise ValueError(f"Unknown initializer: {name}")

    return initializers[name]
