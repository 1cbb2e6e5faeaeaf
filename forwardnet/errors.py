"""
Exceptions raised by the forwardnet package.
All shape problems derive from ShapeError, which is also a ValueError.
"""

from typing import Any, Optional


class ForwardNetError(Exception):
    """Base class for all forwardnet errors."""


class ShapeError(ForwardNetError, ValueError):
    """Tensor data or operand shapes are not usable."""


class EmptyTensorError(ShapeError):
    """A tensor was built with zero rows or zero columns."""


class ShapeMismatchError(ShapeError):
    """Two operands have incompatible shapes."""


class KernelSizeError(ShapeError):
    """A convolution kernel does not fit inside its input."""

    def __init__(self, kernel_size: int, input_shape: tuple):
        self.kernel_size = kernel_size
        self.input_shape = tuple(input_shape)
        super().__init__(
            f"Kernel size ({kernel_size}) is larger than the input "
            f"{self.input_shape}"
        )


class LayerChainError(ShapeError):
    """
    A layer cannot accept the output of the layer before it.

    Attributes:
        index: Position of the offending layer in the model
        layer: The offending layer
    """

    def __init__(self, message: str, index: Optional[int] = None, layer: Any = None):
        self.index = index
        self.layer = layer
        super().__init__(message)
