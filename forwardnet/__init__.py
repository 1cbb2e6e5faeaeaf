"""
forwardnet - a small NumPy-backed library for feed-forward network inference.

This package provides:
- A 2-D Tensor type with elementwise add, matrix multiply and flatten
- Dense and Conv2D layers with seeded, uniform [0, 1) parameters
- A sequential Model that checks layer shapes before running a forward pass
"""

__version__ = "0.1.0"

from forwardnet.core.tensor import Tensor, zeros, ones, rand, eye, checkerboard
from forwardnet.core.layers import Layer, Dense, Conv2D, make_rng
from forwardnet.core.model import Model
from forwardnet.errors import (
    ForwardNetError, ShapeError, EmptyTensorError, ShapeMismatchError,
    KernelSizeError, LayerChainError,
)

__all__ = [
    # Core
    'Tensor', 'Layer', 'Dense', 'Conv2D', 'Model',
    'zeros', 'ones', 'rand', 'eye', 'checkerboard', 'make_rng',

    # Errors
    'ForwardNetError', 'ShapeError', 'EmptyTensorError', 'ShapeMismatchError',
    'KernelSizeError', 'LayerChainError',
]
