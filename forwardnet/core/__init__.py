"""Core framework components for forwardnet."""

from .tensor import Tensor
from .layers import Layer, Dense, Conv2D
from .model import Model

__all__ = ['Tensor', 'Layer', 'Dense', 'Conv2D', 'Model']
