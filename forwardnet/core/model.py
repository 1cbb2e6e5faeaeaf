"""
Model class for the forwardnet package.
Chains layers into a sequential forward pass with shape checking between layers.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from tqdm import tqdm

from .tensor import Tensor
from .layers import Layer
from ..errors import ShapeError, ShapeMismatchError, LayerChainError

logger = logging.getLogger(__name__)


class Model:
    """
    An ordered stack of layers applied one after another.

    The output of layer i is the input of layer i + 1. Shapes are checked
    through the whole chain before any computation, so an incompatible
    configuration fails with LayerChainError instead of producing garbage.
    """

    def __init__(self, layers: Optional[List[Layer]] = None,
                 input_shape: Optional[Tuple[int, int]] = None,
                 name: Optional[str] = None):
        """
        Initialize the model.

        Args:
            layers: List of layers to add to the model
            input_shape: Expected (rows, cols) of the input; when given, every
                         added layer is checked against the chain immediately
                         and inputs of any other shape are rejected
            name: Name of the model
        """
        self.name = name or "Model"
        self.layers: List[Layer] = []
        self.input_shape = tuple(input_shape) if input_shape is not None else None
        self.output_shape = self.input_shape
        self.built = self.input_shape is not None
        self._built_input_shape = self.input_shape

        for layer in layers or []:
            self.add(layer)

    def add(self, layer: Layer):
        """
        Add a layer to the model.

        Raises:
            LayerChainError: If input_shape is known and the layer cannot
                             accept the current output shape
        """
        if not isinstance(layer, Layer):
            raise TypeError(f"Expected a Layer, got {type(layer).__name__}")

        if self.input_shape is not None:
            output_shape = self._check_layer(len(self.layers), layer, self.output_shape)
            layer.build(self.output_shape)
            self.output_shape = output_shape
        else:
            self.built = False
            self._built_input_shape = None

        self.layers.append(layer)
        logger.debug("Added %s to %s (%d layers)", layer.name, self.name, len(self.layers))

    def build(self, input_shape: Tuple[int, int]) -> Tuple[int, int]:
        """
        Build the model by building all layers for the given input shape.

        The whole chain is checked before any layer records its shapes, so a
        rejected input leaves the model as it was.

        Returns:
            The output shape of the last layer

        Raises:
            ShapeMismatchError: If the model declares a different input_shape
            LayerChainError: If any layer cannot accept its input shape
        """
        input_shape = tuple(input_shape)
        if self.input_shape is not None and input_shape != self.input_shape:
            raise ShapeMismatchError(
                f"{self.name} expects input of shape {self.input_shape}, got {input_shape}"
            )
        if self.built and input_shape == self._built_input_shape:
            return self.output_shape

        shapes = [input_shape]
        for index, layer in enumerate(self.layers):
            shapes.append(self._check_layer(index, layer, shapes[-1]))

        for layer, layer_input in zip(self.layers, shapes):
            layer.build(layer_input)

        self._built_input_shape = input_shape
        self.output_shape = shapes[-1]
        self.built = True
        logger.debug("Built %s: %s -> %s", self.name, input_shape, self.output_shape)
        return self.output_shape

    def _check_layer(self, index: int, layer: Layer,
                     input_shape: Tuple[int, int]) -> Tuple[int, int]:
        try:
            return layer.compute_output_shape(input_shape)
        except ShapeError as e:
            raise LayerChainError(
                f"Layer {index} ({layer.__class__.__name__}) cannot accept input "
                f"of shape {input_shape}: {e}",
                index=index, layer=layer
            ) from e

    def forward(self, x: Tensor) -> Tensor:
        """Forward pass through the model."""
        if not isinstance(x, Tensor):
            x = Tensor(x)
        self.build(x.shape)

        output = x
        for layer in self.layers:
            output = layer(output)

        return output

    def predict(self, inputs: Iterable[Tensor], verbose: bool = False) -> List[Tensor]:
        """
        Run the forward pass over several inputs.

        Args:
            inputs: Input tensors
            verbose: Whether to show a progress bar

        Returns:
            List of output tensors, in input order
        """
        inputs = list(inputs)
        iterator = tqdm(inputs, desc="Predicting") if verbose else inputs
        return [self.forward(x) for x in iterator]

    def count_params(self) -> int:
        return sum(layer.count_params() for layer in self.layers)

    def get_config(self) -> dict:
        """Get model configuration (architecture only, no weights)."""
        return {
            'name': self.name,
            'input_shape': self.input_shape,
            'layers': [
                {'class_name': layer.__class__.__name__, 'config': layer.get_config()}
                for layer in self.layers
            ],
        }

    def summary(self):
        """Print model summary."""
        print(f"Model: {self.name}")
        print("=" * 65)
        print(f"{'Layer (type)':<30} {'Output Shape':<20} {'Param #':<10}")
        print("=" * 65)

        for layer in self.layers:
            layer_name = f"{layer.name} ({layer.__class__.__name__})"
            output_shape = str(layer.output_shape) if layer.built else "Unknown"
            print(f"{layer_name:<30} {output_shape:<20} {layer.count_params():<10}")

        print("=" * 65)
        print(f"Total params: {self.count_params():,}")
        print("=" * 65)

    def __call__(self, x: Tensor) -> Tensor:
        """Make the model callable."""
        return self.forward(x)

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self.layers)

    def __getitem__(self, index: int) -> Layer:
        return self.layers[index]
