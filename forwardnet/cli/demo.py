"""
Demo entry point: builds the example model on a 5x5 checkerboard and prints the forward pass.
"""

import logging
from typing import Optional

import click

from .. import __version__
from ..core.layers import Conv2D, Dense, MERGE_MODES, make_rng
from ..core.model import Model
from ..core.tensor import Tensor, checkerboard

logger = logging.getLogger("forwardnet")

INPUT_SIZE = 5


def build_demo_model(kernel_size: int = 3, filters: int = 1, merge: str = 'last',
                     seed: Optional[int] = None) -> Model:
    """
    Build Conv2D -> Dense(n, 1) -> Dense(1, 5) for a 5x5 input.

    The first Dense layer is sized for a 3x3 convolution output, so any other
    kernel size (or stacked filters) is rejected with LayerChainError.
    """
    rng = make_rng(seed)
    model = Model(input_shape=(INPUT_SIZE, INPUT_SIZE), name="demo")
    model.add(Conv2D(filters, kernel_size, rng=rng, merge=merge))
    model.add(Dense(9, 1, rng=rng))
    model.add(Dense(1, 5, rng=rng))
    return model


def run_demo(kernel_size: int = 3, filters: int = 1, merge: str = 'last',
             seed: Optional[int] = None) -> Tensor:
    model = build_demo_model(kernel_size, filters, merge, seed)
    model.summary()
    return model.forward(checkerboard(INPUT_SIZE))


@click.command()
@click.version_option(version=__version__)
@click.option("--seed", type=int, default=None, help="Seed for the parameter initializers")
@click.option("--kernel-size", "-k", type=int, default=3, show_default=True,
              help="Side length of the convolution kernel")
@click.option("--filters", "-f", type=int, default=1, show_default=True,
              help="Number of convolution filters")
@click.option("--merge", type=click.Choice(MERGE_MODES), default='last', show_default=True,
              help="How convolution filter outputs are combined")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output with debug logging")
def main(seed: Optional[int], kernel_size: int, filters: int, merge: str, verbose: bool) -> None:
    """Run the forward pass of the example model on a 5x5 checkerboard."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if verbose:
        logger.setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")

    try:
        output = run_demo(kernel_size, filters, merge, seed)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    click.echo("Forward pass result:")
    click.echo(str(output))


if __name__ == "__main__":
    main()
