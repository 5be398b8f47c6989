"""
Feed-Forward Network Structure
==============================

Layered structure of a fully-connected feed-forward network.

Layer 0 is the input layer and only declares a neuron count. Every later
layer l (the computed layers 1..L-1) owns:
- one activation function, shared by all its neurons
- one scalar bias, shared by all its neurons
- a weight matrix [neurons(l) x neurons(l-1)], rows=output, columns=input

The last layer added is the output layer.

Concurrency: there is no locking. Callers must not mutate a network while
a forward pass, backward pass or performance scoring run reads it.
"""

import logging
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..activation import Activation
from ..errors import LayerIndexError, NetworkStructureError, ShapeMismatchError

logger = logging.getLogger(__name__)


class LayerType(Enum):
    """Role of a layer, derived from its position"""
    INPUT = "I"
    HIDDEN = "H"
    OUTPUT = "O"


@dataclass(eq=False)
class Layer:
    """
    Per-layer record

    The input layer leaves activation and weights as None.
    """
    neurons: int
    activation: Optional[Activation] = None
    bias: float = 0.0
    weights: Optional[np.ndarray] = None  # [neurons x previous neurons]

    def copy(self) -> 'Layer':
        """Deep copy of the parameters, same activation reference"""
        return Layer(
            neurons=self.neurons,
            activation=self.activation,
            bias=self.bias,
            weights=None if self.weights is None else self.weights.copy(),
        )


def _check_neurons(neurons) -> int:
    if isinstance(neurons, bool) or not isinstance(neurons, (int, np.integer)):
        raise ValueError(f"Number of neurons must be an integer, got {neurons!r}")
    if neurons <= 0:
        raise ValueError(f"Number of neurons must be positive, got {neurons}")
    return int(neurons)


class Network:
    """
    Fully-connected feed-forward network

    Usage:
        network = Network()
        network.add_layer(2)                               # input
        network.add_layer(3, ActivationSigmoid(), 0.5)     # hidden
        network.add_layer(1, ActivationSigmoid(), 0.0)     # output

        fwd = forward(network, [0.0, 1.0])
        print(fwd.output)
    """

    def __init__(self):
        self._layers: List[Layer] = []

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def add_layer(self,
                  neurons: int,
                  activation: Optional[Activation] = None,
                  bias: float = 0.0):
        """
        Append a layer.

        Without an activation this declares the input layer, which must be
        the very first structural call. With an activation it appends a
        computed layer with zero weights connecting it to the previous layer.

        Args:
            neurons: Number of neurons of the layer
            activation: Activation of a computed layer, None for the input layer
            bias: Scalar bias shared by every neuron of a computed layer

        Raises:
            NetworkStructureError: Input layer declared twice or after
                computed layers, or a computed layer before the input layer
        """
        neurons = _check_neurons(neurons)

        if activation is None:
            if self._layers:
                raise NetworkStructureError(
                    "The input layer must be the first layer added "
                    f"(network already has {len(self._layers)} layers)")
            if bias != 0.0:
                raise NetworkStructureError("The input layer has no bias")
            self._layers.append(Layer(neurons=neurons))
            logger.debug(f"Input layer added: {neurons} neurons")
            return

        if not self._layers:
            raise NetworkStructureError("The input layer must be added before computed layers")

        previous = self._layers[-1].neurons
        self._layers.append(Layer(
            neurons=neurons,
            activation=activation,
            bias=float(bias),
            weights=np.zeros((neurons, previous)),
        ))
        logger.debug(f"Layer {len(self._layers) - 1} added: {neurons} neurons, "
                     f"activation={activation!r}, bias={bias}")

    def create_structure(self, *sizes: int):
        """
        Reset to an empty shell of the given layer sizes.

        Weights and biases are zero and activations are None, ready to be
        filled from stored parameters through the bulk setters.
        """
        sizes = [_check_neurons(size) for size in sizes]

        layers = []
        for i, size in enumerate(sizes):
            if i == 0:
                layers.append(Layer(neurons=size))
            else:
                layers.append(Layer(neurons=size, weights=np.zeros((size, sizes[i - 1]))))
        self._layers = layers

        logger.info(f"Network structure created: sizes={tuple(sizes)}")

    # -------------------------------------------------------------------------
    # Shape
    # -------------------------------------------------------------------------

    @property
    def layers(self) -> int:
        """Number of layers, input layer included"""
        return len(self._layers)

    @property
    def sizes(self) -> Tuple[int, ...]:
        """Neurons per layer"""
        return tuple(layer.neurons for layer in self._layers)

    def get_neurons(self, layer: int) -> int:
        return self._layer(layer).neurons

    def get_layer_type(self, layer: int) -> LayerType:
        self._layer(layer)
        if layer == 0:
            return LayerType.INPUT
        if layer == len(self._layers) - 1:
            return LayerType.OUTPUT
        return LayerType.HIDDEN

    # -------------------------------------------------------------------------
    # Parameters of computed layers 1..L-1
    # -------------------------------------------------------------------------

    def get_weights(self, layer: int) -> np.ndarray:
        """Weight matrix of the layer (the live array, not a copy)"""
        return self._computed_layer(layer).weights

    def set_weights(self, layer: int, weights: np.ndarray):
        """Overwrite the weight matrix of the layer in place"""
        target = self._computed_layer(layer).weights
        weights = np.asarray(weights, dtype=float)
        if weights.shape != target.shape:
            raise ShapeMismatchError(f"Layer {layer} weights must have shape {target.shape}, "
                                     f"got {weights.shape}")
        target[...] = weights

    def get_bias(self, layer: int) -> float:
        return self._computed_layer(layer).bias

    def set_bias(self, layer: int, bias: float):
        self._computed_layer(layer).bias = float(bias)

    def get_activation(self, layer: int) -> Optional[Activation]:
        return self._computed_layer(layer).activation

    def set_activation(self, layer: int, activation: Optional[Activation]):
        self._computed_layer(layer).activation = activation

    # -------------------------------------------------------------------------
    # Copy
    # -------------------------------------------------------------------------

    def clone(self) -> 'Network':
        """Independent copy: new weight matrices, shared activations"""
        network = Network()
        network._layers = [layer.copy() for layer in self._layers]
        return network

    def __copy__(self) -> 'Network':
        return self.clone()

    def __repr__(self) -> str:
        return f"Network(sizes={self.sizes})"

    # -------------------------------------------------------------------------
    # Index checks
    # -------------------------------------------------------------------------

    def _layer(self, layer: int) -> Layer:
        if not 0 <= layer < len(self._layers):
            raise LayerIndexError(f"Layer {layer} out of range 0..{len(self._layers) - 1}")
        return self._layers[layer]

    def _computed_layer(self, layer: int) -> Layer:
        if not 1 <= layer < len(self._layers):
            raise LayerIndexError(
                f"Layer {layer} is not a computed layer (valid 1..{len(self._layers) - 1})")
        return self._layers[layer]
