"""
Network Utilities
=================

Stateless helpers built on Network:
- per-layer storage builders for forward/backward records
- flat views of weights, biases and activations, so external optimizers
  (gradient methods, evolutionary search) can treat a whole network as a
  single real vector
- random initialization

Flat ordering is deterministic: ascending layer, then ascending output
neuron, then ascending input neuron for weights; ascending layer for
biases and activations.
"""

import logging
import numpy as np
from typing import List, Optional, Sequence, Union

from ..activation import Activation
from ..errors import ShapeMismatchError
from .network import Network

logger = logging.getLogger(__name__)

SeedLike = Optional[Union[int, np.random.Generator]]


def create_layer_vectors(network: Network) -> List[np.ndarray]:
    """One zero vector per layer, sized to the layer's neurons"""
    return [np.zeros(neurons) for neurons in network.sizes]


def create_layer_matrices(network: Network) -> List[np.ndarray]:
    """
    One zero matrix per layer, shaped like the weights.

    Entry 0 is an empty 0x0 matrix since the input layer has no weights.
    """
    sizes = network.sizes
    if not sizes:
        return []
    matrices = [np.zeros((0, 0))]
    for layer in range(1, len(sizes)):
        matrices.append(np.zeros((sizes[layer], sizes[layer - 1])))
    return matrices


def count_weights(network: Network) -> int:
    """Total number of weights, sum of neurons(l) * neurons(l-1)"""
    sizes = network.sizes
    return sum(sizes[layer] * sizes[layer - 1] for layer in range(1, len(sizes)))


# =============================================================================
# FLAT VIEWS
# =============================================================================

def get_weights(network: Network) -> np.ndarray:
    """All weights as a flat vector"""
    if network.layers < 2:
        return np.zeros(0)
    return np.concatenate([network.get_weights(layer).ravel()
                           for layer in range(1, network.layers)])


def set_weights(network: Network, data: Sequence[float]):
    """
    Overwrite every weight from a flat vector.

    Raises:
        ShapeMismatchError: ``data`` length differs from count_weights(network)
    """
    data = np.asarray(data, dtype=float)
    expected = count_weights(network)
    if data.shape != (expected,):
        raise ShapeMismatchError(f"Expected {expected} weights, got shape {data.shape}")

    index = 0
    for layer in range(1, network.layers):
        weights = network.get_weights(layer)
        weights[...] = data[index:index + weights.size].reshape(weights.shape)
        index += weights.size


def get_biases(network: Network) -> np.ndarray:
    """One bias per computed layer"""
    return np.array([network.get_bias(layer) for layer in range(1, network.layers)],
                    dtype=float)


def set_biases(network: Network, biases: Sequence[float]):
    biases = np.asarray(biases, dtype=float)
    expected = network.layers - 1
    if biases.shape != (expected,):
        raise ShapeMismatchError(f"Expected {expected} biases, got shape {biases.shape}")
    for layer in range(1, network.layers):
        network.set_bias(layer, biases[layer - 1])


def get_activations(network: Network) -> List[Optional[Activation]]:
    """One activation per computed layer"""
    return [network.get_activation(layer) for layer in range(1, network.layers)]


def set_activations(network: Network, activations: Sequence[Optional[Activation]]):
    expected = network.layers - 1
    if len(activations) != expected:
        raise ShapeMismatchError(f"Expected {expected} activations, got {len(activations)}")
    for layer in range(1, network.layers):
        network.set_activation(layer, activations[layer - 1])


# =============================================================================
# RANDOMIZATION
# =============================================================================

def randomize_weights(network: Network, seed: SeedLike = None):
    """
    Overwrite every weight with an independent standard normal sample.

    Args:
        network: Network to initialize
        seed: Random seed or Generator for reproducibility
    """
    rng = np.random.default_rng(seed)
    for layer in range(1, network.layers):
        weights = network.get_weights(layer)
        weights[...] = rng.standard_normal(weights.shape)
    logger.debug(f"Randomized {count_weights(network)} weights of {network!r}")


def randomize_biases(network: Network, seed: SeedLike = None):
    """Overwrite every layer bias with an independent standard normal sample"""
    rng = np.random.default_rng(seed)
    for layer in range(1, network.layers):
        network.set_bias(layer, rng.standard_normal())
    logger.debug(f"Randomized {network.layers - 1} biases of {network!r}")
