"""
Forward and Backward Propagation
================================

Forward pass:

    signal[l]  = W[l] @ output[l-1]
    trigger[l] = signal[l] + bias[l]          (one scalar bias per layer)
    output[l]  = activation[l](trigger[l])

Backward pass (error backpropagation with flat spot):

    delta[L-1] = errors * (f'[L-1] + flat_spot)
    grad[l+1] += outer(delta[l+1], output[l])           for l = L-2 .. 0
    delta[l]   = (W[l+1].T @ delta[l+1]) * (f'[l] + flat_spot)   for l >= 1

The flat spot is a small constant added to every activation derivative so
that saturated neurons still propagate some error. Gradients are summed
into the Backward record on every call; the caller resets it between
batches.

Both passes are pure, synchronous loops over the network and records.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..errors import LayerIndexError, NetworkStructureError, ShapeMismatchError
from .network import Network
from .utils import create_layer_matrices, create_layer_vectors

# Default flat spot added to derivatives during backpropagation
DEFAULT_FLAT_SPOT = 0.01


@dataclass(frozen=True, eq=False)
class Forward:
    """
    Data recorded by one forward pass

    Signals, triggers and outputs are all kept because, depending on the
    activation, the derivative is computed from the trigger or the output.
    Arrays are read-only once recorded.
    """
    signals: List[np.ndarray]
    triggers: List[np.ndarray]
    outputs: List[np.ndarray]

    def __post_init__(self):
        for vectors in (self.signals, self.triggers, self.outputs):
            for vector in vectors:
                vector.setflags(write=False)

    @property
    def sizes(self) -> Tuple[int, ...]:
        return tuple(len(output) for output in self.outputs)

    @property
    def output(self) -> np.ndarray:
        """Outputs of the output layer"""
        return self.outputs[-1]

    def get_signals(self, layer: int) -> np.ndarray:
        return self.signals[self._check(layer)]

    def get_triggers(self, layer: int) -> np.ndarray:
        return self.triggers[self._check(layer)]

    def get_outputs(self, layer: int) -> np.ndarray:
        return self.outputs[self._check(layer)]

    def _check(self, layer: int) -> int:
        if not 0 <= layer < len(self.outputs):
            raise LayerIndexError(f"Layer {layer} out of range 0..{len(self.outputs) - 1}")
        return layer


class Backward:
    """
    Data produced by backward passes

    - deltas: per layer error deltas of the last call
    - gradients: per layer weight gradients, accumulated across calls

    Gradients keep growing with every backward() call until reset().
    """

    def __init__(self, network: Network):
        self.deltas: List[np.ndarray] = create_layer_vectors(network)
        self.gradients: List[np.ndarray] = create_layer_matrices(network)

    @property
    def sizes(self) -> Tuple[int, ...]:
        return tuple(len(delta) for delta in self.deltas)

    def get_deltas(self, layer: int) -> np.ndarray:
        return self.deltas[self._check(layer)]

    def get_gradients(self, layer: int) -> np.ndarray:
        return self.gradients[self._check(layer)]

    def reset(self):
        """Zero deltas and gradients for a new batch"""
        for delta in self.deltas:
            delta.fill(0.0)
        for gradient in self.gradients:
            gradient.fill(0.0)

    def _check(self, layer: int) -> int:
        if not 0 <= layer < len(self.deltas):
            raise LayerIndexError(f"Layer {layer} out of range 0..{len(self.deltas) - 1}")
        return layer

    def __repr__(self) -> str:
        return f"Backward(sizes={self.sizes})"


# =============================================================================
# FORWARD
# =============================================================================

def forward(network: Network, inputs: Sequence[float]) -> Forward:
    """
    Process the inputs through every layer.

    Args:
        network: The network
        inputs: Input vector of length neurons(0)

    Returns:
        Forward record with signals, triggers and outputs of every layer
    """
    if network.layers == 0:
        raise NetworkStructureError("Network has no layers")

    inputs = np.array(inputs, dtype=float)
    n_inputs = network.get_neurons(0)
    if inputs.shape != (n_inputs,):
        raise ShapeMismatchError(f"Expected {n_inputs} inputs, got shape {inputs.shape}")

    signals = create_layer_vectors(network)
    triggers = create_layer_vectors(network)
    outputs = [inputs]

    for layer in range(1, network.layers):
        activation = network.get_activation(layer)
        if activation is None:
            raise NetworkStructureError(f"Layer {layer} has no activation")

        signals[layer] = network.get_weights(layer) @ outputs[layer - 1]
        triggers[layer] = signals[layer] + network.get_bias(layer)

        layer_outputs = np.array(activation.activations(triggers[layer]), dtype=float)
        if layer_outputs.shape != triggers[layer].shape:
            raise ShapeMismatchError(f"Activation of layer {layer} returned shape "
                                     f"{layer_outputs.shape}, expected {triggers[layer].shape}")
        outputs.append(layer_outputs)

    return Forward(signals=signals, triggers=triggers, outputs=outputs)


# =============================================================================
# BACKWARD
# =============================================================================

def _derivatives(network: Network, forward_data: Forward, layer: int) -> np.ndarray:
    triggers = forward_data.get_triggers(layer)
    outputs = forward_data.get_outputs(layer)
    derivatives = np.asarray(network.get_activation(layer).derivatives(triggers, outputs),
                             dtype=float)
    if derivatives.shape != outputs.shape:
        raise ShapeMismatchError(f"Activation derivatives of layer {layer} have shape "
                                 f"{derivatives.shape}, expected {outputs.shape}")
    return derivatives


def _check_backward(network: Network,
                    forward_data: Forward,
                    backward_data: Backward,
                    network_deltas: np.ndarray):
    if network.layers < 2:
        raise NetworkStructureError(
            f"Backward requires at least 2 layers, network has {network.layers}")

    sizes = network.sizes
    if forward_data.sizes != sizes:
        raise ShapeMismatchError(f"Forward data sizes {forward_data.sizes} "
                                 f"do not match network sizes {sizes}")
    if backward_data.sizes != sizes:
        raise ShapeMismatchError(f"Backward data sizes {backward_data.sizes} "
                                 f"do not match network sizes {sizes}")
    for layer in range(1, network.layers):
        expected = network.get_weights(layer).shape
        if backward_data.get_gradients(layer).shape != expected:
            raise ShapeMismatchError(f"Layer {layer} gradients must have shape {expected}")

    if network_deltas.shape != (sizes[-1],):
        raise ShapeMismatchError(f"Expected {sizes[-1]} network deltas, "
                                 f"got shape {network_deltas.shape}")

    for layer in range(1, network.layers):
        if network.get_activation(layer) is None:
            raise NetworkStructureError(f"Layer {layer} has no activation")


def backward(network: Network,
             forward_data: Forward,
             backward_data: Backward,
             network_deltas: Sequence[float],
             flat_spot: float = DEFAULT_FLAT_SPOT):
    """
    Backpropagate the network errors, accumulating weight gradients.

    Args:
        network: The network used to produce ``forward_data``
        forward_data: Record of the matching forward pass
        backward_data: Deltas are overwritten, gradients are summed into
        network_deltas: Output errors, e.g. target - output
        flat_spot: Constant added to every activation derivative
    """
    network_deltas = np.asarray(network_deltas, dtype=float)
    _check_backward(network, forward_data, backward_data, network_deltas)

    deltas = backward_data.deltas
    gradients = backward_data.gradients
    output_layer = network.layers - 1

    # Output layer
    derivatives = _derivatives(network, forward_data, output_layer)
    deltas[output_layer][:] = network_deltas * (derivatives + flat_spot)

    # Hidden layers, from the last one down to layer 1
    for layer in range(output_layer - 1, 0, -1):
        deltas_out = deltas[layer + 1]
        outputs_in = forward_data.get_outputs(layer)

        gradients[layer + 1] += np.outer(deltas_out, outputs_in)

        weighted_deltas = network.get_weights(layer + 1).T @ deltas_out
        derivatives = _derivatives(network, forward_data, layer)
        deltas[layer][:] = weighted_deltas * (derivatives + flat_spot)

    # Weights between the input layer and layer 1, inputs are not learned
    gradients[1] += np.outer(deltas[1], forward_data.get_outputs(0))


# =============================================================================
# DEMO
# =============================================================================

if __name__ == "__main__":
    from ffnet.activation import ActivationSigmoid
    from ffnet.config import EngineConfig, configure_logging
    from ffnet.network.utils import get_weights, randomize_weights, set_weights

    logging.basicConfig(level=logging.INFO)
    config = EngineConfig(name="demo", flat_spot=0.0, seed=42, log_level="DEBUG")
    configure_logging(config)

    print("=" * 50)
    print("FORWARD / BACKWARD DEMO")
    print("=" * 50)

    network = Network()
    network.add_layer(2)
    network.add_layer(3, ActivationSigmoid(), 0.1)
    network.add_layer(1, ActivationSigmoid(), 0.0)
    randomize_weights(network, seed=config.rng())

    x = np.array([0.5, -1.0])
    target = np.array([1.0])

    fwd = forward(network, x)
    bwd = Backward(network)
    backward(network, fwd, bwd, target - fwd.output, flat_spot=config.flat_spot)

    print(f"\nNetwork: {network}")
    print(f"Output:  {fwd.output}")
    for layer in range(1, network.layers):
        print(f"Layer {layer} gradients {bwd.get_gradients(layer).shape}:")
        print(bwd.get_gradients(layer))

    # Finite-difference check: gradient = -d(0.5 * err^2)/dw
    print("\n--- Finite difference check ---")
    flat = get_weights(network)
    eps = 1e-6
    numeric = np.zeros_like(flat)
    for i in range(len(flat)):
        for sign in (1, -1):
            probe = flat.copy()
            probe[i] += sign * eps
            set_weights(network, probe)
            err = target - forward(network, x).output
            numeric[i] -= sign * 0.5 * np.sum(err ** 2) / (2 * eps)
    set_weights(network, flat)

    analytic = np.concatenate([bwd.get_gradients(l).ravel() for l in range(1, network.layers)])
    print(f"Max difference: {np.max(np.abs(analytic - numeric)):.2e}")
