"""
Activation Functions
====================

Layer transforms applied to the triggers (weighted sum plus bias) of a
computed layer, together with their derivatives for backpropagation.

Every activation works on a whole layer at once:

    outputs     = activation.activations(triggers)
    derivatives = activation.derivatives(triggers, outputs)

The derivative receives both arrays so each function can use whichever is
numerically preferable (sigmoid-like functions use the output, ReLU uses
the trigger). Implementations hold no mutable state, so one instance can
be shared by many layers, networks and threads.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type


class Activation(ABC):
    """
    Abstract activation capability

    Subclasses set ``id`` to the short name used by the registry.
    """

    id: str = ""

    @abstractmethod
    def activations(self, triggers: np.ndarray) -> np.ndarray:
        """Outputs of the layer given its triggers"""
        pass

    @abstractmethod
    def derivatives(self, triggers: np.ndarray, outputs: np.ndarray) -> np.ndarray:
        """Derivatives of the outputs with respect to the triggers"""
        pass

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ActivationIdentity(Activation):
    """Linear pass-through, derivative 1"""

    id = "Identity"

    def activations(self, triggers: np.ndarray) -> np.ndarray:
        return np.array(triggers, dtype=float)

    def derivatives(self, triggers: np.ndarray, outputs: np.ndarray) -> np.ndarray:
        return np.ones_like(outputs, dtype=float)


class ActivationSigmoid(Activation):
    """
    Logistic sigmoid, outputs in (0, 1)

        f(t)  = 1 / (1 + exp(-t))
        f'(t) = f(t) * (1 - f(t))
    """

    id = "Sigmoid"

    def activations(self, triggers: np.ndarray) -> np.ndarray:
        # Clamp to prevent overflow in exp
        x = np.clip(np.asarray(triggers, dtype=float), -500, 500)
        return 1.0 / (1.0 + np.exp(-x))

    def derivatives(self, triggers: np.ndarray, outputs: np.ndarray) -> np.ndarray:
        return outputs * (1.0 - outputs)


class ActivationBipolarSigmoid(Activation):
    """
    Sigmoid rescaled to (-1, 1)

        f(t)  = 2 / (1 + exp(-t)) - 1
        f'(t) = (1 - f(t)^2) / 2
    """

    id = "BipolarSigmoid"

    def activations(self, triggers: np.ndarray) -> np.ndarray:
        x = np.clip(np.asarray(triggers, dtype=float), -500, 500)
        return (2.0 / (1.0 + np.exp(-x))) - 1.0

    def derivatives(self, triggers: np.ndarray, outputs: np.ndarray) -> np.ndarray:
        return (1.0 - outputs * outputs) / 2.0


class ActivationTANH(Activation):
    """Hyperbolic tangent, derivative 1 - f(t)^2"""

    id = "TANH"

    def activations(self, triggers: np.ndarray) -> np.ndarray:
        return np.tanh(np.asarray(triggers, dtype=float))

    def derivatives(self, triggers: np.ndarray, outputs: np.ndarray) -> np.ndarray:
        return 1.0 - outputs * outputs


class ActivationReLU(Activation):
    """
    Rectified linear unit

    Triggers at or below ``threshold`` output ``low`` with zero derivative;
    above it the trigger passes through with derivative 1.
    """

    id = "ReLU"

    def __init__(self, threshold: float = 0.0, low: float = 0.0):
        self.threshold = threshold
        self.low = low

    def activations(self, triggers: np.ndarray) -> np.ndarray:
        t = np.asarray(triggers, dtype=float)
        return np.where(t > self.threshold, t, self.low)

    def derivatives(self, triggers: np.ndarray, outputs: np.ndarray) -> np.ndarray:
        t = np.asarray(triggers, dtype=float)
        return np.where(t > self.threshold, 1.0, 0.0)

    def __repr__(self) -> str:
        return f"ActivationReLU(threshold={self.threshold}, low={self.low})"


# =============================================================================
# REGISTRY
# =============================================================================

ACTIVATIONS: Dict[str, Type[Activation]] = {
    cls.id: cls
    for cls in (
        ActivationIdentity,
        ActivationSigmoid,
        ActivationBipolarSigmoid,
        ActivationTANH,
        ActivationReLU,
    )
}


def get_activation(activation_id: str) -> Activation:
    """
    Create the activation registered under ``activation_id``.

    Args:
        activation_id: Registry id, e.g. 'Sigmoid' or 'TANH'

    Returns:
        A new activation instance with default parameters
    """
    try:
        return ACTIVATIONS[activation_id]()
    except KeyError:
        raise ValueError(f"Unknown activation: {activation_id}") from None


def get_activation_id(activation: Optional[Activation]) -> str:
    """Registry id of the activation, or an empty string for ``None``"""
    if activation is None:
        return ""
    return activation.id
