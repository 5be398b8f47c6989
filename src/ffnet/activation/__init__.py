"""
Activations
===========

Pluggable per-layer transforms and their derivatives.

- Activation: abstract two-operation capability
- Identity, Sigmoid, BipolarSigmoid, TANH, ReLU implementations
- get_activation / get_activation_id: lookup by short id
"""

from .functions import (
    Activation,
    ActivationIdentity,
    ActivationSigmoid,
    ActivationBipolarSigmoid,
    ActivationTANH,
    ActivationReLU,
    ACTIVATIONS,
    get_activation,
    get_activation_id,
)

__all__ = [
    'Activation',
    'ActivationIdentity',
    'ActivationSigmoid',
    'ActivationBipolarSigmoid',
    'ActivationTANH',
    'ActivationReLU',
    'ACTIVATIONS',
    'get_activation',
    'get_activation_id',
]
