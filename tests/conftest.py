import numpy as np
import pytest

from ffnet import Network
from ffnet.activation import ActivationIdentity, ActivationSigmoid, ActivationTANH
from ffnet.network import randomize_weights, randomize_biases


@pytest.fixture
def identity_network():
    """2 -> 1 identity network with weights [1, 1] and bias 0"""
    network = Network()
    network.add_layer(2)
    network.add_layer(1, ActivationIdentity(), 0.0)
    network.set_weights(1, [[1.0, 1.0]])
    return network


@pytest.fixture
def deep_network():
    """3 -> 4 -> 3 -> 2 network with random parameters"""
    network = Network()
    network.add_layer(3)
    network.add_layer(4, ActivationTANH(), 0.2)
    network.add_layer(3, ActivationSigmoid(), -0.1)
    network.add_layer(2, ActivationIdentity(), 0.05)
    randomize_weights(network, seed=7)
    randomize_biases(network, seed=8)
    return network


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
