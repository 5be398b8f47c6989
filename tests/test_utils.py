import numpy as np
import pytest

from ffnet import Network, ShapeMismatchError, forward
from ffnet.activation import (
    ActivationIdentity,
    ActivationReLU,
    ActivationSigmoid,
    get_activation,
    get_activation_id,
)
from ffnet.network import (
    create_layer_vectors,
    create_layer_matrices,
    count_weights,
    get_weights,
    set_weights,
    get_biases,
    set_biases,
    get_activations,
    set_activations,
    randomize_weights,
    randomize_biases,
)


def test_create_layer_vectors(deep_network):
    vectors = create_layer_vectors(deep_network)
    assert [v.shape for v in vectors] == [(3,), (4,), (3,), (2,)]
    assert all(not v.any() for v in vectors)


def test_create_layer_matrices(deep_network):
    matrices = create_layer_matrices(deep_network)
    assert [m.shape for m in matrices] == [(0, 0), (4, 3), (3, 4), (2, 3)]


def test_layer_builders_on_empty_network():
    assert create_layer_vectors(Network()) == []
    assert create_layer_matrices(Network()) == []


def test_weight_count(deep_network):
    assert count_weights(deep_network) == 3 * 4 + 4 * 3 + 3 * 2
    assert len(get_weights(deep_network)) == count_weights(deep_network)


def test_flat_weight_order():
    network = Network()
    network.add_layer(2)
    network.add_layer(2, ActivationIdentity(), 0.0)
    network.add_layer(1, ActivationIdentity(), 0.0)
    network.set_weights(1, [[1.0, 2.0], [3.0, 4.0]])
    network.set_weights(2, [[5.0, 6.0]])

    np.testing.assert_array_equal(get_weights(network), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


def test_set_weights_writes_layer_matrices():
    network = Network()
    network.create_structure(2, 3, 1)

    set_weights(network, np.arange(9.0))

    np.testing.assert_array_equal(network.get_weights(1), [[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]])
    np.testing.assert_array_equal(network.get_weights(2), [[6.0, 7.0, 8.0]])


def test_weights_round_trip(deep_network):
    before = [deep_network.get_weights(layer).copy() for layer in range(1, 4)]

    set_weights(deep_network, get_weights(deep_network))

    for layer in range(1, 4):
        np.testing.assert_array_equal(deep_network.get_weights(layer), before[layer - 1])


def test_flat_weights_are_a_copy(deep_network):
    flat = get_weights(deep_network)
    flat[:] = 0.0
    assert deep_network.get_weights(1).any()


def test_set_weights_length_mismatch(deep_network):
    with pytest.raises(ShapeMismatchError):
        set_weights(deep_network, np.zeros(count_weights(deep_network) - 1))


def test_biases_round_trip(deep_network):
    before = [deep_network.get_bias(layer) for layer in range(1, 4)]

    set_biases(deep_network, get_biases(deep_network))

    assert [deep_network.get_bias(layer) for layer in range(1, 4)] == before


def test_biases_order():
    network = Network()
    network.create_structure(2, 2, 1)
    set_biases(network, [0.5, -0.5])
    assert network.get_bias(1) == 0.5
    assert network.get_bias(2) == -0.5
    np.testing.assert_array_equal(get_biases(network), [0.5, -0.5])


def test_set_biases_length_mismatch(deep_network):
    with pytest.raises(ShapeMismatchError):
        set_biases(deep_network, [0.0, 0.0])


def test_activations_round_trip(deep_network):
    activations = get_activations(deep_network)
    assert len(activations) == 3

    network = Network()
    network.create_structure(*deep_network.sizes)
    set_activations(network, activations)

    for layer in range(1, 4):
        assert network.get_activation(layer) is deep_network.get_activation(layer)


def test_set_activations_length_mismatch(deep_network):
    with pytest.raises(ShapeMismatchError):
        set_activations(deep_network, [ActivationSigmoid()])


def test_restore_from_flat_parameters(deep_network, rng):
    """A shell filled from the flat views reproduces the original network"""
    stored = {
        'sizes': list(deep_network.sizes),
        'weights': get_weights(deep_network).tolist(),
        'biases': get_biases(deep_network).tolist(),
        'activations': [get_activation_id(a) for a in get_activations(deep_network)],
    }

    restored = Network()
    restored.create_structure(*stored['sizes'])
    set_weights(restored, stored['weights'])
    set_biases(restored, stored['biases'])
    set_activations(restored, [get_activation(i) for i in stored['activations']])

    x = rng.standard_normal(3)
    np.testing.assert_array_equal(forward(restored, x).output, forward(deep_network, x).output)


def test_randomize_weights_keeps_shapes():
    network = Network()
    network.add_layer(3)
    network.add_layer(4, ActivationReLU(), 0.0)
    network.add_layer(2, ActivationSigmoid(), 0.0)

    randomize_weights(network)

    assert network.get_weights(1).shape == (4, 3)
    assert network.get_weights(2).shape == (2, 4)
    assert np.all(get_weights(network) != 0.0)


def test_randomize_weights_changes_values(deep_network):
    before = get_weights(deep_network)
    randomize_weights(deep_network)
    assert not np.array_equal(get_weights(deep_network), before)


def test_randomize_weights_seeded():
    first, second = Network(), Network()
    first.create_structure(3, 5, 2)
    second.create_structure(3, 5, 2)

    randomize_weights(first, seed=11)
    randomize_weights(second, seed=11)

    np.testing.assert_array_equal(get_weights(first), get_weights(second))


def test_randomize_weights_standard_normal():
    network = Network()
    network.create_structure(100, 100, 10)
    randomize_weights(network, seed=3)

    weights = get_weights(network)
    assert abs(weights.mean()) < 0.05
    assert abs(weights.std() - 1.0) < 0.05


def test_randomize_biases():
    network = Network()
    network.create_structure(2, 3, 3, 1)

    randomize_biases(network, seed=5)
    biases = get_biases(network)

    assert biases.shape == (3,)
    assert np.all(biases != 0.0)

    randomize_biases(network)
    assert not np.array_equal(get_biases(network), biases)
