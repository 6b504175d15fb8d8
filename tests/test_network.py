import numpy as np
import pytest

from ecosim.network import Layer, LayerTopology, Network, Neuron


def topology(*sizes):
    return [LayerTopology(size) for size in sizes]


class TestNeuron:
    def test_random_values_are_within_unit_range(self, rng):
        neuron = Neuron.random(rng, 4)

        assert -1.0 <= neuron.bias <= 1.0
        assert len(neuron.weights) == 4
        assert np.all((neuron.weights >= -1.0) & (neuron.weights <= 1.0))

    def test_propagate_clamps_negative_sums_to_zero(self):
        neuron = Neuron(bias=0.5, weights=np.array([-0.3, 0.8]))

        assert neuron.propagate(np.array([-10.0, -10.0])) == 0.0

    def test_propagate_weighted_sum_plus_bias(self):
        neuron = Neuron(bias=0.5, weights=np.array([-0.3, 0.8]))

        assert neuron.propagate(np.array([0.5, 1.0])) == pytest.approx(
            (-0.3 * 0.5) + (0.8 * 1.0) + 0.5
        )

    def test_propagate_rejects_wrong_input_width(self):
        neuron = Neuron(bias=0.0, weights=np.array([1.0, 1.0]))

        with pytest.raises(ValueError):
            neuron.propagate(np.array([1.0]))


class TestNetwork:
    def test_random_builds_requested_topology(self, rng):
        network = Network.random(rng, topology(3, 5, 2))

        assert len(network.layers) == 2
        assert [len(layer.neurons) for layer in network.layers] == [5, 2]
        assert all(len(n.weights) == 3 for n in network.layers[0].neurons)
        assert all(len(n.weights) == 5 for n in network.layers[1].neurons)
        assert [t.neurons for t in network.topology()] == [3, 5, 2]

    def test_random_rejects_single_layer_topology(self, rng):
        with pytest.raises(ValueError):
            Network.random(rng, topology(3))

    def test_propagate_feeds_layers_forward(self):
        network = Network([
            Layer([
                Neuron(bias=0.0, weights=np.array([-0.5, -0.4, -0.3])),
                Neuron(bias=0.0, weights=np.array([-0.2, -0.1, 0.0])),
            ]),
            Layer([
                Neuron(bias=0.0, weights=np.array([-0.5, 0.5])),
            ]),
        ])
        inputs = np.array([0.5, 0.6, 0.7])

        expected = network.layers[1].propagate(network.layers[0].propagate(inputs))

        assert np.allclose(network.propagate(inputs), expected)

    def test_propagate_output_is_non_negative_with_last_layer_width(self, rng):
        network = Network.random(rng, topology(4, 8, 3))

        for _ in range(20):
            outputs = network.propagate(rng.uniform(-5.0, 5.0, size=4))
            assert len(outputs) == 3
            assert np.all(outputs >= 0.0)

    def test_propagate_rejects_wrong_input_width(self, rng):
        network = Network.random(rng, topology(4, 2))

        with pytest.raises(ValueError):
            network.propagate([1.0, 2.0])


class TestWeights:
    def test_weights_are_bias_first_per_neuron(self):
        network = Network([
            Layer([Neuron(bias=0.1, weights=np.array([0.2])),
                   Neuron(bias=0.3, weights=np.array([0.4]))]),
            Layer([Neuron(bias=0.5, weights=np.array([0.6, 0.7]))]),
        ])

        assert list(network.weights()) == pytest.approx([0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7])

    def test_weights_can_be_iterated_again(self, rng):
        network = Network.random(rng, topology(2, 3, 1))

        assert list(network.weights()) == list(network.weights())

    def test_from_weights_uses_the_same_order(self):
        network = Network.from_weights(topology(1, 2, 1), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0])

        # hidden: 1 + 2*1 = 3, 3 + 4*1 = 7; output: 5 + 6*3 + 7*7
        assert list(network.propagate([1.0])) == pytest.approx([72.0])
        assert list(network.weights()) == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]

    @pytest.mark.parametrize("sizes", [(2, 1), (3, 6, 2), (9, 18, 2), (4, 4, 4, 4)])
    def test_round_trip_keeps_behaviour(self, rng, sizes):
        shape = topology(*sizes)
        network = Network.random(rng, shape)

        rebuilt = Network.from_weights(shape, network.weights())

        assert list(rebuilt.weights()) == list(network.weights())
        for _ in range(5):
            inputs = rng.uniform(0.0, 1.0, size=sizes[0])
            assert np.array_equal(rebuilt.propagate(inputs), network.propagate(inputs))

    def test_weight_count_matches_weights(self, rng):
        shape = topology(9, 18, 2)

        assert Network.weight_count(shape) == len(list(Network.random(rng, shape).weights()))
        assert Network.weight_count(shape) == (9 + 1) * 18 + (18 + 1) * 2

    def test_from_weights_rejects_too_few_weights(self):
        with pytest.raises(ValueError):
            Network.from_weights(topology(2, 1), [0.1, 0.2])

    def test_from_weights_rejects_too_many_weights(self):
        with pytest.raises(ValueError):
            Network.from_weights(topology(2, 1), [0.1, 0.2, 0.3, 0.4])
