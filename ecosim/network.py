"""
Neural Network - Tiny feedforward brains for animals

A fixed-topology network of ReLU-clamped linear neurons:
- Random initialization (every bias and weight uniform in [-1, 1])
- Forward propagation layer by layer
- Flattening to / rebuilding from a flat weight sequence

WEIGHT ORDER (the contract with the genetic algorithm):
    for each layer:
        for each neuron:
            bias, then one weight per input (in input order)

Network.weights() produces exactly this order and Network.from_weights()
consumes exactly this order, so an evolved chromosome always maps back onto
a valid brain.
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence


# =============================================================================
# TOPOLOGY
# =============================================================================

@dataclass(frozen=True)
class LayerTopology:
    """Number of neurons in one layer of the topology."""
    neurons: int


def _check_topology(topology: Sequence[LayerTopology]):
    if len(topology) < 2:
        raise ValueError(
            f"Topology needs at least an input and an output layer, got {len(topology)}"
        )
    for layer in topology:
        if layer.neurons <= 0:
            raise ValueError(f"Layer sizes must be positive, got {layer.neurons}")


# =============================================================================
# NEURON & LAYER
# =============================================================================

@dataclass(eq=False)
class Neuron:
    """A single ReLU unit: one bias and one weight per input connection."""
    bias: float
    weights: np.ndarray

    @classmethod
    def random(cls, rng: np.random.Generator, input_size: int) -> 'Neuron':
        bias = rng.uniform(-1.0, 1.0)
        weights = rng.uniform(-1.0, 1.0, size=input_size)
        return cls(bias=float(bias), weights=weights)

    @classmethod
    def from_weights(cls, input_size: int, weights: Iterator[float]) -> 'Neuron':
        """Consume one bias followed by `input_size` weights from the iterator."""
        try:
            bias = next(weights)
            values = [next(weights) for _ in range(input_size)]
        except StopIteration:
            raise ValueError("Got not enough weights for the given topology") from None
        return cls(bias=float(bias), weights=np.array(values, dtype=np.float64))

    def propagate(self, inputs: np.ndarray) -> float:
        if len(inputs) != len(self.weights):
            raise ValueError(
                f"Neuron expects {len(self.weights)} inputs, got {len(inputs)}"
            )
        return max(self.bias + float(np.dot(inputs, self.weights)), 0.0)


@dataclass(eq=False)
class Layer:
    """An ordered group of neurons sharing the same inputs."""
    neurons: List[Neuron]

    @classmethod
    def random(cls, rng: np.random.Generator,
               input_size: int, output_size: int) -> 'Layer':
        return cls([Neuron.random(rng, input_size) for _ in range(output_size)])

    @classmethod
    def from_weights(cls, input_size: int, output_size: int,
                     weights: Iterator[float]) -> 'Layer':
        return cls([
            Neuron.from_weights(input_size, weights) for _ in range(output_size)
        ])

    @property
    def input_size(self) -> int:
        return len(self.neurons[0].weights)

    def propagate(self, inputs: np.ndarray) -> np.ndarray:
        return np.array([neuron.propagate(inputs) for neuron in self.neurons])


# =============================================================================
# NETWORK
# =============================================================================

class Network:
    """
    Feedforward network built from layers of neurons.

    Layer i holds topology[i+1] neurons, each wired to topology[i] inputs.
    Once built, the only way to change a network is to rebuild it with
    from_weights().
    """

    def __init__(self, layers: List[Layer]):
        self.layers = layers

    @classmethod
    def random(cls, rng: np.random.Generator,
               topology: Sequence[LayerTopology]) -> 'Network':
        """
        Build a network with every bias and weight drawn uniformly from [-1, 1].

        Args:
            rng: Random source; draws happen layer by layer, neuron by
                neuron, bias first then weights.
            topology: Per-layer neuron counts, input layer first.
        """
        _check_topology(topology)
        layers = [
            Layer.random(rng, inputs.neurons, outputs.neurons)
            for inputs, outputs in zip(topology, topology[1:])
        ]
        return cls(layers)

    @classmethod
    def from_weights(cls, topology: Sequence[LayerTopology],
                     weights: Iterable[float]) -> 'Network':
        """
        Rebuild a network from a flat weight sequence.

        The sequence must hold exactly weight_count(topology) values in
        the order documented at the top of this module.

        Raises:
            ValueError: if the topology is invalid or the number of
                weights does not match it.
        """
        _check_topology(topology)
        weights = iter(weights)
        layers = [
            Layer.from_weights(inputs.neurons, outputs.neurons, weights)
            for inputs, outputs in zip(topology, topology[1:])
        ]
        if next(weights, None) is not None:
            raise ValueError("Got too many weights for the given topology")
        return cls(layers)

    @staticmethod
    def weight_count(topology: Sequence[LayerTopology]) -> int:
        """Number of genes needed to encode a network of this topology."""
        return sum(
            (inputs.neurons + 1) * outputs.neurons
            for inputs, outputs in zip(topology, topology[1:])
        )

    def topology(self) -> List[LayerTopology]:
        """Recover the topology this network was built with."""
        return [LayerTopology(self.layers[0].input_size)] + [
            LayerTopology(len(layer.neurons)) for layer in self.layers
        ]

    def propagate(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Run a forward pass.

        Args:
            inputs: One value per input of the first layer.

        Returns:
            Outputs of the last layer, all >= 0.

        Raises:
            ValueError: if the input width does not match the first layer.
        """
        values = np.asarray(inputs, dtype=np.float64)
        if len(values) != self.layers[0].input_size:
            raise ValueError(
                f"Network expects {self.layers[0].input_size} inputs, got {len(values)}"
            )
        for layer in self.layers:
            values = layer.propagate(values)
        return values

    def weights(self) -> Iterator[float]:
        """
        Yield every bias and weight in wire order.

        Each call returns a fresh generator, so the sequence can be walked
        as many times as needed.
        """
        for layer in self.layers:
            for neuron in layer.neurons:
                yield neuron.bias
                for weight in neuron.weights:
                    yield float(weight)

    def __repr__(self) -> str:
        sizes = [layer.neurons for layer in self.topology()]
        return f"Network(topology={sizes})"
