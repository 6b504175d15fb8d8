"""
Chromosome - Flat genome for evolved brains

A chromosome is an ordered sequence of real-valued genes. In ecosim every
gene is one bias or weight of an animal's brain, laid out in the order
produced by Network.weights().
"""

import numpy as np
from typing import Iterable, Iterator, List


class Chromosome:
    """
    Ordered, fixed-length container of float genes.

    Supports len(), indexing, iteration and item assignment so mutation
    strategies can edit genes in place.
    """

    def __init__(self, genes: Iterable[float]):
        self.genes = np.fromiter(genes, dtype=np.float64)

    def __len__(self) -> int:
        return len(self.genes)

    def __iter__(self) -> Iterator[float]:
        return (float(gene) for gene in self.genes)

    def __getitem__(self, index: int) -> float:
        return float(self.genes[index])

    def __setitem__(self, index: int, value: float):
        self.genes[index] = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return np.array_equal(self.genes, other.genes)

    def copy(self) -> 'Chromosome':
        return Chromosome(self.genes)

    def to_list(self) -> List[float]:
        """Genes as plain Python floats."""
        return [float(gene) for gene in self.genes]

    def __repr__(self) -> str:
        return f"Chromosome(genes={len(self)})"
