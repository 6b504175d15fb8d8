"""
Animal <-> Individual bridge

The genetic algorithm breeds Individuals, not Animals. AnimalIndividual
captures what matters for breeding (the brain as a chromosome and the food
eaten as fitness) and turns evolved chromosomes back into newborn animals.
"""

import numpy as np
from typing import Optional

from .animal import Animal
from .chromosome import Chromosome
from .config import SimulationConfig
from .network import Network


class AnimalIndividual:
    """Genome + fitness view of an animal."""

    def __init__(self, chromosome: Chromosome, fitness: float = 0.0):
        self._chromosome = chromosome
        self._fitness = fitness

    @classmethod
    def from_animal(cls, animal: Animal) -> 'AnimalIndividual':
        """Fitness is the food eaten; the chromosome is the flattened brain."""
        return cls(
            chromosome=Chromosome(animal.brain.weights()),
            fitness=float(animal.satiation),
        )

    @classmethod
    def from_chromosome(cls, chromosome: Chromosome) -> 'AnimalIndividual':
        return cls(chromosome=chromosome)

    def chromosome(self) -> Chromosome:
        return self._chromosome

    def fitness(self) -> float:
        return self._fitness

    def into_animal(self, rng: np.random.Generator,
                    config: Optional[SimulationConfig] = None) -> Animal:
        """
        Give birth to an animal carrying this chromosome as its brain.

        Position and rotation are random, satiation starts at zero.

        Raises:
            ValueError: if the chromosome length does not fit the brain
                topology of the config.
        """
        config = config or SimulationConfig()
        brain = Network.from_weights(config.topology(), self._chromosome)
        return Animal.from_brain(rng, brain, config)

    def __repr__(self) -> str:
        return f"AnimalIndividual(fitness={self._fitness}, genes={len(self._chromosome)})"
