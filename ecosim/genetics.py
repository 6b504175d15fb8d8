"""
Genetic Algorithm - Breeding the next generation of brains

The algorithm is generic over three interchangeable strategies:
- Selection: which individuals get to become parents
- Crossover: how two parent chromosomes are mixed into one child
- Mutation: how a child chromosome is perturbed

It never sees animals directly. Anything that can report a fitness, expose
its chromosome and be rebuilt from a chromosome (the Individual protocol)
can be evolved.

USAGE:
    from ecosim.genetics import (
        GeneticAlgorithm, RouletteWheelSelection,
        UniformCrossover, GaussianMutation,
    )

    ga = GeneticAlgorithm(
        RouletteWheelSelection(),
        UniformCrossover(),
        GaussianMutation(chance=0.01, coeff=0.3),
    )
    children, stats = ga.evolve(rng, population)
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Protocol, Sequence, Tuple, TypeVar

from loguru import logger

from .chromosome import Chromosome


# =============================================================================
# PROTOCOLS
# =============================================================================

class Individual(Protocol):
    """A scored, genome-bearing member of a population."""

    @classmethod
    def from_chromosome(cls, chromosome: Chromosome) -> 'Individual':
        ...

    def chromosome(self) -> Chromosome:
        ...

    def fitness(self) -> float:
        ...


IndividualT = TypeVar('IndividualT', bound=Individual)


class SelectionMethod(Protocol):
    def select(self, rng: np.random.Generator,
               population: Sequence[IndividualT]) -> IndividualT:
        ...


class CrossoverMethod(Protocol):
    def crossover(self, rng: np.random.Generator,
                  parent_a: Chromosome, parent_b: Chromosome) -> Chromosome:
        ...


class MutationMethod(Protocol):
    def mutate(self, rng: np.random.Generator, child: Chromosome):
        ...


# =============================================================================
# SELECTION
# =============================================================================

class RouletteWheelSelection:
    """
    Fitness-proportionate selection.

    Each individual is picked with probability fitness / total fitness.
    Individuals with zero fitness are never picked.
    """

    def select(self, rng: np.random.Generator,
               population: Sequence[IndividualT]) -> IndividualT:
        if len(population) == 0:
            raise ValueError("Cannot select from an empty population")

        fitnesses = np.array([individual.fitness() for individual in population],
                             dtype=np.float64)
        if np.any(fitnesses < 0):
            raise ValueError("Roulette wheel selection requires non-negative fitness")

        total = fitnesses.sum()
        if total <= 0:
            raise ValueError(
                "Roulette wheel selection requires a positive total fitness"
            )

        # Spin once; the slice that contains the spin wins
        spin = rng.random() * total
        index = int(np.searchsorted(np.cumsum(fitnesses), spin, side='right'))
        return population[min(index, len(population) - 1)]

    def __repr__(self) -> str:
        return "RouletteWheelSelection()"


# =============================================================================
# CROSSOVER
# =============================================================================

class UniformCrossover:
    """Each gene comes from parent A or parent B with equal probability."""

    def crossover(self, rng: np.random.Generator,
                  parent_a: Chromosome, parent_b: Chromosome) -> Chromosome:
        if len(parent_a) != len(parent_b):
            raise ValueError(
                f"Parents must have equal length chromosomes, "
                f"got {len(parent_a)} and {len(parent_b)}"
            )
        return Chromosome(
            a if rng.random() < 0.5 else b
            for a, b in zip(parent_a, parent_b)
        )

    def __repr__(self) -> str:
        return "UniformCrossover()"


# =============================================================================
# MUTATION
# =============================================================================

class GaussianMutation:
    """
    Small, zero-mean, bounded perturbation of individual genes.

    Args:
        chance: Probability of touching each gene (0-1).
            0.0 = no gene is changed, 1.0 = every gene is changed.
        coeff: Largest magnitude a single perturbation can have.
            0.0 = genes stay as they are regardless of chance.
    """

    def __init__(self, chance: float, coeff: float):
        if not 0.0 <= chance <= 1.0:
            raise ValueError(f"Mutation chance must be within [0, 1], got {chance}")
        if coeff < 0.0:
            raise ValueError(f"Mutation coefficient must be >= 0, got {coeff}")
        self.chance = chance
        self.coeff = coeff

    def mutate(self, rng: np.random.Generator, child: Chromosome):
        """Mutate the chromosome in place."""
        for index in range(len(child)):
            sign = -1.0 if rng.random() < 0.5 else 1.0
            if rng.random() < self.chance:
                child[index] = child[index] + sign * self.coeff * rng.random()

    def __repr__(self) -> str:
        return f"GaussianMutation(chance={self.chance}, coeff={self.coeff})"


# =============================================================================
# STATISTICS
# =============================================================================

@dataclass(frozen=True)
class Statistics:
    """Fitness summary of a population, taken right before it is bred."""
    min_fitness: float
    max_fitness: float
    avg_fitness: float
    median_fitness: float

    @classmethod
    def from_population(cls, population: Sequence[Individual]) -> 'Statistics':
        if len(population) == 0:
            raise ValueError("Cannot compute statistics of an empty population")
        fitnesses = np.array([individual.fitness() for individual in population],
                             dtype=np.float64)
        return cls(
            min_fitness=float(fitnesses.min()),
            max_fitness=float(fitnesses.max()),
            avg_fitness=float(fitnesses.mean()),
            median_fitness=float(np.median(fitnesses)),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            'min_fitness': self.min_fitness,
            'max_fitness': self.max_fitness,
            'avg_fitness': self.avg_fitness,
            'median_fitness': self.median_fitness,
        }

    def __str__(self) -> str:
        return (
            f"min={self.min_fitness:.2f}, max={self.max_fitness:.2f}, "
            f"avg={self.avg_fitness:.2f}, median={self.median_fitness:.2f}"
        )


# =============================================================================
# GENETIC ALGORITHM
# =============================================================================

class GeneticAlgorithm:
    """Select, cross over and mutate a scored population into a new one."""

    def __init__(self,
                 selection_method: SelectionMethod,
                 crossover_method: CrossoverMethod,
                 mutation_method: MutationMethod):
        self.selection_method = selection_method
        self.crossover_method = crossover_method
        self.mutation_method = mutation_method

    def evolve(self, rng: np.random.Generator,
               population: Sequence[IndividualT]
               ) -> Tuple[List[IndividualT], Statistics]:
        """
        Breed a new population of the same size.

        For every slot: pick two parents (with replacement), cross their
        chromosomes into a child, mutate the child in place and rebuild an
        individual from it. The parent population is left untouched.

        Args:
            rng: Random source, consumed in slot order
                (parent A, parent B, crossover, mutation).
            population: Scored individuals of one class.

        Returns:
            Tuple of (new population, statistics of the old population)

        Raises:
            ValueError: on an empty population or a degenerate fitness
                distribution.
        """
        if len(population) == 0:
            raise ValueError("Cannot evolve an empty population")

        stats = Statistics.from_population(population)
        individual_cls = type(population[0])

        new_population = []
        for _ in range(len(population)):
            parent_a = self.selection_method.select(rng, population).chromosome()
            parent_b = self.selection_method.select(rng, population).chromosome()

            child = self.crossover_method.crossover(rng, parent_a, parent_b)
            self.mutation_method.mutate(rng, child)

            new_population.append(individual_cls.from_chromosome(child))

        logger.debug(
            "[GeneticAlgorithm] Bred {} children using {}, {}, {}",
            len(new_population),
            self.selection_method,
            self.crossover_method,
            self.mutation_method,
        )
        return new_population, stats

    def __repr__(self) -> str:
        return (
            f"GeneticAlgorithm({self.selection_method!r}, "
            f"{self.crossover_method!r}, {self.mutation_method!r})"
        )
