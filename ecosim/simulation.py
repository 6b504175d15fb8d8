"""
Simulation - The tick loop tying senses, brains, bodies and evolution

Every tick, in this order:
1. Collisions: animals eat food they touch; eaten food moves elsewhere
2. Brains: eye -> network -> speed/rotation changes
3. Movement: animals move forward, wrapping around the world edges
4. Aging: after generation_length ticks the population is evolved

Evolution turns every animal into an AnimalIndividual, breeds them with
the genetic algorithm, turns the children back into animals and scatters
the food again for a fresh start.

All randomness comes from the numpy Generator passed into each call, so a
run is fully reproducible from its seed:

    rng = np.random.default_rng(42)
    sim = Simulation.random(rng)
    for _ in range(10_000):
        sim.step(rng)
"""

import math
import numpy as np
from typing import List, Optional

from loguru import logger

from .animal import Animal, Food
from .animal_individual import AnimalIndividual
from .config import SimulationConfig
from .genetics import (
    GaussianMutation,
    GeneticAlgorithm,
    RouletteWheelSelection,
    Statistics,
    UniformCrossover,
)
from .world import World, WorldSnapshot


class Simulation:
    """
    A world of animals plus the genetic algorithm that breeds them.

    Attributes exposed read-only:
        age: Ticks since the last evolution
        generation: Number of evolutions so far
    """

    def __init__(self, world: World, ga: GeneticAlgorithm,
                 config: Optional[SimulationConfig] = None):
        self._world = world
        self.ga = ga
        self.config = config or SimulationConfig()
        self._age = 0
        self._generation = 0

    @classmethod
    def random(cls, rng: np.random.Generator,
               config: Optional[SimulationConfig] = None) -> 'Simulation':
        """Build a simulation with a random world and the default breeding strategies."""
        config = config or SimulationConfig()
        world = World.random(rng, config)
        ga = GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            GaussianMutation(config.mutation_chance, config.mutation_coefficient),
        )
        logger.debug("[Simulation] Created {} with {}", world, ga)
        return cls(world, ga, config)

    @property
    def age(self) -> int:
        return self._age

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def animals(self) -> List[Animal]:
        return self._world.animals

    @property
    def foods(self) -> List[Food]:
        return self._world.foods

    def world(self) -> WorldSnapshot:
        """Read-only copy of positions and rotations for hosts to draw."""
        return self._world.snapshot()

    # =========================================================================
    # STEPPING
    # =========================================================================

    def step(self, rng: np.random.Generator) -> Optional[Statistics]:
        """
        Advance the world by one tick.

        Returns:
            Statistics of the finished generation if this tick ended one,
            otherwise None.
        """
        self._process_collisions(rng)
        self._process_brains()
        self._process_movements()

        self._age += 1

        if self._age > self.config.generation_length:
            return self._evolve(rng)
        return None

    def train(self, rng: np.random.Generator) -> Statistics:
        """Step until the current generation is over and return its statistics."""
        while True:
            stats = self.step(rng)
            if stats is not None:
                return stats

    def _process_collisions(self, rng: np.random.Generator):
        for animal in self._world.animals:
            for food in self._world.foods:
                distance = np.linalg.norm(animal.position - food.position)

                if distance <= self.config.collision_distance:
                    animal.satiation += 1
                    food.relocate(rng)

    def _process_brains(self):
        config = self.config

        for animal in self._world.animals:
            vision = animal.eye.process_vision(
                animal.position, animal.rotation, self._world.foods
            )
            response = animal.brain.propagate(vision)

            speed = np.clip(response[0], -config.speed_acceleration, config.speed_acceleration)
            rotation = np.clip(
                response[1], -config.rotation_acceleration, config.rotation_acceleration
            )

            animal.speed = float(np.clip(animal.speed + speed, config.speed_min, config.speed_max))
            animal.rotation = float((animal.rotation + rotation) % (2 * math.pi))

    def _process_movements(self):
        for animal in self._world.animals:
            heading = np.array([math.cos(animal.rotation), math.sin(animal.rotation)])
            animal.position = _wrap_unit(animal.position + heading * animal.speed)

    # =========================================================================
    # EVOLUTION
    # =========================================================================

    def _evolve(self, rng: np.random.Generator) -> Statistics:
        self._age = 0
        self._generation += 1

        current_population: List[AnimalIndividual] = [
            AnimalIndividual.from_animal(animal) for animal in self._world.animals
        ]

        evolved_population, stats = self.ga.evolve(rng, current_population)

        self._world.animals = [
            individual.into_animal(rng, self.config) for individual in evolved_population
        ]

        for food in self._world.foods:
            food.relocate(rng)

        logger.info("[Simulation] Generation {} finished: {}", self._generation, stats)
        return stats

    def __repr__(self) -> str:
        return (f"Simulation(generation={self._generation}, age={self._age}, "
                f"world={self._world!r})")


def _wrap_unit(position: np.ndarray) -> np.ndarray:
    """Wrap coordinates into [0, 1)."""
    wrapped = np.mod(position, 1.0)
    # np.mod(-1e-18, 1.0) rounds up to exactly 1.0
    wrapped[wrapped >= 1.0] = 0.0
    return wrapped


def create_simulation(seed: Optional[int] = None, **overrides):
    """
    Build a seeded simulation, tweaking any SimulationConfig field.

    Args:
        seed: Seed for numpy.random.default_rng
        **overrides: SimulationConfig fields to change

    Returns:
        Tuple of (simulation, rng). Keep stepping with the returned rng to
        stay reproducible.
    """
    rng = np.random.default_rng(seed)
    config = SimulationConfig().with_overrides(**overrides)
    return Simulation.random(rng, config), rng
