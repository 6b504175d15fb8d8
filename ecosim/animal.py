"""
Animals and food

An Animal is a body (position, rotation, speed), an Eye and a Network
brain. It keeps count of the food it has eaten since it was born
(satiation), which is its fitness when the generation ends.

Food is just a position. It is never destroyed; eaten food is moved
somewhere else.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Optional

from .config import SimulationConfig
from .eye import Eye
from .network import Network


def random_position(rng: np.random.Generator) -> np.ndarray:
    """Uniform random point in the [0, 1) x [0, 1) world."""
    return rng.random(2)


def random_rotation(rng: np.random.Generator) -> float:
    return float(rng.uniform(0.0, 2 * math.pi))


@dataclass(eq=False)
class Food:
    """A food item in the world."""
    position: np.ndarray

    @classmethod
    def random(cls, rng: np.random.Generator) -> 'Food':
        return cls(position=random_position(rng))

    def relocate(self, rng: np.random.Generator):
        """Move the food to a fresh random spot (it has been eaten)."""
        self.position = random_position(rng)


@dataclass(eq=False)
class Animal:
    """
    A single forager.

    The eye and brain belong to this animal only. Only the brain is
    heritable; position and rotation are rolled fresh at birth.
    """
    position: np.ndarray
    rotation: float                 # Radians, 0 = facing +x
    eye: Eye
    brain: Network
    speed: float = 0.002
    satiation: int = 0              # Food eaten since birth

    @classmethod
    def random(cls, rng: np.random.Generator,
               config: Optional[SimulationConfig] = None) -> 'Animal':
        """Create an animal with a random brain, position and rotation."""
        config = config or SimulationConfig()
        brain = Network.random(rng, config.topology())
        return cls.from_brain(rng, brain, config)

    @classmethod
    def from_brain(cls, rng: np.random.Generator, brain: Network,
                   config: Optional[SimulationConfig] = None) -> 'Animal':
        """Give birth to an animal with the given brain somewhere in the world."""
        config = config or SimulationConfig()
        return cls(
            position=random_position(rng),
            rotation=random_rotation(rng),
            eye=config.eye(),
            brain=brain,
            speed=config.initial_speed,
        )

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    def __repr__(self) -> str:
        return (f"Animal(x={self.x:.3f}, y={self.y:.3f}, rotation={self.rotation:.3f}, "
                f"speed={self.speed:.4f}, satiation={self.satiation})")
