"""
Simulation configuration

All tunables of a run live in one dataclass so they can be tweaked for
experiments without touching the engine:

    config = SimulationConfig(generation_length=1000, mutation_chance=0.05)
    config = config.with_overrides(num_animals=20)
"""

import math
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, List

from .eye import Eye
from .network import LayerTopology


@dataclass(frozen=True)
class SimulationConfig:
    """
    Configuration for a Simulation.

    Defaults reproduce the classic setup: 40 animals hunting 60 foods,
    bred every 2500 ticks.
    """
    # ==========================================================================
    # EYE
    # ==========================================================================
    fov_range: float = Eye.FOV_RANGE        # Sensor radius (world is 1x1)
    fov_angle: float = Eye.FOV_ANGLE        # Sensor arc in radians
    cells: int = Eye.CELLS                  # Photoreceptors per eye

    # ==========================================================================
    # MOVEMENT
    # ==========================================================================
    speed_min: float = 0.001                # Keeps animals from standing still
    speed_max: float = 0.005                # Keeps animals from flying off
    speed_acceleration: float = 0.2         # Max speed change per tick
    rotation_acceleration: float = math.pi / 2  # Max rotation change per tick
    initial_speed: float = 0.002            # Speed of a newborn animal

    # ==========================================================================
    # WORLD
    # ==========================================================================
    num_animals: int = 40
    num_foods: int = 60
    collision_distance: float = 0.01        # Eating distance

    # ==========================================================================
    # EVOLUTION
    # ==========================================================================
    generation_length: int = 2500           # Ticks between evolutions
    mutation_chance: float = 0.01           # Per-gene mutation probability
    mutation_coefficient: float = 0.3       # Max magnitude of one mutation

    def __post_init__(self):
        if self.fov_range <= 0 or self.fov_angle <= 0 or self.cells <= 0:
            raise ValueError("Eye parameters (fov_range, fov_angle, cells) must be positive")
        if not 0 < self.speed_min <= self.speed_max:
            raise ValueError(
                f"Speed bounds must satisfy 0 < speed_min <= speed_max, "
                f"got {self.speed_min} and {self.speed_max}"
            )
        if self.speed_acceleration < 0 or self.rotation_acceleration < 0:
            raise ValueError("Accelerations must be >= 0")
        if self.num_animals <= 0:
            raise ValueError(f"num_animals must be positive, got {self.num_animals}")
        if self.num_foods < 0:
            raise ValueError(f"num_foods must be >= 0, got {self.num_foods}")
        if self.collision_distance < 0:
            raise ValueError("collision_distance must be >= 0")
        if self.generation_length <= 0:
            raise ValueError(
                f"generation_length must be positive, got {self.generation_length}"
            )
        if not 0.0 <= self.mutation_chance <= 1.0:
            raise ValueError(
                f"mutation_chance must be within [0, 1], got {self.mutation_chance}"
            )
        if self.mutation_coefficient < 0:
            raise ValueError("mutation_coefficient must be >= 0")

    def eye(self) -> Eye:
        """Build the eye every animal of this run gets."""
        return Eye(self.fov_range, self.fov_angle, self.cells)

    def topology(self) -> List[LayerTopology]:
        """Brain shape: one input per eye cell, a hidden layer twice as wide, 2 outputs."""
        return [
            LayerTopology(self.cells),
            LayerTopology(2 * self.cells),
            LayerTopology(2),
        ]

    def with_overrides(self, **overrides) -> 'SimulationConfig':
        """Return a copy with some fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
