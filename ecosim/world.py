"""
World - The arena animals forage in

A toroidal 1x1 square holding a fixed number of animal slots and food
slots. Slots are never added or removed: food gets relocated and animals
get replaced wholesale when a generation ends.

Hosts (renderers, bridges) read the world through WorldSnapshot, a
read-only copy of what is worth drawing.
"""

import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .animal import Animal, Food
from .config import SimulationConfig


# =============================================================================
# WORLD
# =============================================================================

class World:
    """Animals and foods of one simulation."""

    def __init__(self, animals: List[Animal], foods: List[Food]):
        self.animals = animals
        self.foods = foods

    @classmethod
    def random(cls, rng: np.random.Generator,
               config: Optional[SimulationConfig] = None) -> 'World':
        """
        Populate a world with random animals and foods.

        Args:
            rng: Random source
            config: Supplies num_animals, num_foods and the animals' eye/brain shape
        """
        config = config or SimulationConfig()
        animals = [Animal.random(rng, config) for _ in range(config.num_animals)]
        foods = [Food.random(rng) for _ in range(config.num_foods)]
        return cls(animals, foods)

    def snapshot(self) -> 'WorldSnapshot':
        return WorldSnapshot(
            animals=tuple(
                AnimalView(x=animal.x, y=animal.y, rotation=float(animal.rotation))
                for animal in self.animals
            ),
            foods=tuple(
                FoodView(x=float(food.position[0]), y=float(food.position[1]))
                for food in self.foods
            ),
        )

    def __repr__(self) -> str:
        return f"World(animals={len(self.animals)}, foods={len(self.foods)})"


# =============================================================================
# READ-ONLY VIEWS
# =============================================================================

@dataclass(frozen=True)
class AnimalView:
    x: float
    y: float
    rotation: float                 # Radians

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'rotation': self.rotation}


@dataclass(frozen=True)
class FoodView:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class WorldSnapshot:
    """Copy of the world state at one tick; unaffected by later steps."""
    animals: Tuple[AnimalView, ...]
    foods: Tuple[FoodView, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'animals': [animal.to_dict() for animal in self.animals],
            'foods': [food.to_dict() for food in self.foods],
        }
