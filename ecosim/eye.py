"""
Eye - Angular-sector food sensor

The eye splits its field of view into equally wide cells. Every food that
is close enough and inside the arc adds energy to the cell it falls in;
the closer the food, the more energy.
"""

import math
import numpy as np
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .animal import Food


class Eye:
    """
    Stateless food sensor.

    Args:
        fov_range: Sensor radius; food at or beyond it is invisible.
        fov_angle: Width of the visible arc in radians, centred on the
            animal's rotation.
        cells: Number of photoreceptors the arc is split into.
    """

    FOV_RANGE = 0.25
    FOV_ANGLE = math.pi + math.pi / 4
    CELLS = 9

    def __init__(self, fov_range: float, fov_angle: float, cells: int):
        if fov_range <= 0 or fov_angle <= 0 or cells <= 0:
            raise ValueError(
                f"Eye parameters must be positive, got fov_range={fov_range}, "
                f"fov_angle={fov_angle}, cells={cells}"
            )
        self.fov_range = fov_range
        self.fov_angle = fov_angle
        self.cells = cells

    @classmethod
    def default(cls) -> 'Eye':
        return cls(cls.FOV_RANGE, cls.FOV_ANGLE, cls.CELLS)

    def process_vision(self, position: np.ndarray, rotation: float,
                       foods: Sequence['Food']) -> np.ndarray:
        """
        Read the energy of every cell.

        Args:
            position: Animal position (x, y).
            rotation: Animal rotation in radians (0 = facing +x).
            foods: Foods to look at.

        Returns:
            Array of `cells` non-negative energies. A single food gives
            (fov_range - distance) / fov_range; foods in one cell add up.
        """
        cells = np.zeros(self.cells)

        for food in foods:
            dx = food.position[0] - position[0]
            dy = food.position[1] - position[1]
            distance = math.hypot(dx, dy)

            if distance >= self.fov_range:
                continue

            angle = _wrap_angle(math.atan2(dy, dx) - rotation)

            if angle < -self.fov_angle / 2 or angle > self.fov_angle / 2:
                continue

            # [-fov_angle/2, fov_angle/2] -> [0, cells), top edge folded into the last cell
            cell = (angle + self.fov_angle / 2) / self.fov_angle * self.cells
            cell = min(int(cell), self.cells - 1)

            cells[cell] += (self.fov_range - distance) / self.fov_range

        return cells

    def __repr__(self) -> str:
        return (f"Eye(fov_range={self.fov_range}, fov_angle={self.fov_angle:.3f}, "
                f"cells={self.cells})")


def _wrap_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    wrapped = math.remainder(angle, 2 * math.pi)
    if wrapped == -math.pi:
        return math.pi
    return wrapped
