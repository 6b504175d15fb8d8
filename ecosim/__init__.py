# ecosim - Evolving foragers with neural brains
#
# Animals see food through an angular eye, steer with a tiny feedforward
# network and are bred by a genetic algorithm that rewards food eaten.
#
# LAYOUT:
# ├── network.py            - Feedforward network, flat weight contract
# ├── chromosome.py         - Flat genome
# ├── genetics.py           - Genetic algorithm + selection/crossover/mutation
# ├── eye.py                - Angular-sector food sensor
# ├── animal.py             - Animal and Food
# ├── animal_individual.py  - Animal <-> Individual bridge
# ├── world.py              - World and read-only snapshots
# ├── config.py             - SimulationConfig tunables
# └── simulation.py         - Tick loop and evolution

# =============================================================================
# NEURAL NETWORK
# =============================================================================

from .network import (
    LayerTopology,
    Network,
)

# =============================================================================
# GENETICS
# =============================================================================

from .chromosome import Chromosome

from .genetics import (
    Individual,
    SelectionMethod,
    CrossoverMethod,
    MutationMethod,
    RouletteWheelSelection,
    UniformCrossover,
    GaussianMutation,
    GeneticAlgorithm,
    Statistics,
)

# =============================================================================
# SIMULATION
# =============================================================================

from .eye import Eye

from .animal import (
    Animal,
    Food,
)

from .animal_individual import AnimalIndividual

from .world import (
    World,
    WorldSnapshot,
    AnimalView,
    FoodView,
)

from .config import SimulationConfig

from .simulation import (
    Simulation,
    create_simulation,
)

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # Neural network
    'LayerTopology',
    'Network',

    # Genetics
    'Chromosome',
    'Individual',
    'SelectionMethod',
    'CrossoverMethod',
    'MutationMethod',
    'RouletteWheelSelection',
    'UniformCrossover',
    'GaussianMutation',
    'GeneticAlgorithm',
    'Statistics',

    # Simulation
    'Eye',
    'Animal',
    'Food',
    'AnimalIndividual',
    'World',
    'WorldSnapshot',
    'AnimalView',
    'FoodView',
    'SimulationConfig',
    'Simulation',
    'create_simulation',
]
