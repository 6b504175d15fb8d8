import numpy as np
import pytest

from ecosim.animal import Animal, Food
from ecosim.config import SimulationConfig
from ecosim.genetics import Statistics
from ecosim.simulation import Simulation, create_simulation


def small_config(**overrides):
    defaults = dict(num_animals=6, num_foods=12, generation_length=20)
    defaults.update(overrides)
    return SimulationConfig(**defaults)


def feed_everyone(sim):
    """Make sure the generation has a usable fitness distribution."""
    for animal in sim.animals:
        animal.satiation = max(animal.satiation, 1)


def brain_weights(sim):
    return [list(animal.brain.weights()) for animal in sim.animals]


def brain_outputs(sim, vision):
    return np.array([animal.brain.propagate(vision) for animal in sim.animals])


def test_random_builds_configured_world(rng):
    sim = Simulation.random(rng, small_config())

    snapshot = sim.world()

    assert len(snapshot.animals) == 6
    assert len(snapshot.foods) == 12
    assert sim.age == 0
    assert sim.generation == 0


def test_snapshot_is_read_only_copy(rng):
    sim = Simulation.random(rng, small_config())
    snapshot = sim.world()

    sim.step(rng)

    assert snapshot.animals[0].x != sim.world().animals[0].x or \
        snapshot.animals[0].y != sim.world().animals[0].y
    data = snapshot.to_dict()
    assert set(data) == {'animals', 'foods'}
    assert set(data['animals'][0]) == {'x', 'y', 'rotation'}
    assert set(data['foods'][0]) == {'x', 'y'}


def test_step_keeps_animals_in_world_and_speed_in_bounds(rng):
    config = small_config()
    sim = Simulation.random(rng, config)

    for _ in range(15):
        sim.step(rng)
        for animal in sim.animals:
            assert 0.0 <= animal.x < 1.0
            assert 0.0 <= animal.y < 1.0
            assert config.speed_min <= animal.speed <= config.speed_max
            assert 0.0 <= animal.rotation <= 2 * np.pi


def test_step_moves_animals_by_their_speed(rng):
    sim = Simulation.random(rng, small_config(num_foods=0))
    animal = sim.animals[0]
    animal.position = np.array([0.5, 0.5])

    sim.step(rng)

    moved = np.linalg.norm(animal.position - np.array([0.5, 0.5]))
    assert moved == pytest.approx(animal.speed)


def test_movement_wraps_around_the_edges(rng):
    sim = Simulation.random(rng, small_config(num_foods=0))
    animal = sim.animals[0]
    animal.position = np.array([0.9999, 0.9999])
    animal.rotation = np.pi / 4
    animal.speed = 0.005

    sim._process_movements()

    assert 0.0 <= animal.x < 0.01
    assert 0.0 <= animal.y < 0.01


def test_collision_feeds_animal_and_moves_food(rng):
    sim = Simulation.random(rng, small_config())
    animal = sim.animals[0]
    food = sim.foods[0]
    food.position = animal.position.copy()

    sim.step(rng)

    assert animal.satiation >= 1
    assert not np.array_equal(food.position, animal.position)


def test_animal_can_eat_several_foods_in_one_tick(rng):
    sim = Simulation.random(rng, small_config())
    animal = sim.animals[0]
    for food in sim.foods[:3]:
        food.position = animal.position.copy()

    sim._process_collisions(rng)

    assert animal.satiation >= 3


def test_generation_boundary_replaces_animals(rng):
    config = small_config()
    sim = Simulation.random(rng, config)
    first_generation = list(sim.animals)
    food_positions = [food.position.copy() for food in sim.foods]
    vision = np.linspace(0.1, 0.9, config.cells)

    for _ in range(config.generation_length):
        assert sim.step(rng) is None
    assert sim.age == config.generation_length
    assert sim.generation == 0

    feed_everyone(sim)
    parent_weights = brain_weights(sim)
    parent_outputs = brain_outputs(sim, vision)
    stats = sim.step(rng)

    assert isinstance(stats, Statistics)
    assert stats.min_fitness >= 1.0
    assert sim.age == 0
    assert sim.generation == 1
    assert len(sim.animals) == config.num_animals
    assert len(sim.foods) == config.num_foods
    assert not any(animal in first_generation for animal in sim.animals)
    assert all(animal.satiation == 0 for animal in sim.animals)
    assert all(
        not np.array_equal(food.position, before)
        for food, before in zip(sim.foods, food_positions)
    )

    # the children carry bred brains, not copies of the parents' brains
    child_weights = brain_weights(sim)
    assert all(len(weights) == len(parent_weights[0]) for weights in child_weights)
    assert any(weights not in parent_weights for weights in child_weights)
    assert not np.array_equal(brain_outputs(sim, vision), parent_outputs)


def test_accessors_expose_the_live_world(rng):
    sim = Simulation.random(rng, small_config())

    assert sim.animals is sim._world.animals
    assert sim.foods is sim._world.foods
    assert all(isinstance(animal, Animal) for animal in sim.animals)
    assert all(isinstance(food, Food) for food in sim.foods)


def test_train_runs_a_whole_generation(rng):
    config = small_config(generation_length=5)
    sim = Simulation.random(rng, config)

    for _ in range(config.generation_length):
        sim.step(rng)
    feed_everyone(sim)
    stats = sim.train(rng)

    assert isinstance(stats, Statistics)
    assert sim.generation == 1
    assert sim.age == 0


def test_generation_without_any_food_eaten_cannot_be_bred(rng):
    sim = Simulation.random(rng, small_config(num_foods=0, generation_length=1))

    sim.step(rng)
    with pytest.raises(ValueError):
        sim.step(rng)


def test_same_seed_gives_identical_runs():
    def run(seed):
        sim, rng = create_simulation(seed, num_animals=5, num_foods=10, generation_length=8)
        for _ in range(20):
            if sim.age == 8:
                feed_everyone(sim)
            sim.step(rng)
        return sim.world().to_dict(), sim.generation

    first, generation = run(11)
    second, _ = run(11)

    assert generation == 2
    assert first == second


def test_create_simulation_applies_overrides():
    sim, rng = create_simulation(seed=1, num_animals=3, num_foods=4)

    assert len(sim.animals) == 3
    assert len(sim.foods) == 4
    assert isinstance(rng, np.random.Generator)
