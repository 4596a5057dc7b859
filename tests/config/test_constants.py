from evonomics.config.constants import (
    BRANCH_LIMIT,
    COMMAND_QUEUE_SIZE,
    FLUSH_THRESHOLD,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_EXECUTE,
    MOVE_PENALTY,
    NEIGHBOR_FEATURES,
    NUM_INPUTS,
    NUM_NEIGHBORS,
    NUM_REGISTERS,
    OUTPUT_QUEUE_SIZE,
    RESERVE_MULTIPLIER,
    SPAWN_FOOD,
)


def test_grid_dimensions_are_positive_ints() -> None:
    assert isinstance(GRID_WIDTH, int) and GRID_WIDTH > 0
    assert isinstance(GRID_HEIGHT, int) and GRID_HEIGHT > 0


def test_input_vector_covers_neighbors_plus_own_resources() -> None:
    assert NUM_INPUTS == NEIGHBOR_FEATURES * NUM_NEIGHBORS + 2 == 42


def test_interpreter_bounds() -> None:
    assert MAX_EXECUTE == 128
    assert NUM_REGISTERS == 4
    assert 0 < BRANCH_LIMIT < MAX_EXECUTE


def test_spawned_agent_can_afford_a_move() -> None:
    assert SPAWN_FOOD > MOVE_PENALTY + 1


def test_reserve_multiplier_is_positive() -> None:
    assert isinstance(RESERVE_MULTIPLIER, int) and RESERVE_MULTIPLIER > 0


def test_queue_and_flush_sizes_are_positive() -> None:
    assert COMMAND_QUEUE_SIZE > 0
    assert OUTPUT_QUEUE_SIZE > 0
    assert FLUSH_THRESHOLD > 0
