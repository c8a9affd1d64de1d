from spatial_growth.config.constants import (
    CONTINUOUS_MAX_POPULATION,
    CONTINUOUS_REPRO_DISTANCE,
    CROWDING_RADIUS,
    DIRECTIONS,
    FLUSH_THRESHOLD,
    GRID_SIZE,
    GROWTH_RATE,
    INITIAL_POPULATION,
    NUM_STEPS,
    SEAM_GRID_SIZE,
    SEAM_POSITION,
    TRAP_WAIT,
)


def test_grid_size_is_positive_int() -> None:
    assert isinstance(GRID_SIZE, int) and GRID_SIZE > 0


def test_initial_population_fits_in_grid() -> None:
    assert isinstance(INITIAL_POPULATION, int) and INITIAL_POPULATION > 0
    assert INITIAL_POPULATION < GRID_SIZE * GRID_SIZE


def test_num_steps_is_positive() -> None:
    assert isinstance(NUM_STEPS, int) and NUM_STEPS > 0


def test_growth_rate_is_a_probability_scale() -> None:
    assert 0.0 < GROWTH_RATE <= 1.0


def test_crowding_radius_is_non_negative() -> None:
    assert isinstance(CROWDING_RADIUS, int) and CROWDING_RADIUS >= 0


def test_trap_wait_is_at_least_one() -> None:
    assert isinstance(TRAP_WAIT, int) and TRAP_WAIT >= 1


def test_directions_are_unit_axis_steps_in_query_order() -> None:
    assert DIRECTIONS == ((0, 1), (0, -1), (1, 0), (-1, 0))
    for dx, dy in DIRECTIONS:
        assert abs(dx) + abs(dy) == 1


def test_seam_lies_inside_default_seam_grid() -> None:
    assert 1 <= SEAM_POSITION < SEAM_GRID_SIZE


def test_continuous_defaults_are_positive() -> None:
    assert CONTINUOUS_REPRO_DISTANCE > 0.0
    assert CONTINUOUS_MAX_POPULATION >= INITIAL_POPULATION


def test_flush_threshold_is_positive() -> None:
    assert isinstance(FLUSH_THRESHOLD, int) and FLUSH_THRESHOLD > 0
