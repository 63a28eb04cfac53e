import numpy as np
import pytest

from texture_memory.common.timestep import GateState
from texture_memory.memory.codec import devectorize_cell
from texture_memory.memory.kernel import ExponentialKernel
from texture_memory.memory.pattern_memory import PatternMemory
from texture_memory.memory.training import TrainingPair, build_training_set
from texture_memory.simulation.engine import GridSimulationEngine, SimulationState
from texture_memory.simulation.grid import area_at


def _engine(image, size, clock, rng, timestep=0.01):
    retriever = PatternMemory(build_training_set(image)).evaluate(ExponentialKernel(4.0))
    state = SimulationState.seeded(size, timestep, rng=rng, clock=clock)
    return GridSimulationEngine(retriever, state)


def test_seeded_state_starts_with_identical_distinct_pages(clock, rng):
    state = SimulationState.seeded(6, 0.01, rng=rng, clock=clock)
    assert state.current is not state.next
    assert np.array_equal(state.current, state.next)
    assert state.size == 6


def test_step_writes_next_then_swaps(striped_image, clock, rng):
    engine = _engine(striped_image, 6, clock, rng)
    before_current = engine.state.current
    before_next = engine.state.next
    engine.step()
    assert engine.state.current is before_next
    assert engine.state.next is before_current
    assert engine.state.buffers.swaps == 1


def test_vectorised_step_matches_cellwise(striped_image, clock, rng):
    engine = _engine(striped_image, 5, clock, rng)
    start = engine.state.current.copy()
    engine.step()
    batched = engine.state.current.copy()

    cellwise = GridSimulationEngine(engine.retriever, SimulationState.from_grid(start, 0.01, clock=clock))
    cellwise.step_cellwise()
    assert np.array_equal(cellwise.state.current, batched)


def test_tick_cadence_with_fake_clock(striped_image, clock, rng):
    engine = _engine(striped_image, 4, clock, rng, timestep=0.01)
    swaps_seen = 0
    for _ in range(1000):
        clock.advance(0.001)
        read_page, write_page = engine.state.current, engine.state.next
        assert read_page is not write_page
        if engine.update():
            swaps_seen += 1
            assert engine.state.current is write_page
    assert abs(engine.state.steps - 100) <= 1
    assert engine.state.buffers.swaps == swaps_seen == engine.state.steps


def test_update_idle_before_timestep(striped_image, clock, rng):
    engine = _engine(striped_image, 4, clock, rng, timestep=0.5)
    start = engine.state.current
    clock.advance(0.1)
    assert not engine.update()
    assert engine.state.current is start


def test_single_pattern_fills_whole_grid(clock, rng):
    image = np.array(
        [[[255, 0, 0], [0, 255, 0]],
         [[0, 0, 255], [255, 255, 0]]],
        dtype=np.uint8,
    )
    pair = TrainingPair.from_area(area_at(image, 0, 0))
    retriever = PatternMemory([pair]).evaluate(ExponentialKernel(10.0))
    engine = GridSimulationEngine(retriever, SimulationState.seeded(7, 0.01, rng=rng, clock=clock))
    written = engine.state.next
    engine.step()
    expected = devectorize_cell(pair.target)
    assert engine.state.current is written
    assert np.all(written == expected)
    assert expected.tolist() == [255, 0, 0]


def test_run_steps_counts_steps(striped_image, clock, rng):
    engine = _engine(striped_image, 4, clock, rng)
    engine.run_steps(3)
    assert engine.state.steps == 3
    assert engine.state.buffers.swaps == 3


class _FailingOnceRetriever:
    def __init__(self):
        self.calls = 0

    def get_many(self, queries):
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("boom")
        return np.zeros((len(queries), 3), dtype=np.uint8)


def test_failed_step_returns_gate_to_idle(clock, rng):
    engine = GridSimulationEngine(_FailingOnceRetriever(), SimulationState.seeded(3, 0.01, rng=rng, clock=clock))
    clock.advance(0.02)
    with pytest.raises(RuntimeError):
        engine.update()
    assert engine.state.timer.state is GateState.IDLE
    clock.advance(0.02)
    assert engine.update()
    assert np.all(engine.state.current == 0)
