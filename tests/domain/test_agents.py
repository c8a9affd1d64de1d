"""Tests for spatial_growth.domain.agents."""

from __future__ import annotations

from spatial_growth.domain.agents import Agent, Particle


class TestAgentCrossings:
    def test_fresh_agent_has_not_crossed(self) -> None:
        agent = Agent(1, 1)
        assert not agent.has_crossed
        assert agent.position == (1, 1)

    def test_left_to_right(self) -> None:
        agent = Agent(3, 1)
        agent.record_crossings(2, 1, midline=2)
        assert agent.crossed_lr
        assert not agent.crossed_rl
        assert agent.has_crossed

    def test_right_to_left(self) -> None:
        agent = Agent(2, 4)
        agent.record_crossings(3, 4, midline=2)
        assert agent.crossed_rl
        assert not agent.crossed_lr

    def test_vertical_crossings(self) -> None:
        agent = Agent(1, 3)
        agent.record_crossings(1, 2, midline=2)
        assert agent.crossed_tb
        agent.y = 2
        agent.record_crossings(1, 3, midline=2)
        assert agent.crossed_bt

    def test_move_within_one_half_sets_nothing(self) -> None:
        agent = Agent(1, 2)
        agent.record_crossings(2, 2, midline=2)
        assert not agent.has_crossed

    def test_flags_never_reset(self) -> None:
        agent = Agent(3, 1)
        agent.record_crossings(2, 1, midline=2)
        agent.x = 4
        agent.record_crossings(3, 1, midline=2)
        assert agent.crossed_lr

    def test_agents_compare_by_identity(self) -> None:
        assert Agent(1, 1) != Agent(1, 1)


def test_particle_position() -> None:
    assert Particle(1.5, 2.5).position == (1.5, 2.5)
