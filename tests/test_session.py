"""
Tests for the session driver and the delayed auto-advance.
"""

import numpy as np
import pytest

from pookalam.puzzle_core.config_loader import load_config
from pookalam.puzzle_core.game import PuzzleEngine
from pookalam.puzzle_core.ring_ops import Direction
from pookalam.puzzle_core.rng import ScriptedRotationSource
from pookalam.puzzle_core.session import PuzzleSession


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def session(config):
    """Every ring dealt one step forward of solved: one BACKWARD solves it."""
    engine = PuzzleEngine(config, rotation_source=ScriptedRotationSource([1]))
    return PuzzleSession(engine=engine)


def solve_level(session):
    for i in range(session.level):
        session.rotate(i, Direction.BACKWARD)
    assert session.is_complete


class TestSessionBasics:
    """Test state holding and composition."""

    def test_starts_at_level_one(self, session):
        assert session.level == 1
        assert session.moves == 0
        assert session.state.is_consistent

    def test_rotate_updates_state(self, session):
        before = session.state
        result = session.rotate(0, Direction.FORWARD)
        assert session.state is result.state
        assert session.state is not before
        assert session.moves == 1

    def test_invalid_rotation_leaves_state(self, session):
        before = session.state
        with pytest.raises(ValueError):
            session.rotate(1, Direction.FORWARD)
        assert session.state is before

    def test_restart_resets_moves(self, session):
        session.rotate(0, Direction.FORWARD)
        session.rotate(0, Direction.FORWARD)
        state = session.restart()
        assert state.moves == 0
        assert state.level == 1
        assert not state.is_complete

    def test_manual_advance_and_reset(self, session):
        session.advance()
        session.advance()
        assert session.level == 3
        assert session.state.ring_count == 3
        session.reset()
        assert session.level == 1
        assert session.state.ring_count == 1

    def test_manual_advance_at_final_level_is_noop(self, session):
        for _ in range(3):
            session.advance()
        state = session.state
        assert session.advance() is state

    def test_listeners_see_every_state(self, session):
        seen = []
        session.add_listener(seen.append)
        session.rotate(0, Direction.FORWARD)
        session.restart()
        assert len(seen) == 2
        assert seen[-1] is session.state

    def test_info_and_render_data(self, session):
        info = session.get_info()
        assert info["level"] == 1
        assert info["max_level"] == 4
        assert info["moves"] == 0

        data = session.get_render_data()
        assert len(data["rings"]) == 1
        ring = data["rings"][0]
        assert ring["name"] == "Thumba"
        assert len(ring["colors"]) == 6
        assert ring["colors"][0] == session.engine.catalog[0].color_for(ring["color_indices"][0])

    def test_engine_with_seed_rejected(self, config):
        engine = PuzzleEngine(config, rotation_source=ScriptedRotationSource([1]))
        with pytest.raises(ValueError):
            PuzzleSession(engine=engine, seed=7)

    def test_engine_with_other_config_rejected(self, config, tmp_path):
        path = tmp_path / "game_config.yaml"
        path.write_text(
            "rings:\n"
            "  - {id: 0, name: A, segments: 3, palette: ['#000', '#111', '#222']}\n"
            "levels: {max_level: 1, start_level: 1, advance_delay_seconds: 1.0}\n"
        )
        engine = PuzzleEngine(config, rotation_source=ScriptedRotationSource([1]))
        with pytest.raises(ValueError):
            PuzzleSession(config=load_config(str(path)), engine=engine)

    def test_engine_with_its_own_config(self, config):
        engine = PuzzleEngine(config, rotation_source=ScriptedRotationSource([1]))
        session = PuzzleSession(config=config, engine=engine)
        assert session.config is config
        assert session.engine is engine

    def test_numpy_ring_index(self, session):
        session.rotate(np.int64(0), Direction.BACKWARD)
        assert session.is_complete


class TestFeedback:
    """Test feedback delivery and muting."""

    def test_feedback_delivered(self, session):
        signals = []
        session.add_feedback_listener(signals.append)
        session.rotate(0, Direction.FORWARD)
        session.rotate(0, Direction.BACKWARD)
        session.rotate(0, Direction.BACKWARD)
        assert [s.kind for s in signals] == ["step", "step", "success"]
        assert signals[-1].frequency == pytest.approx(800.0)

    def test_muted_suppresses_delivery(self, session):
        signals = []
        session.add_feedback_listener(signals.append)
        session.set_muted(True)
        session.rotate(0, Direction.BACKWARD)
        assert signals == []
        assert session.last_feedback.is_success

    def test_toggle_muted(self, session):
        assert session.toggle_muted() is True
        assert session.toggle_muted() is False


class TestAutoAdvance:
    """Test the delayed, cancelable level advance."""

    def test_solve_schedules_advance(self, session):
        solve_level(session)
        pending = session.pending_advance
        assert pending is not None
        assert pending.state is session.state
        assert pending.due_time == pytest.approx(2.0)

    def test_advance_waits_for_delay(self, session):
        solve_level(session)
        assert session.tick(1.0) is False
        assert session.level == 1
        assert session.tick(0.999) is False
        assert session.level == 1

    def test_advance_fires_after_delay(self, session):
        solve_level(session)
        assert session.tick(2.0) is True
        assert session.level == 2
        assert session.moves == 0
        assert not session.is_complete
        assert session.state.ring_count == 2
        assert session.pending_advance is None

    def test_reset_cancels_pending(self, session):
        solve_level(session)
        pending = session.pending_advance
        session.reset()
        assert pending.cancelled
        assert session.pending_advance is None
        assert session.tick(5.0) is False
        assert session.level == 1

    def test_restart_cancels_pending(self, session):
        solve_level(session)
        session.restart()
        session.tick(5.0)
        assert session.level == 1

    def test_rotating_away_cancels_pending(self, session):
        solve_level(session)
        session.rotate(0, Direction.FORWARD)
        assert not session.is_complete
        assert session.pending_advance is None
        session.tick(5.0)
        assert session.level == 1

    def test_resolving_reschedules_from_now(self, session):
        solve_level(session)
        session.tick(1.5)
        session.rotate(0, Direction.FORWARD)
        session.rotate(0, Direction.BACKWARD)
        assert session.pending_advance.due_time == pytest.approx(3.5)
        assert session.tick(1.0) is False
        assert session.tick(1.0) is True
        assert session.level == 2

    def test_final_level_never_advances(self, session):
        for _ in range(3):
            session.advance()
        solve_level(session)
        assert session.is_final_success
        assert session.pending_advance is None
        session.tick(10.0)
        assert session.level == 4
        assert session.is_complete

    def test_full_game(self, session):
        """Play every level through the auto-advance."""
        for level in range(1, 5):
            assert session.level == level
            solve_level(session)
            session.tick(2.0)
        assert session.is_final_success

    def test_auto_advance_disabled(self, config):
        engine = PuzzleEngine(config, rotation_source=ScriptedRotationSource([1]))
        session = PuzzleSession(engine=engine, auto_advance=False)
        solve_level(session)
        assert session.pending_advance is None
        session.tick(10.0)
        assert session.level == 1

    def test_negative_tick_rejected(self, session):
        with pytest.raises(ValueError):
            session.tick(-0.1)
