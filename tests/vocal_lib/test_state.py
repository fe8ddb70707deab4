"""Tests for marker-file flags and the combined activation state."""

from __future__ import annotations

from pathlib import Path

import pytest
from vocal_lib.paths import StatePaths
from vocal_lib.state import ActivationState, MarkerFlag


class TestMarkerFlag:
    """Verify existence semantics, timestamps, and destructive consume."""

    def test_missing_file_reads_false(self, tmp_path: Path) -> None:
        flag = MarkerFlag(tmp_path / 'marker')
        assert flag.exists() is False
        assert flag.timestamp() is None

    def test_set_writes_timestamp(self, tmp_path: Path) -> None:
        flag = MarkerFlag(tmp_path / 'marker')
        flag.set(1_700_000_000)
        assert flag.exists() is True
        assert flag.path.read_text() == '1700000000'
        assert flag.timestamp() == 1_700_000_000

    def test_set_defaults_to_now(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr('vocal_lib.state.time.time', lambda: 1234.9)
        flag = MarkerFlag(tmp_path / 'marker')
        flag.set()
        assert flag.timestamp() == 1234

    def test_set_creates_parent_directory(self, tmp_path: Path) -> None:
        flag = MarkerFlag(tmp_path / 'nested' / 'dir' / 'marker')
        flag.set(1)
        assert flag.exists()

    def test_set_is_idempotent(self, tmp_path: Path) -> None:
        flag = MarkerFlag(tmp_path / 'marker')
        flag.set(1)
        flag.set(2)
        assert flag.timestamp() == 2

    def test_clear_missing_is_noop(self, tmp_path: Path) -> None:
        flag = MarkerFlag(tmp_path / 'marker')
        flag.clear()
        flag.set(1)
        flag.clear()
        flag.clear()
        assert flag.exists() is False

    def test_consume_is_exactly_once(self, tmp_path: Path) -> None:
        flag = MarkerFlag(tmp_path / 'marker')
        flag.set(1)
        assert flag.consume() is True
        assert flag.consume() is False
        assert flag.exists() is False

    def test_unparseable_content_reads_as_none(self, tmp_path: Path) -> None:
        """Content is advisory: a hand-made marker still counts as set."""
        path = tmp_path / 'marker'
        path.write_text('')
        flag = MarkerFlag(path)
        assert flag.exists() is True
        assert flag.timestamp() is None

    def test_timestamp_tolerates_whitespace(self, tmp_path: Path) -> None:
        path = tmp_path / 'marker'
        path.write_text('42\n')
        assert MarkerFlag(path).timestamp() == 42


class TestActivationState:
    """Verify emergency stop dominates the hands-free flag."""

    @pytest.fixture
    def state(self, tmp_path: Path) -> ActivationState:
        return ActivationState(StatePaths.from_state_dir(tmp_path))

    def test_all_false_initially(self, state: ActivationState) -> None:
        assert state.hands_free_active is False
        assert state.emergency_stop_active is False
        assert state.cycle_trigger_pending is False

    def test_hands_free_marker_activates(self, state: ActivationState) -> None:
        state.hands_free.set()
        assert state.hands_free_active is True

    def test_emergency_stop_dominates(self, state: ActivationState) -> None:
        state.hands_free.set()
        state.emergency.set()
        assert state.hands_free_active is False
        assert state.emergency_stop_active is True

    def test_reads_are_not_cached(self, state: ActivationState, tmp_path: Path) -> None:
        """A marker created by another process is visible on the next read."""
        assert state.hands_free_active is False
        (tmp_path / '.vocal-hands-free-active').write_text('0')
        assert state.hands_free_active is True
        (tmp_path / '.vocal-emergency-stop').touch()
        assert state.hands_free_active is False

    def test_file_names(self, tmp_path: Path) -> None:
        paths = StatePaths.from_state_dir(tmp_path)
        assert paths.hands_free_flag == tmp_path / '.vocal-hands-free-active'
        assert paths.emergency_stop == tmp_path / '.vocal-emergency-stop'
        assert paths.cycle_trigger == tmp_path / '.vocal-cycle-trigger'
        assert paths.session_registry == tmp_path / '.vocal-session-registry.json'
