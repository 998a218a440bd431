"""
Tests for the drag edit state machine: move, resize-left and resize-right.

The track is 960px wide starting at x=0, so 40px is one hour at zoom 1.
"""
import numpy as np
import pytest

from drag_edit import DragEditStateMachine, DragSession, TrackGeometry, compute_extent
from enums import EditMode
from task_model import MIN_DURATION, Task, TaskList
from viewport import ViewportTransform

TRACK = TrackGeometry(left=0.0, width=960.0)
PX_PER_HOUR = 40.0


def px(hour: float) -> float:
    return hour * PX_PER_HOUR


@pytest.fixture
def single_task():
    return TaskList([Task(id=1, name="Focus", start=10.0, duration=2.0, color="#112233")])


@pytest.fixture
def machine(single_task, viewport):
    return DragEditStateMachine(single_task, viewport)


def drag(machine, mode, from_hour, to_hour, track=TRACK):
    assert machine.pointer_down(1, mode, px(from_hour), track)
    extent = machine.pointer_move(px(to_hour), track)
    machine.pointer_up()
    return extent


def test_move_shifts_start_and_keeps_duration(machine, single_task):
    assert drag(machine, EditMode.MOVE, 11.0, 13.5) == (pytest.approx(12.5), 2.0)
    assert single_task.get(1).start == pytest.approx(12.5)


def test_move_clamps_at_day_end():
    tasks = TaskList([Task(id=1, name="Late", start=20.0, duration=3.0, color="#000000")])
    machine = DragEditStateMachine(tasks, ViewportTransform())
    machine.pointer_down(1, EditMode.MOVE, px(20.0), TRACK)
    machine.pointer_move(px(24.0), TRACK)
    assert tasks.get(1).start == pytest.approx(21.0)
    assert tasks.get(1).duration == 3.0


def test_move_clamps_at_day_start(machine, single_task):
    drag(machine, EditMode.MOVE, 11.0, 0.0)
    assert single_task.get(1).start == 0.0


def test_resize_left_moves_start_and_keeps_end(machine, single_task):
    drag(machine, EditMode.RESIZE_LEFT, 10.0, 9.0)
    task = single_task.get(1)
    assert (task.start, task.duration) == (pytest.approx(9.0), pytest.approx(3.0))


def test_resize_left_pins_right_edge_at_min_duration(machine, single_task):
    drag(machine, EditMode.RESIZE_LEFT, 10.0, 15.0)
    task = single_task.get(1)
    assert task.duration == MIN_DURATION
    assert task.start == pytest.approx(12.0 - MIN_DURATION)


def test_resize_left_absorbs_overshoot_past_zero():
    tasks = TaskList([Task(id=1, name="Early", start=0.5, duration=1.0, color="#000000")])
    machine = DragEditStateMachine(tasks, ViewportTransform())
    machine.pointer_down(1, EditMode.RESIZE_LEFT, px(0.5), TRACK)
    # Pointer is clamped to hour 0 by the mapping, so the start lands exactly on 0
    machine.pointer_move(-200.0, TRACK)
    task = tasks.get(1)
    assert (task.start, task.duration) == (0.0, pytest.approx(1.5))


def test_resize_left_applies_min_duration_after_zero_clamp():
    session = DragSession(task_id=1, mode=EditMode.RESIZE_LEFT, start_hour=0.0,
                          original_start=0.0, original_duration=0.25)
    assert compute_extent(session, 5.0, 0.0) == (pytest.approx(0.0), MIN_DURATION)


def test_resize_right_changes_duration_only(machine, single_task):
    drag(machine, EditMode.RESIZE_RIGHT, 12.0, 15.25)
    task = single_task.get(1)
    assert (task.start, task.duration) == (10.0, pytest.approx(5.25))


@pytest.mark.parametrize("to_hour,expected_duration", [
    (10.1, MIN_DURATION),
    (2.0, MIN_DURATION),
    (24.0, 14.0),
])
def test_resize_right_clamps(machine, single_task, to_hour, expected_duration):
    drag(machine, EditMode.RESIZE_RIGHT, 12.0, to_hour)
    assert single_task.get(1).duration == pytest.approx(expected_duration)


def test_move_is_zoom_invariant(single_task):
    viewport = ViewportTransform(zoom=2.5, pan_x=-300.0)
    machine = DragEditStateMachine(single_task, viewport)
    track = TrackGeometry(*viewport.track_rect(0.0, 960.0))
    per_hour = track.width / 24.0
    machine.pointer_down(1, EditMode.MOVE, track.left + 11.0 * per_hour, track)
    machine.pointer_move(track.left + 12.0 * per_hour, track)
    assert single_task.get(1).start == pytest.approx(11.0)


@pytest.mark.parametrize("mode", list(EditMode))
def test_random_drags_keep_invariants(mode):
    rng = np.random.default_rng(2024)
    for start, duration, from_hour, to_hour in zip(
        rng.uniform(0.0, 20.0, 60),
        rng.uniform(MIN_DURATION, 4.0, 60),
        rng.uniform(0.0, 24.0, 60),
        rng.uniform(-5.0, 29.0, 60),
    ):
        tasks = TaskList([Task(id=1, name="r", start=float(start), duration=float(duration), color="#000000")])
        machine = DragEditStateMachine(tasks, ViewportTransform())
        machine.pointer_down(1, mode, px(from_hour), TRACK)
        machine.pointer_move(px(to_hour), TRACK)
        task = tasks.get(1)
        assert task.start >= 0.0
        assert task.duration >= MIN_DURATION - 1e-9
        assert task.start + task.duration <= 24.0 + 1e-9
        if mode is EditMode.MOVE:
            assert task.duration == pytest.approx(duration)
        elif mode is EditMode.RESIZE_LEFT and task.duration > MIN_DURATION:
            assert task.end == pytest.approx(start + duration)
        elif mode is EditMode.RESIZE_RIGHT:
            assert task.start == pytest.approx(start)


def test_moves_are_computed_from_the_press_snapshot(machine, single_task):
    machine.pointer_down(1, EditMode.MOVE, px(11.0), TRACK)
    machine.pointer_move(px(12.0), TRACK)
    machine.pointer_move(px(12.0), TRACK)
    assert single_task.get(1).start == pytest.approx(11.0)


def test_second_pointer_down_is_ignored(machine):
    assert machine.pointer_down(1, EditMode.MOVE, 0.0, TRACK)
    assert not machine.pointer_down(1, EditMode.RESIZE_LEFT, 0.0, TRACK)
    assert machine.session.mode is EditMode.MOVE


def test_pointer_down_on_missing_task(machine):
    assert not machine.pointer_down(42, EditMode.MOVE, 0.0, TRACK)
    assert not machine.is_dragging


def test_task_deleted_mid_drag_invalidates_session(machine, single_task):
    machine.pointer_down(1, EditMode.MOVE, px(11.0), TRACK)
    single_task.remove_task(1)
    assert machine.pointer_move(px(13.0), TRACK) is None
    assert not machine.is_dragging
    assert len(single_task) == 0


def test_move_without_session_is_noop(machine, single_task):
    assert machine.pointer_move(px(5.0), TRACK) is None
    assert single_task.get(1).start == 10.0


def test_pointer_up_returns_session(machine):
    machine.pointer_down(1, EditMode.RESIZE_RIGHT, px(12.0), TRACK)
    session = machine.pointer_up()
    assert session.task_id == 1
    assert session.original_start == 10.0
    assert machine.pointer_up() is None


def test_cancel_keeps_applied_moves(machine, single_task):
    machine.pointer_down(1, EditMode.MOVE, px(11.0), TRACK)
    machine.pointer_move(px(12.0), TRACK)
    machine.cancel()
    assert not machine.is_dragging
    assert single_task.get(1).start == pytest.approx(11.0)
