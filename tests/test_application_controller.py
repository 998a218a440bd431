"""
Tests for ApplicationController: pointer routing, hooks, import/export and autosave.
"""
import json
import random

import pytest

from controllers import ApplicationController
from drag_edit import TrackGeometry
from enums import EditMode, GestureKind, PointerButton
from gestures import TaskHit
from serialization import DocumentFormatError
from session_store import SessionStore
from task_model import Task
from viewport import ViewportTransform

TRACK = TrackGeometry(left=0.0, width=960.0)


@pytest.fixture
def controller(qt_app):
    return ApplicationController(autosave=False, rng=random.Random(5))


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "session.json")


def saved_document(store):
    return json.loads(store.path.read_text())


def test_starts_empty_without_autosave(controller):
    assert controller.tasks == []
    assert controller.store is None
    assert controller.viewport.snapshot() == (1.0, 0.0, 0.0)


def test_hook_receives_every_task_change(controller):
    received = []
    controller.on_task_list_changed(received.append)
    task = controller.execute_command('add_task', template={"name": "Run", "start": 6})
    controller.execute_command('rename_task', task_id=task.id, name="Walk")
    assert [[t.name for t in tasks] for tasks in received] == [["Run"], ["Walk"]]


def test_edit_through_pointer_events(controller):
    task = controller.execute_command('add_task', template={"start": 10, "duration": 2})
    hit = TaskHit(task.id, EditMode.RESIZE_RIGHT)
    assert controller.handle_pointer_down(480.0, 0.0, PointerButton.PRIMARY, False, hit, TRACK) is GestureKind.EDITING
    controller.handle_pointer_move(560.0, 0.0, TRACK)
    assert controller.handle_pointer_up() is GestureKind.EDITING
    assert controller.task_list.get(task.id).duration == pytest.approx(4.0)


def test_pan_through_pointer_events_emits_view_changed(controller, qtbot):
    with qtbot.waitSignal(controller.view_ctrl.view_changed, timeout=1000):
        controller.handle_pointer_down(0.0, 0.0, PointerButton.MIDDLE, False, None, TRACK)
        controller.handle_pointer_move(25.0, -10.0, TRACK)
    controller.handle_pointer_up()
    assert controller.viewport.pan == (25.0, -10.0)


def test_wheel_zoom_emits_zoom_changed(controller, qtbot):
    with qtbot.waitSignal(controller.view_ctrl.zoom_changed, timeout=1000) as blocker:
        assert controller.handle_wheel(-120, True)
    assert blocker.args == [pytest.approx(1.1)]


def test_wheel_without_modifier_does_nothing(controller):
    assert not controller.handle_wheel(-120, False)
    assert controller.viewport.zoom == 1.0


def test_export_import_round_trip(controller):
    controller.execute_command('add_task', template={"name": "Deep work", "start": 9.5, "duration": 2.25, "color": "#aabbcc"})
    controller.viewport.set_zoom(1.75)
    controller.viewport.set_pan(10.0, -5.0)
    exported = controller.on_request_export()

    other = ApplicationController(autosave=False)
    tasks = other.on_request_import(exported)
    assert [(t.name, t.start, t.duration, t.color) for t in tasks] == [("Deep work", 9.5, 2.25, "#aabbcc")]
    assert other.viewport.snapshot() == (1.75, 10.0, -5.0)


def test_import_failure_leaves_state_unchanged(controller, qtbot):
    controller.execute_command('add_task', template={"name": "Keep"})
    controller.viewport.set_zoom(2.0)
    before = (controller.tasks, controller.viewport.snapshot())

    with qtbot.waitSignal(controller.export_ctrl.export_failed, timeout=1000):
        with pytest.raises(DocumentFormatError):
            controller.on_request_import(b'{"tasks": [{"id": "x"}]}')

    assert (controller.tasks, controller.viewport.snapshot()) == before


def test_import_cancels_active_drag(controller):
    task = controller.execute_command('add_task', template={"start": 10, "duration": 2})
    controller.handle_pointer_down(440.0, 0.0, PointerButton.PRIMARY, False, TaskHit(task.id, EditMode.MOVE), TRACK)
    controller.on_request_import(b"[]")
    assert controller.dispatcher.kind is GestureKind.NONE
    assert not controller.drag.is_dragging
    assert controller.tasks == []


def test_malformed_import_keeps_active_drag(controller):
    task = controller.execute_command('add_task', template={"start": 10, "duration": 2})
    controller.handle_pointer_down(440.0, 0.0, PointerButton.PRIMARY, False, TaskHit(task.id, EditMode.MOVE), TRACK)
    with pytest.raises(DocumentFormatError):
        controller.on_request_import(b"{oops")
    assert controller.dispatcher.kind is GestureKind.EDITING
    controller.handle_pointer_move(480.0, 0.0, TRACK)
    controller.handle_pointer_up()
    assert controller.task_list.get(task.id).start == pytest.approx(11.0)


def test_import_with_duplicate_ids_drags_the_right_row(controller):
    document = [
        {"id": 1, "name": "first", "start": 2, "duration": 1},
        {"id": 1, "name": "second", "start": 10, "duration": 1},
    ]
    tasks = controller.on_request_import(json.dumps(document).encode())
    assert tasks[0].id != tasks[1].id

    hit = TaskHit(tasks[1].id, EditMode.MOVE)
    controller.handle_pointer_down(420.0, 0.0, PointerButton.PRIMARY, False, hit, TRACK)
    controller.handle_pointer_move(460.0, 0.0, TRACK)
    controller.handle_pointer_up()
    assert [(t.name, t.start) for t in controller.tasks] == [("first", 2.0), ("second", pytest.approx(11.0))]


def test_import_then_add_never_reuses_ids(controller):
    far_future = 10 ** 15
    controller.on_request_import(json.dumps([{"id": far_future, "start": 1, "duration": 1}]).encode())
    assert controller.execute_command('add_task').id > far_future


def test_export_image_is_png(controller):
    controller.execute_command('add_task')
    assert controller.export_image().startswith(b"\x89PNG")


def test_file_export_and_import(controller, tmp_path, qtbot):
    controller.execute_command('add_task', template={"name": "File"})
    target = tmp_path / "out.json"
    with qtbot.waitSignal(controller.export_ctrl.export_complete, timeout=1000) as blocker:
        controller.export_document_to_file(target)
    assert blocker.args == [str(target)]

    other = ApplicationController(autosave=False)
    assert [t.name for t in other.import_document_from_file(target)] == ["File"]


def test_import_missing_file_raises(controller, tmp_path):
    with pytest.raises(OSError):
        controller.import_document_from_file(tmp_path / "missing.json")


def test_execute_unknown_command(controller):
    with pytest.raises(KeyError):
        controller.execute_command('explode')


# Autosave
# --------

def test_task_changes_are_autosaved(qt_app, store):
    controller = ApplicationController(store=store, autosave=True)
    controller.execute_command('add_task', template={"name": "Saved"})
    assert [t["name"] for t in saved_document(store)["tasks"]] == ["Saved"]


def test_drag_is_saved_once_at_release(qt_app, store, monkeypatch):
    controller = ApplicationController(store=store, autosave=True)
    task = controller.execute_command('add_task', template={"start": 10, "duration": 2})

    saves = []
    original_save = store.save
    monkeypatch.setattr(store, "save", lambda tasks, viewport: (saves.append(1), original_save(tasks, viewport)))

    controller.handle_pointer_down(440.0, 0.0, PointerButton.PRIMARY, False, TaskHit(task.id, EditMode.MOVE), TRACK)
    for x in (460.0, 480.0, 520.0):
        controller.handle_pointer_move(x, 0.0, TRACK)
    assert saves == []
    controller.handle_pointer_up()
    assert saves == [1]
    assert saved_document(store)["tasks"][0]["start"] == pytest.approx(12.0)


def test_pan_is_saved_at_pan_end(qt_app, store):
    controller = ApplicationController(store=store, autosave=True)
    controller.handle_pointer_down(0.0, 0.0, PointerButton.PRIMARY, True, None, TRACK)
    controller.handle_pointer_move(30.0, 15.0, TRACK)
    assert not store.path.exists()
    controller.handle_pointer_up()
    assert saved_document(store)["panOffset"] == {"x": 30.0, "y": 15.0}


def test_zoom_buttons_are_saved(qt_app, store):
    controller = ApplicationController(store=store, autosave=True)
    controller.execute_command('zoom_in')
    assert saved_document(store)["zoomLevel"] == pytest.approx(1.25)


def test_state_restored_from_autosave(qt_app, store):
    store.save(
        [Task(id=7, name="Restored", start=3.0, duration=1.0, color="#123456")],
        ViewportTransform(zoom=0.5, pan_x=-20.0, pan_y=0.0),
    )
    controller = ApplicationController(store=store, autosave=True)
    assert [t.name for t in controller.tasks] == ["Restored"]
    assert controller.viewport.snapshot() == (0.5, -20.0, 0.0)
    assert controller.execute_command('add_task').id > 7


def test_autosave_write_failure_is_not_fatal(qt_app, store, monkeypatch):
    controller = ApplicationController(store=store, autosave=True)

    def fail(tasks, viewport):
        raise OSError("disk full")

    monkeypatch.setattr(store, "save", fail)
    controller.execute_command('add_task')
    assert len(controller.tasks) == 1
    assert controller.save_session() is False


def test_disabled_autosave_ignores_store(qt_app, store):
    controller = ApplicationController(store=store, autosave=False)
    controller.execute_command('add_task')
    assert controller.save_session() is False
    assert not store.path.exists()


def test_delete_during_drag_is_saved(qt_app, store):
    controller = ApplicationController(store=store, autosave=True)
    first = controller.execute_command('add_task', template={"name": "A", "start": 10, "duration": 2})
    controller.execute_command('add_task', template={"name": "B", "start": 14, "duration": 1})

    controller.handle_pointer_down(440.0, 0.0, PointerButton.PRIMARY, False, TaskHit(first.id, EditMode.MOVE), TRACK)
    controller.execute_command('remove_task', task_id=first.id)
    assert [t["name"] for t in saved_document(store)["tasks"]] == ["B"]

    controller.handle_pointer_move(480.0, 0.0, TRACK)
    assert controller.handle_pointer_up() is GestureKind.NONE
    assert [t.name for t in controller.tasks] == ["B"]
    assert [t["name"] for t in saved_document(store)["tasks"]] == ["B"]


def test_rename_during_drag_is_saved_immediately(qt_app, store):
    controller = ApplicationController(store=store, autosave=True)
    task = controller.execute_command('add_task', template={"name": "A", "start": 10, "duration": 2})
    controller.handle_pointer_down(440.0, 0.0, PointerButton.PRIMARY, False, TaskHit(task.id, EditMode.MOVE), TRACK)
    controller.execute_command('rename_task', task_id=task.id, name="Renamed")
    assert saved_document(store)["tasks"][0]["name"] == "Renamed"
    controller.handle_pointer_cancel()
