"""Tests for TaskListController."""

import json
import logging

import pytest

from sltodo.exceptions import StorageError
from sltodo.models import EditTarget, Task, TaskFilter, dump_tasks, load_tasks
from sltodo.repositories import MemoryStorage
from sltodo.services import TaskListController


def texts(controller: TaskListController) -> list[str]:
    return [task.text for task in controller.tasks]


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail."""

    def save(self, key: str, value: str) -> None:
        raise StorageError("disk full")


class TestLoad:
    """Tests for loading the task list at startup."""

    def test_starts_empty_without_saved_data(self, controller: TaskListController):
        assert controller.tasks == []

    def test_loads_saved_tasks(self, abc_controller: TaskListController):
        assert texts(abc_controller) == ["A", "B", "C"]
        assert abc_controller.tasks[1].completed is True

    def test_malformed_data_starts_empty(self, caplog):
        """Unreadable saved data is discarded with a warning, not an error."""
        storage = MemoryStorage({"tasks": "{not json"})

        with caplog.at_level(logging.WARNING, logger="sltodo"):
            controller = TaskListController(storage)

        assert controller.tasks == []
        assert "unreadable" in caplog.text.lower()

    def test_custom_key(self):
        storage = MemoryStorage({"work": dump_tasks([Task(text="W")])})
        controller = TaskListController(storage, key="work")
        assert texts(controller) == ["W"]

    def test_initial_state(self, controller: TaskListController):
        assert controller.draft_text == ""
        assert controller.edit_mode is False
        assert controller.edit_target is None
        assert controller.active_filter is TaskFilter.ALL

    def test_initial_filter(self, storage: MemoryStorage):
        controller = TaskListController(storage, active_filter=TaskFilter.INCOMPLETE)
        assert controller.active_filter is TaskFilter.INCOMPLETE


class TestAdd:
    """Tests for adding tasks."""

    def test_add_appends_trimmed_incomplete_task(self, controller: TaskListController):
        task = controller.add("  Buy milk  ")

        assert task == Task(text="Buy milk", completed=False)
        last = controller.visible_tasks(TaskFilter.ALL)[-1].task
        assert last.text == "Buy milk"
        assert last.completed is False

    def test_add_uses_draft(self, controller: TaskListController):
        controller.set_draft("From draft")
        controller.add()

        assert texts(controller) == ["From draft"]
        assert controller.draft_text == ""

    def test_add_clears_draft(self, controller: TaskListController):
        controller.set_draft("typing")
        controller.add("Explicit")
        assert controller.draft_text == ""

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_add_is_noop(self, controller: TaskListController, storage: MemoryStorage, text):
        assert controller.add(text) is None
        assert controller.tasks == []
        assert storage.load("tasks") is None

    def test_blank_add_keeps_draft(self, controller: TaskListController):
        controller.set_draft("   ")
        controller.add()
        assert controller.draft_text == "   "

    def test_duplicates_allowed(self, controller: TaskListController):
        controller.add("Same")
        controller.add("Same")
        assert texts(controller) == ["Same", "Same"]

    def test_add_saves_full_list(self, controller: TaskListController, storage: MemoryStorage):
        controller.add("A")
        controller.add("B")

        assert json.loads(storage.load("tasks")) == [
            {"text": "A", "completed": False},
            {"text": "B", "completed": False},
        ]

    def test_copy_on_write(self, controller: TaskListController):
        """Mutations replace the list; earlier snapshots are unaffected."""
        controller.add("A")
        snapshot = controller.tasks
        controller.add("B")
        controller.toggle_complete(0)

        assert snapshot == [Task(text="A")]


class TestDelete:
    """Tests for deleting tasks."""

    def test_delete_shifts_indices(self, abc_controller: TaskListController):
        assert abc_controller.delete(1) is True
        assert texts(abc_controller) == ["A", "C"]

        assert abc_controller.delete(1) is True
        assert texts(abc_controller) == ["A"]

    def test_delete_saves(self, abc_controller: TaskListController, storage: MemoryStorage):
        abc_controller.delete(0)
        assert [t.text for t in load_tasks(storage.load("tasks"))] == ["B", "C"]

    @pytest.mark.parametrize("index", [-1, 3, 99])
    def test_out_of_range_is_noop(self, abc_controller: TaskListController, index: int):
        """Bad indices never remove another task (no negative indexing)."""
        assert abc_controller.delete(index) is False
        assert texts(abc_controller) == ["A", "B", "C"]

    def test_delete_edited_task_ends_edit(self, abc_controller: TaskListController):
        abc_controller.begin_edit(1)
        abc_controller.delete(1)

        assert abc_controller.edit_mode is False
        assert abc_controller.draft_text == ""

    def test_delete_before_edited_task_follows_it(self, abc_controller: TaskListController):
        abc_controller.begin_edit(2)
        abc_controller.delete(0)

        assert abc_controller.edit_target == EditTarget(original_text="C", index=1)
        abc_controller.save_edit("C2")
        assert texts(abc_controller) == ["B", "C2"]

    def test_delete_after_edited_task_keeps_target(self, abc_controller: TaskListController):
        abc_controller.begin_edit(0)
        abc_controller.delete(2)
        assert abc_controller.edit_target == EditTarget(original_text="A", index=0)


class TestToggle:
    """Tests for toggling completion."""

    def test_toggle_flips_only_target(self, abc_controller: TaskListController):
        before = abc_controller.tasks
        abc_controller.toggle_complete(0)
        after = abc_controller.tasks

        assert after[0] == Task(text="A", completed=True)
        assert after[1:] == before[1:]

    def test_toggle_is_involutive(self, abc_controller: TaskListController):
        for index in range(3):
            original = abc_controller.tasks[index]
            abc_controller.toggle_complete(index)
            abc_controller.toggle_complete(index)
            assert abc_controller.tasks[index] == original

    def test_toggle_saves(self, abc_controller: TaskListController, storage: MemoryStorage):
        abc_controller.toggle_complete(2)
        assert load_tasks(storage.load("tasks"))[2].completed is True

    def test_out_of_range_is_noop(self, abc_controller: TaskListController):
        before = abc_controller.tasks
        assert abc_controller.toggle_complete(5) is False
        assert abc_controller.toggle_complete(-1) is False
        assert abc_controller.tasks == before


class TestEdit:
    """Tests for the edit mode state machine."""

    def test_begin_edit_loads_draft(self, abc_controller: TaskListController):
        assert abc_controller.begin_edit(1) is True

        assert abc_controller.edit_mode is True
        assert abc_controller.edit_target == EditTarget(original_text="B", index=1)
        assert abc_controller.draft_text == "B"

    def test_begin_edit_does_not_save(self, abc_controller: TaskListController, storage: MemoryStorage):
        before = storage.load("tasks")
        abc_controller.begin_edit(0)
        assert storage.load("tasks") == before

    def test_begin_edit_again_overwrites_target(self, abc_controller: TaskListController):
        abc_controller.begin_edit(0)
        abc_controller.begin_edit(2)

        assert abc_controller.edit_target == EditTarget(original_text="C", index=2)
        assert abc_controller.draft_text == "C"

    def test_begin_edit_out_of_range(self, abc_controller: TaskListController):
        assert abc_controller.begin_edit(3) is False
        assert abc_controller.edit_mode is False

    def test_edit_round_trip(self, abc_controller: TaskListController):
        before = abc_controller.tasks
        abc_controller.begin_edit(1)
        assert abc_controller.save_edit("B edited") is True

        after = abc_controller.tasks
        assert after[1] == Task(text="B edited", completed=True)
        assert after[0] == before[0]
        assert after[2] == before[2]
        assert abc_controller.edit_mode is False
        assert abc_controller.edit_target is None
        assert abc_controller.draft_text == ""

    def test_save_edit_uses_draft(self, abc_controller: TaskListController):
        abc_controller.begin_edit(0)
        abc_controller.set_draft("A from input")
        abc_controller.save_edit()
        assert texts(abc_controller)[0] == "A from input"

    def test_save_edit_is_verbatim(self, abc_controller: TaskListController):
        """Edits are not trimmed or checked for emptiness."""
        abc_controller.begin_edit(0)
        abc_controller.save_edit("  padded  ")
        abc_controller.begin_edit(1)
        abc_controller.save_edit("")

        assert texts(abc_controller) == ["  padded  ", "", "C"]

    def test_save_edit_saves(self, abc_controller: TaskListController, storage: MemoryStorage):
        abc_controller.begin_edit(2)
        abc_controller.save_edit("Z")
        assert load_tasks(storage.load("tasks"))[2].text == "Z"

    def test_save_edit_outside_edit_mode(self, abc_controller: TaskListController):
        before = abc_controller.tasks
        assert abc_controller.save_edit("nope") is False
        assert abc_controller.tasks == before

    def test_cancel_edit(self, abc_controller: TaskListController, storage: MemoryStorage):
        before = storage.load("tasks")
        abc_controller.begin_edit(0)
        abc_controller.set_draft("changed")
        abc_controller.cancel_edit()

        assert abc_controller.edit_mode is False
        assert abc_controller.draft_text == ""
        assert texts(abc_controller) == ["A", "B", "C"]
        assert storage.load("tasks") == before


class TestSubmit:
    """Tests for submit(), the add/save button."""

    def test_submit_adds_when_idle(self, controller: TaskListController):
        assert controller.submit("New") is True
        assert texts(controller) == ["New"]

    def test_submit_blank_when_idle(self, controller: TaskListController):
        assert controller.submit("  ") is False

    def test_submit_saves_edit_when_editing(self, abc_controller: TaskListController):
        abc_controller.begin_edit(0)
        assert abc_controller.submit("A2") is True

        assert texts(abc_controller) == ["A2", "B", "C"]
        assert abc_controller.edit_mode is False


class TestClearAll:
    """Tests for clearing the list."""

    def test_clear_all_is_idempotent(self, abc_controller: TaskListController, storage: MemoryStorage):
        abc_controller.clear_all()
        assert abc_controller.tasks == []
        assert storage.load("tasks") == "[]"

        abc_controller.clear_all()
        assert abc_controller.tasks == []
        for filter_ in TaskFilter:
            assert abc_controller.visible_tasks(filter_) == []

    def test_clear_all_ends_edit(self, abc_controller: TaskListController):
        abc_controller.begin_edit(0)
        abc_controller.clear_all()
        assert abc_controller.edit_mode is False


class TestFilter:
    """Tests for filters and visible tasks."""

    def test_set_filter_does_not_save(self, abc_controller: TaskListController, storage: MemoryStorage):
        before = storage.load("tasks")
        abc_controller.set_filter(TaskFilter.COMPLETED)

        assert abc_controller.active_filter is TaskFilter.COMPLETED
        assert storage.load("tasks") == before

    def test_set_filter_from_string(self, abc_controller: TaskListController):
        abc_controller.set_filter("incomplete")
        assert abc_controller.active_filter is TaskFilter.INCOMPLETE

    @pytest.mark.parametrize("value", ["someday", None, "Done"])
    def test_set_filter_unknown_value_keeps_current(
        self, abc_controller: TaskListController, storage: MemoryStorage, value, caplog
    ):
        """Unknown filter values are logged and ignored."""
        abc_controller.set_filter(TaskFilter.COMPLETED)
        before = storage.load("tasks")
        calls: list[TaskListController] = []
        abc_controller.subscribe(calls.append)

        with caplog.at_level(logging.WARNING, logger="sltodo"):
            changed = abc_controller.set_filter(value)

        assert changed is False
        assert abc_controller.active_filter is TaskFilter.COMPLETED
        assert storage.load("tasks") == before
        assert calls == []
        assert "unknown filter" in caplog.text.lower()

    def test_set_filter_returns_true_when_applied(self, abc_controller: TaskListController):
        assert abc_controller.set_filter("completed") is True

    def test_visible_tasks_uses_active_filter(self, abc_controller: TaskListController):
        abc_controller.set_filter(TaskFilter.INCOMPLETE)
        assert [v.task.text for v in abc_controller.visible_tasks()] == ["A", "C"]

    def test_filters_partition_list(self, abc_controller: TaskListController):
        """Completed and incomplete views are disjoint and cover the list."""
        completed = abc_controller.visible_tasks(TaskFilter.COMPLETED)
        incomplete = abc_controller.visible_tasks(TaskFilter.INCOMPLETE)
        everything = abc_controller.visible_tasks(TaskFilter.ALL)

        completed_idx = {v.index for v in completed}
        incomplete_idx = {v.index for v in incomplete}
        assert completed_idx.isdisjoint(incomplete_idx)
        merged = sorted(completed + incomplete, key=lambda v: v.index)
        assert merged == everything

    def test_visible_indices_address_unfiltered_list(self, abc_controller: TaskListController):
        """Operations from a filtered view hit the right task."""
        abc_controller.set_filter(TaskFilter.INCOMPLETE)
        visible = abc_controller.visible_tasks()
        assert [(v.index, v.task.text) for v in visible] == [(0, "A"), (2, "C")]

        # Second visible row is "C" at list index 2, not "B" at index 1
        abc_controller.toggle_complete(visible[1].index)
        assert abc_controller.tasks[2].completed is True
        assert abc_controller.tasks[1] == Task(text="B", completed=True)

    def test_counts(self, abc_controller: TaskListController):
        assert abc_controller.counts() == (3, 1)


class TestScenario:
    """End-to-end controller scenario."""

    def test_buy_milk_walk_dog(self, controller: TaskListController):
        controller.add("Buy milk")
        controller.add("Walk dog")
        controller.toggle_complete(0)
        controller.set_filter(TaskFilter.COMPLETED)

        visible = controller.visible_tasks()
        assert len(visible) == 1
        assert visible[0].task == Task(text="Buy milk", completed=True)
        assert visible[0].index == 0

    def test_state_survives_restart(self, storage: MemoryStorage):
        first = TaskListController(storage)
        first.add("Buy milk")
        first.add("Walk dog")
        first.toggle_complete(1)

        second = TaskListController(storage)
        assert second.tasks == first.tasks


class TestSaveFailure:
    """Tests for storage write failures."""

    def test_state_kept_when_save_fails(self, caplog):
        controller = TaskListController(FailingStorage())

        with caplog.at_level(logging.WARNING, logger="sltodo"):
            task = controller.add("Kept in memory")

        assert task is not None
        assert texts(controller) == ["Kept in memory"]
        assert controller.last_save_error == "disk full"
        assert "not saved" in caplog.text

    def test_error_cleared_on_next_success(self):
        storage = FailingStorage()
        controller = TaskListController(storage)
        controller.add("A")
        assert controller.last_save_error is not None

        storage.save = MemoryStorage().save
        controller.add("B")
        assert controller.last_save_error is None


class TestListeners:
    """Tests for change notification."""

    def test_notified_on_changes(self, abc_controller: TaskListController):
        calls: list[TaskListController] = []
        abc_controller.subscribe(calls.append)

        abc_controller.add("D")
        abc_controller.toggle_complete(0)
        abc_controller.delete(0)
        abc_controller.begin_edit(0)
        abc_controller.save_edit("x")
        abc_controller.set_filter(TaskFilter.COMPLETED)
        abc_controller.clear_all()

        assert len(calls) == 7
        assert all(c is abc_controller for c in calls)

    def test_not_notified_on_queries_or_noops(self, abc_controller: TaskListController):
        calls: list[TaskListController] = []
        abc_controller.subscribe(calls.append)

        abc_controller.visible_tasks()
        abc_controller.counts()
        abc_controller.set_draft("typing")
        abc_controller.add("   ")
        abc_controller.delete(10)
        abc_controller.cancel_edit()

        assert calls == []

    def test_unsubscribe(self, controller: TaskListController):
        calls: list[TaskListController] = []
        controller.subscribe(calls.append)
        controller.unsubscribe(calls.append)
        controller.add("A")
        assert calls == []

    def test_subscribe_twice_notifies_once(self, controller: TaskListController):
        calls: list[TaskListController] = []
        controller.subscribe(calls.append)
        controller.subscribe(calls.append)
        controller.add("A")
        assert len(calls) == 1

    def test_failing_listener_does_not_break_operation(
        self, controller: TaskListController, storage: MemoryStorage, caplog
    ):
        """A listener error is logged; the change is saved and later listeners still run."""
        calls: list[TaskListController] = []

        def broken(_controller: TaskListController) -> None:
            raise RuntimeError("render failed")

        controller.subscribe(broken)
        controller.subscribe(calls.append)

        with caplog.at_level(logging.ERROR, logger="sltodo"):
            task = controller.add("Still added")

        assert task is not None
        assert texts(controller) == ["Still added"]
        assert load_tasks(storage.load("tasks")) == [Task(text="Still added")]
        assert calls == [controller]
        assert "listener" in caplog.text.lower()
        assert "render failed" in caplog.text

    def test_failing_listener_on_filter_change(self, abc_controller: TaskListController):
        def broken(_controller: TaskListController) -> None:
            raise RuntimeError("boom")

        abc_controller.subscribe(broken)
        assert abc_controller.set_filter(TaskFilter.INCOMPLETE) is True
        assert abc_controller.active_filter is TaskFilter.INCOMPLETE
