"""Tests for the task list engine."""

from dataclasses import replace
from unittest.mock import Mock

import pytest

from gutti.exceptions import IndexOutOfRange
from gutti.storage import Storage
from gutti.task import Deadline, Event, Todo
from gutti.task_list import TaskList


@pytest.fixture
def fake_storage():
    storage = Mock(spec=Storage)
    storage.save_tasks.return_value = True
    storage.path = "tasks.txt"
    return storage


@pytest.fixture
def task_list(fake_storage):
    return TaskList(
        [Todo("read book"), Deadline("return book", "Sunday"), Event("book club", "Mon 7pm", "Mon 9pm")],
        fake_storage,
    )


class TestAdd:
    """Test appending tasks."""

    def test_add_returns_count_and_flushes(self, fake_storage):
        task_list = TaskList(storage=fake_storage)

        assert task_list.add(Todo("buy milk")) == 1
        assert task_list.add(Todo("buy milk")) == 2

        assert list(task_list) == [Todo("buy milk"), Todo("buy milk")]
        assert fake_storage.save_tasks.call_count == 2

    def test_works_without_storage(self):
        task_list = TaskList()
        task_list.add(Todo("a"))
        assert len(task_list) == 1


class TestMarking:
    """Test mark and unmark by 1-based index."""

    def test_mark_done(self, task_list, fake_storage):
        task = task_list.mark_done(2)

        assert task is task_list.get(2)
        assert task.is_done
        fake_storage.save_tasks.assert_called_once()

    def test_mark_twice_is_same_as_once(self, task_list):
        task_list.mark_done(1)
        state_once = replace(task_list.get(1))
        task_list.mark_done(1)

        assert list(task_list)[0] == state_once

    def test_indexing_is_one_based(self, task_list):
        assert task_list[1] == Todo("read book")
        assert task_list[3] is task_list.get(3)
        with pytest.raises(IndexOutOfRange):
            task_list[0]

    def test_unmark(self, task_list):
        task_list.mark_done(3)
        assert task_list.unmark(3).is_done is False

    @pytest.mark.parametrize("index", [0, -1, 4, 100])
    def test_out_of_range(self, task_list, fake_storage, index):
        before = list(task_list)

        with pytest.raises(IndexOutOfRange) as exc_info:
            task_list.mark_done(index)

        assert exc_info.value.index == index
        assert exc_info.value.size == 3
        assert list(task_list) == before
        fake_storage.save_tasks.assert_not_called()


class TestDelete:
    """Test removal and index shifting."""

    def test_delete_shifts_later_tasks(self, task_list):
        first, _, third = list(task_list)

        removed = task_list.delete(2)

        assert removed == Deadline("return book", "Sunday")
        assert task_list.get(1) is first
        assert task_list.get(2) is third
        assert len(task_list) == 2

    def test_delete_out_of_range_leaves_list_alone(self, fake_storage):
        task_list = TaskList([Todo("a"), Todo("b")], fake_storage)

        with pytest.raises(IndexOutOfRange):
            task_list.delete(5)

        assert list(task_list) == [Todo("a"), Todo("b")]
        fake_storage.save_tasks.assert_not_called()


class TestQueries:
    """Test list and find."""

    def test_list_is_numbered_from_one(self, task_list):
        assert task_list.list() == [
            "1. [T][ ] read book",
            "2. [D][ ] return book (by: Sunday)",
            "3. [E][ ] book club (from: Mon 7pm to: Mon 9pm)",
        ]

    def test_list_does_not_flush(self, task_list, fake_storage):
        task_list.list()
        task_list.find("book")
        fake_storage.save_tasks.assert_not_called()

    def test_find_keeps_original_indexes(self, task_list):
        task_list.add(Todo("water plants"))
        task_list.add(Todo("lend book to Sam"))

        matches = task_list.find("book")

        assert [number for number, _ in matches] == [1, 2, 3, 5]

    def test_find_is_case_sensitive(self, task_list):
        assert task_list.find("Book") == []

    def test_find_returns_every_containing_task(self, task_list):
        keyword = "ook"
        found = [task for _, task in task_list.find(keyword)]
        expected = [task for task in task_list if keyword in task.description]
        assert found == expected


class TestPersistenceFailure:
    """A failed save is reported but not fatal."""

    def test_failed_save_keeps_memory_state(self, fake_storage):
        fake_storage.save_tasks.return_value = False
        task_list = TaskList(storage=fake_storage)

        task_list.add(Todo("a"))

        assert list(task_list) == [Todo("a")]
        warnings = task_list.drain_warnings()
        assert len(warnings) == 1
        assert "Error saving tasks" in warnings[0]
        assert task_list.drain_warnings() == []
