"""Tests for the Category and Task models."""

from __future__ import annotations

from datetime import date, timedelta
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from todolist_cli.models.core import Category, Task
from todolist_cli.utils.uuid_utils import is_valid_id


class TestCategory:
    def test_generated_id(self):
        category = Category(name="Work")
        assert category.id.startswith("CAT-")
        assert is_valid_id(category.id)

    def test_ids_are_unique(self):
        assert Category(name="A").id != Category(name="A").id

    def test_default_color(self):
        assert Category(name="Work").color == "BLACK"

    def test_equality_by_id_only(self):
        category = Category(name="Work", color="BLUE")
        same = Category(id=category.id, name="Renamed", color="RED")
        assert category == same
        assert hash(category) == hash(same)

    def test_same_name_different_id_not_equal(self):
        assert Category(name="Work") != Category(name="Work")

    def test_str_is_name(self):
        assert str(Category(name="Studies")) == "Studies"

    def test_name_and_color_mutable(self):
        category = Category(name="Work")
        category.name = "Job"
        category.color = "RED"
        assert (category.name, category.color) == ("Job", "RED")

    def test_id_is_immutable(self):
        category = Category(name="Work")
        with pytest.raises(ValidationError):
            category.id = "CAT-other"

    def test_usable_in_sets(self):
        category = Category(name="Work")
        copy = Category(id=category.id, name="Other")
        assert len({category, copy}) == 1


class TestTask:
    def test_defaults(self, work):
        task = Task(title="Write report", category=work)
        assert task.id.startswith("TASK-")
        assert task.description == ""
        assert task.due_date is None
        assert task.completed is False
        assert task.category is work

    def test_created_on_uses_current_date(self, work):
        with patch("todolist_cli.utils.dates.today", return_value=date(2026, 1, 2)):
            task = Task(title="T", category=work)
        assert task.created_on == date(2026, 1, 2)

    def test_created_on_is_immutable(self, work):
        task = Task(title="T", category=work)
        with pytest.raises(ValidationError):
            task.created_on = date(2000, 1, 1)

    def test_id_is_immutable(self, work):
        task = Task(title="T", category=work)
        with pytest.raises(ValidationError):
            task.id = "TASK-x"

    def test_category_is_required(self):
        with pytest.raises(ValidationError):
            Task(title="Orphan")

    def test_equality_by_id(self, work, personal):
        task = Task(title="T", category=work)
        twin = Task(id=task.id, title="Other", category=personal)
        assert task == twin
        assert hash(task) == hash(twin)
        assert task != Task(title="T", category=work)

    def test_mark_as_completed_is_idempotent(self, work):
        task = Task(title="T", category=work)
        task.mark_as_completed()
        task.mark_as_completed()
        assert task.completed is True

    def test_mark_as_incomplete(self, work):
        task = Task(title="T", category=work, completed=True)
        task.mark_as_incomplete()
        assert task.completed is False
        task.mark_as_incomplete()
        assert task.completed is False

    def test_state_change_touches_nothing_else(self, work):
        due = date(2026, 11, 1)
        task = Task(title="T", description="d", due_date=due, category=work)
        task.mark_as_completed()
        assert (task.title, task.description, task.due_date, task.category) == (
            "T",
            "d",
            due,
            work,
        )

    def test_setters(self, work, personal):
        task = Task(title="T", category=work)
        task.title = "New"
        task.description = "Body"
        task.due_date = date(2026, 12, 24)
        task.category = personal
        assert task.title == "New"
        assert task.description == "Body"
        assert task.due_date == date(2026, 12, 24)
        assert task.category is personal


class TestOverdue:
    DAY = date(2026, 10, 19)

    def test_due_yesterday_is_overdue(self, work):
        task = Task(title="T", category=work, due_date=self.DAY - timedelta(days=1))
        assert task.is_overdue_on(self.DAY)

    def test_due_today_is_not_overdue(self, work):
        task = Task(title="T", category=work, due_date=self.DAY)
        assert not task.is_overdue_on(self.DAY)

    def test_no_due_date_is_never_overdue(self, work):
        assert not Task(title="T", category=work).is_overdue_on(self.DAY)

    def test_completed_is_never_overdue(self, work):
        task = Task(title="T", category=work, due_date=self.DAY - timedelta(days=5))
        task.mark_as_completed()
        assert not task.is_overdue_on(self.DAY)

    def test_property_uses_current_date(self, work):
        task = Task(title="T", category=work, due_date=self.DAY)
        with patch("todolist_cli.utils.dates.today", return_value=self.DAY):
            assert task.is_overdue is False
        with patch(
            "todolist_cli.utils.dates.today", return_value=self.DAY + timedelta(days=1)
        ):
            assert task.is_overdue is True
