"""In-memory data model for the shopping list app."""

import uuid
from dataclasses import dataclass, field
from enum import Enum

import settings
from errors import ValidationError


def new_list_id() -> str:
    return uuid.uuid4().hex


def validate_list_name(name: str) -> str:
    name = name or ""
    if not name.strip():
        raise ValidationError("List name must not be empty")
    return name


def validate_task_name(name: str, max_length: int | None = None) -> str:
    """Return ``name`` unchanged if it is usable as a task name.

    The length limit applies to the name exactly as typed.
    """
    if max_length is None:
        max_length = settings.MAX_TASK_NAME_LENGTH
    name = name or ""
    if not name.strip():
        raise ValidationError("Task name must not be empty")
    if len(name) > max_length:
        raise ValidationError(
            f"Task name is {len(name)} characters, the limit is {max_length}"
        )
    return name


class CompletionStatus(Enum):
    EMPTY = "empty"
    NONE_DONE = "none_done"
    PARTIAL = "partial"
    ALL_DONE = "all_done"


@dataclass(frozen=True)
class CompletionSummary:
    total: int
    completed: int

    @property
    def status(self) -> CompletionStatus:
        if self.total == 0:
            return CompletionStatus.EMPTY
        if self.completed == 0:
            return CompletionStatus.NONE_DONE
        if self.completed == self.total:
            return CompletionStatus.ALL_DONE
        return CompletionStatus.PARTIAL

    @property
    def text(self) -> str:
        return f"{self.completed}/{self.total} complete"


@dataclass
class Task:
    name: str
    is_completed: bool = False


@dataclass
class TaskList:
    name: str
    tasks: list[Task] = field(default_factory=list)
    id: str = field(default_factory=new_list_id)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.tasks):
            raise IndexError(
                f"Task index {index} out of range for {len(self.tasks)} tasks"
            )

    def add_task(self, name: str, max_length: int | None = None) -> Task:
        """Create an incomplete task and put it at the top of the list."""
        task = Task(name=validate_task_name(name, max_length))
        self.tasks.insert(0, task)
        return task

    def remove_task(self, index: int) -> Task:
        self._check_index(index)
        return self.tasks.pop(index)

    def set_task_completion(self, index: int, value: bool) -> Task:
        self._check_index(index)
        task = self.tasks[index]
        task.is_completed = bool(value)
        return task

    def toggle_task(self, index: int) -> Task:
        self._check_index(index)
        return self.set_task_completion(index, not self.tasks[index].is_completed)

    def rename_task(self, index: int, new_name: str, max_length: int | None = None) -> Task:
        # Validate before the index so a bad name never half-applies.
        new_name = validate_task_name(new_name, max_length)
        self._check_index(index)
        task = self.tasks[index]
        task.name = new_name
        return task

    def rename(self, new_name: str) -> None:
        self.name = validate_list_name(new_name)

    @property
    def completed_count(self) -> int:
        return sum(1 for task in self.tasks if task.is_completed)

    def summary(self) -> CompletionSummary:
        return CompletionSummary(total=len(self.tasks), completed=self.completed_count)

    def title(self) -> str:
        """Header text shown above the list, e.g. ``Groceries: 1/3``."""
        return f"{self.name}: {self.completed_count}/{len(self.tasks)}"
