"""ListStore: the lists, the current selection, and their persistence."""

import copy
import logging
from collections.abc import Callable
from typing import TypeVar

from PySide6.QtCore import QObject, Signal

import settings
from data import Task, TaskList, validate_list_name
from errors import ListNotFoundError, NoCurrentListError, PersistenceDecodeError
from storage import (
    PersistenceStore,
    decode_index, decode_list, decode_lists,
    encode_index, encode_list, encode_lists,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ListStore(QObject):
    """
    Single source of truth for all task lists.

    Every mutating call validates, applies, saves and only then emits
    ``changed``, so a connected view always re-renders from persisted state.
    Lists are looked up by their ``id``; names are display-only.
    """
    changed = Signal()

    def __init__(self, storage: PersistenceStore, parent=None):
        super().__init__(parent)
        self._storage = storage
        self.lists: list[TaskList] = []
        self._current_id: str | None = None
        self.last_selected_index: int = settings.NO_SELECTION

    # ------------------------------------------------------------------ #
    # Lookup                                                               #
    # ------------------------------------------------------------------ #

    @property
    def current_list(self) -> TaskList | None:
        """The selected list, or None if nothing is selected or it was deleted."""
        if self._current_id is None:
            return None
        index = self._position(self._current_id)
        return None if index < 0 else self.lists[index]

    def _position(self, list_id: str) -> int:
        for i, lst in enumerate(self.lists):
            if lst.id == list_id:
                return i
        return -1

    def _resolve(self, list_or_id: TaskList | str) -> TaskList:
        list_id = list_or_id.id if isinstance(list_or_id, TaskList) else list_or_id
        index = self._position(list_id)
        if index < 0:
            raise ListNotFoundError(list_id)
        return self.lists[index]

    def list_at(self, index: int) -> TaskList:
        if not 0 <= index < len(self.lists):
            raise IndexError(f"List index {index} out of range for {len(self.lists)} lists")
        return self.lists[index]

    # ------------------------------------------------------------------ #
    # Persistence                                                          #
    # ------------------------------------------------------------------ #

    def _read(self, key: str, decode: Callable[[bytes], T], default: T) -> T:
        data = self._storage.get(key)
        if data is None:
            return default
        try:
            return decode(data)
        except PersistenceDecodeError as exc:
            logger.warning("Ignoring stored %s: %s", key, exc.reason)
            return default

    def load(self) -> None:
        """Replace in-memory state with what storage holds.

        Missing or unreadable data never raises; it falls back to a fresh
        default list, which is saved straight away.
        """
        self.lists = self._read(settings.TASK_LISTS_KEY, decode_lists, [])
        stored_current = self._read(settings.CURRENT_LIST_KEY, decode_list, None)
        stored_index = self._read(
            settings.LAST_SELECTED_INDEX_KEY, decode_index, settings.NO_SELECTION
        )

        if not self.lists:
            default = TaskList(name=settings.DEFAULT_LIST_NAME)
            self.lists.append(default)
            self._current_id = default.id
            logger.info("No stored lists; created default list %r", default.name)
            self._commit()
            return

        current = None
        if stored_current is not None:
            index = self._position(stored_current.id)
            if index >= 0:
                current = self.lists[index]
        if current is None and 0 <= stored_index < len(self.lists):
            current = self.lists[stored_index]
        if current is None:
            current = self.lists[0]

        self._current_id = current.id
        self.last_selected_index = self._position(current.id)
        logger.info(
            "Loaded %d lists; current is %r at index %d",
            len(self.lists), current.name, self.last_selected_index,
        )
        self.changed.emit()

    def save(self) -> None:
        """Write the whole state out: lists, current list, selected index."""
        self._storage.set(settings.TASK_LISTS_KEY, encode_lists(self.lists))

        current = self.current_list
        if current is None:
            self._storage.delete(settings.CURRENT_LIST_KEY)
            self.last_selected_index = settings.NO_SELECTION
        else:
            self._storage.set(settings.CURRENT_LIST_KEY, encode_list(current))
            self.last_selected_index = self._position(current.id)

        self._storage.set(
            settings.LAST_SELECTED_INDEX_KEY, encode_index(self.last_selected_index)
        )
        logger.debug(
            "Saved %d lists, selected index %d", len(self.lists), self.last_selected_index
        )

    def _commit(self) -> None:
        self.save()
        self.changed.emit()

    # ------------------------------------------------------------------ #
    # List operations                                                      #
    # ------------------------------------------------------------------ #

    def create_list(self, name: str) -> TaskList:
        task_list = TaskList(name=validate_list_name(name))
        self.lists.insert(0, task_list)
        logger.debug("Created list %r (%s)", task_list.name, task_list.id)
        self._commit()
        return task_list

    def select_list(self, list_or_id: TaskList | str) -> TaskList:
        task_list = self._resolve(list_or_id)
        self._current_id = task_list.id
        logger.debug("Selected list %r", task_list.name)
        self._commit()
        return task_list

    def select_index(self, index: int) -> TaskList:
        return self.select_list(self.list_at(index))

    def rename_list(self, list_or_id: TaskList | str, new_name: str) -> TaskList:
        new_name = validate_list_name(new_name)
        task_list = self._resolve(list_or_id)
        old_name = task_list.name
        task_list.name = new_name
        logger.debug("Renamed list %r to %r", old_name, new_name)
        self._commit()
        return task_list

    def delete_list(self, index: int) -> TaskList:
        """Remove the list at ``index``.

        The selection is left alone: if the deleted list was current,
        ``current_list`` becomes None until the caller selects another one.
        """
        self.list_at(index)
        removed = self.lists.pop(index)
        logger.debug("Deleted list %r at index %d", removed.name, index)
        self._commit()
        return removed

    def current_or_default(self) -> TaskList:
        """The current list, falling back to the first list, then a new default one."""
        current = self.current_list
        if current is not None:
            return current
        if not self.lists:
            self.lists.append(TaskList(name=settings.DEFAULT_LIST_NAME))
            logger.info("No lists left; created default list")
        return self.select_list(self.lists[0])

    # ------------------------------------------------------------------ #
    # Task operations on the current list                                  #
    # ------------------------------------------------------------------ #

    def mutate_current_list_tasks(self, fn: Callable[[TaskList], T]) -> T:
        """Apply ``fn`` to the current list and persist the result.

        ``fn`` works on a copy whose tasks are moved into the live list only
        when it returns normally, so a failing edit leaves the store
        untouched. The live TaskList object keeps its identity.
        """
        current = self.current_list
        if current is None:
            raise NoCurrentListError()
        working = copy.deepcopy(current)
        result = fn(working)
        current.tasks = working.tasks
        current.name = working.name
        self._commit()
        return result

    def add_task(self, name: str) -> Task:
        return self.mutate_current_list_tasks(lambda lst: lst.add_task(name))

    def remove_task(self, index: int) -> Task:
        return self.mutate_current_list_tasks(lambda lst: lst.remove_task(index))

    def set_task_completion(self, index: int, value: bool) -> Task:
        return self.mutate_current_list_tasks(
            lambda lst: lst.set_task_completion(index, value)
        )

    def toggle_task(self, index: int) -> Task:
        return self.mutate_current_list_tasks(lambda lst: lst.toggle_task(index))

    def rename_task(self, index: int, new_name: str) -> Task:
        return self.mutate_current_list_tasks(lambda lst: lst.rename_task(index, new_name))
