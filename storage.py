"""Key-value storage backends and the TOML encoding of lists stored in them."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Protocol

import tomli_w

import settings
from data import Task, TaskList, new_list_id
from errors import PersistenceDecodeError

logger = logging.getLogger(__name__)


class PersistenceStore(Protocol):
    """Durable key-value storage. Every set() replaces the whole value."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, bytes] | None = None):
        self.values: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self.values.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.values[key] = bytes(value)

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class DirectoryStorage:
    """Keeps one ``<key>.toml`` file per key inside a directory."""

    def __init__(self, path: str | Path = settings.DATA_DIR):
        self.path = Path(path)

    def _file(self, key: str) -> Path:
        return self.path / f"{key}.toml"

    def get(self, key: str) -> bytes | None:
        target = self._file(key)
        if not target.exists():
            return None
        return target.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        target = self._file(key)
        tmp = target.with_suffix(".tmp")
        try:
            tmp.write_bytes(value)
            os.replace(tmp, target)
        finally:
            tmp.unlink(missing_ok=True)
        logger.debug("Wrote %d bytes to %s", len(value), target)

    def delete(self, key: str) -> None:
        self._file(key).unlink(missing_ok=True)


# ------------------------------------------------------------------ #
# Encoding                                                             #
# ------------------------------------------------------------------ #

def _list_to_record(task_list: TaskList) -> dict:
    return {
        "id": task_list.id,
        "name": task_list.name,
        "tasks": [
            {"name": task.name, "is_completed": task.is_completed}
            for task in task_list.tasks
        ],
    }


def _record_to_list(record: Any, key: str) -> TaskList:
    if not isinstance(record, dict):
        raise PersistenceDecodeError(key, "list record is not a table")
    name = record.get("name")
    if not isinstance(name, str):
        raise PersistenceDecodeError(key, "list name missing or not a string")
    list_id = record.get("id")
    if list_id is None:
        # Records written before lists had ids.
        list_id = new_list_id()
    elif not isinstance(list_id, str) or not list_id:
        raise PersistenceDecodeError(key, "list id is not a string")

    raw_tasks = record.get("tasks", [])
    if not isinstance(raw_tasks, list):
        raise PersistenceDecodeError(key, "tasks is not an array")
    tasks = []
    for raw in raw_tasks:
        if not isinstance(raw, dict):
            raise PersistenceDecodeError(key, "task record is not a table")
        task_name = raw.get("name")
        completed = raw.get("is_completed", False)
        if not isinstance(task_name, str) or not isinstance(completed, bool):
            raise PersistenceDecodeError(key, "task has a malformed name or flag")
        tasks.append(Task(name=task_name, is_completed=completed))
    return TaskList(name=name, tasks=tasks, id=list_id)


def _parse(data: bytes, key: str) -> dict:
    try:
        return tomllib.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise PersistenceDecodeError(key, str(exc)) from exc


def encode_lists(lists: list[TaskList]) -> bytes:
    raw = {"lists": [_list_to_record(lst) for lst in lists]}
    return tomli_w.dumps(raw).encode("utf-8")


def decode_lists(data: bytes) -> list[TaskList]:
    key = settings.TASK_LISTS_KEY
    raw = _parse(data, key)
    records = raw.get("lists", [])
    if not isinstance(records, list):
        raise PersistenceDecodeError(key, "lists is not an array")
    return [_record_to_list(record, key) for record in records]


def encode_list(task_list: TaskList) -> bytes:
    return tomli_w.dumps(_list_to_record(task_list)).encode("utf-8")


def decode_list(data: bytes) -> TaskList:
    key = settings.CURRENT_LIST_KEY
    return _record_to_list(_parse(data, key), key)


def encode_index(index: int) -> bytes:
    return tomli_w.dumps({"index": int(index)}).encode("utf-8")


def decode_index(data: bytes) -> int:
    key = settings.LAST_SELECTED_INDEX_KEY
    value = _parse(data, key).get("index")
    # bool is an int subclass; a stored flag is not an index.
    if not isinstance(value, int) or isinstance(value, bool):
        raise PersistenceDecodeError(key, "index missing or not an integer")
    return value
