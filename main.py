"""Entry point for the shoplist command-line front end."""

import argparse
import logging
import sys
from pathlib import Path

import settings
from data import CompletionStatus, TaskList
from errors import ShoplistError
from list_store import ListStore
from storage import DirectoryStorage

logger = logging.getLogger(__name__)

_STATUS_MARKS = {
    CompletionStatus.EMPTY: " ",
    CompletionStatus.NONE_DONE: "!",
    CompletionStatus.PARTIAL: "~",
    CompletionStatus.ALL_DONE: "*",
}


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shoplist", description="Shopping list tracker")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--data-dir", type=Path, default=None,
        help=f"Storage directory (default: {settings.DATA_DIR})",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("lists", help="Show all lists")
    p = sub.add_parser("new", help="Create a list")
    p.add_argument("name")
    p = sub.add_parser("use", help="Select the list at INDEX")
    p.add_argument("index", type=int)
    p = sub.add_parser("rename-list", help="Rename the list at INDEX")
    p.add_argument("index", type=int)
    p.add_argument("name")
    p = sub.add_parser("delete-list", help="Delete the list at INDEX")
    p.add_argument("index", type=int)

    sub.add_parser("show", help="Show the current list")
    p = sub.add_parser("add", help="Add a task to the current list")
    p.add_argument("name")
    for command, help_text in (
        ("done", "Mark task INDEX complete"),
        ("undone", "Mark task INDEX incomplete"),
        ("toggle", "Flip completion of task INDEX"),
        ("remove", "Delete task INDEX"),
    ):
        p = sub.add_parser(command, help=help_text)
        p.add_argument("index", type=int)
    p = sub.add_parser("rename", help="Rename task INDEX")
    p.add_argument("index", type=int)
    p.add_argument("name")
    return parser


def format_lists(store: ListStore) -> str:
    current = store.current_list
    lines = []
    for i, lst in enumerate(store.lists):
        marker = ">" if current is not None and lst.id == current.id else " "
        lines.append(f"{marker} {i}: {lst.name} ({lst.summary().text})")
    return "\n".join(lines)


def format_list(task_list: TaskList) -> str:
    mark = _STATUS_MARKS[task_list.summary().status]
    lines = [f"[{mark}] {task_list.title()}"]
    for i, task in enumerate(task_list.tasks):
        check = "x" if task.is_completed else " "
        lines.append(f"  {i}: [{check}] {task.name}")
    return "\n".join(lines)


def run(args: argparse.Namespace, store: ListStore) -> str:
    """Apply one parsed command to a loaded store and return what to print."""
    command = args.command
    if command == "lists":
        return format_lists(store)
    if command == "new":
        created = store.create_list(args.name)
        return f"Created list {created.name!r}"
    if command == "use":
        selected = store.select_index(args.index)
        return format_list(selected)
    if command == "rename-list":
        renamed = store.rename_list(store.list_at(args.index), args.name)
        return f"Renamed list to {renamed.name!r}"
    if command == "delete-list":
        removed = store.delete_list(args.index)
        return f"Deleted list {removed.name!r}"

    # Everything below works on the current list; fall back like the app did.
    current = store.current_or_default()
    if command == "show":
        return format_list(current)
    if command == "add":
        store.add_task(args.name)
    elif command == "done":
        store.set_task_completion(args.index, True)
    elif command == "undone":
        store.set_task_completion(args.index, False)
    elif command == "toggle":
        store.toggle_task(args.index)
    elif command == "remove":
        store.remove_task(args.index)
    elif command == "rename":
        store.rename_task(args.index, args.name)
    return format_list(store.current_list)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    store = ListStore(DirectoryStorage(args.data_dir or settings.DATA_DIR))
    store.load()

    try:
        output = run(args, store)
    except (ShoplistError, IndexError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
