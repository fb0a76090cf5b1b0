import asyncio
import logging

from taskclient.api import TaskAPI
from taskclient.board import PRIORITY_OPTIONS, STATUS_OPTIONS, TaskBoard
from taskclient.config import API_BASE_URL, LOG_LEVEL
from taskmanager.core.logging_setup import setup_logging

logger = logging.getLogger(__name__)

HELP = "Commands: add | edit <id> | delete <id> | refresh | help | quit"


def _ask(prompt: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    answer = input(f"{prompt}{suffix}: ").strip()
    return answer or default


def _confirm(message: str) -> bool:
    return input(f"{message} [y/N] ").strip().lower() in ("y", "yes")


def _fill_form(set_field, form, title_label: str) -> None:
    set_field("title", _ask(title_label, form.title))
    set_field("description", _ask("Description", form.description))
    set_field("status", _ask("Status (" + "/".join(STATUS_OPTIONS) + ")", form.status))
    set_field("priority", _ask("Priority (" + "/".join(PRIORITY_OPTIONS) + ")", form.priority))


def _parse_id(args: list) -> int:
    if len(args) != 1 or not args[0].isdigit():
        raise ValueError("expected a numeric task id")
    return int(args[0])


async def run_console(board: TaskBoard) -> None:
    await board.mount()
    print(board.render())
    print(HELP)

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue
        command, *args = line.split()
        command = command.lower()

        if command in ("quit", "exit"):
            break
        if command == "help":
            print(HELP)
            continue

        try:
            if command == "add":
                _fill_form(board.set_field, board.form, "Task Title")
                await board.submit_create()
            elif command == "edit":
                task = board.find_task(_parse_id(args))
                if task is None:
                    print("No such task.")
                    continue
                board.start_edit(task)
                print(board.render())
                _fill_form(board.set_edit_field, board.edit_form, "Title")
                if _confirm("Save changes?"):
                    await board.save_edit()
                else:
                    board.cancel_edit()
            elif command == "delete":
                await board.delete(_parse_id(args))
            elif command == "refresh":
                await board.refresh()
            else:
                print(f"Unknown command: {command}. {HELP}")
                continue
        except ValueError as e:
            print(f"Invalid input: {e}")
            continue

        print(board.render())


async def main() -> None:
    setup_logging(LOG_LEVEL)
    logger.info("Using API at %s", API_BASE_URL)
    async with TaskAPI() as api:
        await run_console(TaskBoard(api, confirm=_confirm))


if __name__ == "__main__":
    asyncio.run(main())
