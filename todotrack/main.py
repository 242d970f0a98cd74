from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace

from todotrack.config import Settings, load_settings
from todotrack.domain.errors import ConfigError, TodoTrackError
from todotrack.infra.logging import console_muted, setup_logging
from todotrack.infra.repository import TaskListRepository
from todotrack.services.task_service import TaskService

logger = logging.getLogger(__name__)

RESERVED_FLAGS = ("report", "file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todotrack",
        description="Personal task list. Without -u or -g, appends TASK arguments and saves.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-u", dest="unicode", action="store_true", help="interactive view with Unicode glyphs")
    mode.add_argument("-g", dest="interactive", action="store_true", help="interactive view with ASCII glyphs")
    parser.add_argument("-r", dest="report", action="store_true", help="reserved, not implemented")
    parser.add_argument("-f", dest="file", metavar="FILE", help="reserved, not implemented")
    parser.add_argument("--config", metavar="PATH", help="config file (default: $TODOTRACK_CONFIG or ~/.config/todotrack/config)")
    parser.add_argument("--init", action="store_true", help="create an empty task list file and continue")
    parser.add_argument("tasks", nargs="*", metavar="TASK", help="task text to add")
    return parser


def _fail(message: str) -> int:
    logger.error(message)
    return 1


def run(args: argparse.Namespace, settings: Settings) -> int:
    interactive = args.unicode or args.interactive
    if args.unicode:
        settings = replace(settings, unicode_glyphs=True)
    setup_logging(settings)

    repo = TaskListRepository(settings.list_file)
    if args.init and not repo.path.exists():
        try:
            repo.create()
        except OSError as exc:
            return _fail(f"cannot create task list {repo.path}: {exc}")

    try:
        task_list = repo.load()
    except TodoTrackError as exc:
        return _fail(str(exc))

    service = TaskService(task_list)
    try:
        service.append_all(args.tasks)
    except ValueError as exc:
        return _fail(str(exc))
    if args.tasks:
        logger.info("Added %s tasks", len(args.tasks))

    if interactive:
        from todotrack.ui.terminal import run_interactive

        try:
            with console_muted():
                run_interactive(service, settings, repo.path)
        except KeyboardInterrupt:
            logger.info("Interrupted, saving.")

    try:
        repo.save(task_list)
    except (OSError, ValueError) as exc:
        return _fail(f"cannot save task list {repo.path}: {exc}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    for flag in RESERVED_FLAGS:
        if getattr(args, flag):
            parser.error(f"-{flag[0]} is reserved and not implemented")

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"todotrack: config error: {exc}", file=sys.stderr)
        return 1
    return run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
