"""Command line entry point for lessonhub using argparse."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, List, Optional, Sequence

from lessonhub.exceptions import ClientInputError, StorageConnectionError


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    from lessonhub.server.app import create_app
    from lessonhub.server.config import Settings

    config = Settings.from_env()
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        lifespan="on",
        log_config=None,
    )


async def _seed(lessons: List[Any]) -> int:
    from lessonhub.server.config import Settings
    from lessonhub.server.db import close_storage, init_storage
    from lessonhub.server.repository import LessonRepository

    storage = await init_storage(Settings.from_env())
    inserted = 0
    try:
        repo = LessonRepository(storage.lessons)
        for i, entry in enumerate(lessons):
            if not isinstance(entry, dict):
                print(f"Skipping entry {i}: not an object", file=sys.stderr)
                continue
            try:
                lesson_id = await repo.insert(entry)
            except ClientInputError as exc:
                print(f"Skipping entry {i}: {exc.message}", file=sys.stderr)
                continue
            print(lesson_id)
            inserted += 1
    finally:
        await close_storage(storage)
    return inserted


def cmd_seed(args: argparse.Namespace) -> None:
    with open(args.file, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        print("Error: seed file must contain a JSON array of lessons", file=sys.stderr)
        sys.exit(1)

    try:
        count = asyncio.run(_seed(data))
    except StorageConnectionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Inserted {count} lessons from {args.file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lessonhub",
        description="lessonhub — lessons and orders backend",
    )
    sub = parser.add_subparsers(dest="command")

    # serve
    p = sub.add_parser("serve", help="Run the API server")
    p.add_argument("--host", default=None, help="Bind address (or HOST)")
    p.add_argument("--port", type=int, default=None, help="Listening port (or PORT)")

    # seed
    p = sub.add_parser("seed", help="Insert lessons from a JSON file")
    p.add_argument("file", help="JSON array of lesson objects")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    handlers = {
        "serve": cmd_serve,
        "seed": cmd_seed,
    }
    handlers[args.command](args)


if __name__ == "__main__":
    main()
