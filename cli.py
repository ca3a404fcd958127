"""CLI entry point: send one message as a sender and print the reply."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from app import build_orchestrator
from config import setup_cli_logging
from core import MemoryStore
from models import InboundMessage, PointOfInterest
from utils import is_next_command


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ask George from the command line")
    parser.add_argument("message", nargs="+", help="Message text, e.g. 150 Park Ave, Manhattan")
    parser.add_argument("--from", dest="sender", default="+10000000000",
                        help="Sender phone number")
    parser.add_argument("--memory", action="store_true",
                        help="Use an in-process store instead of Redis")
    parser.add_argument("--points", type=Path,
                        help="JSON file of points to load into the in-process store")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    args = parser.parse_args(argv)

    if args.points and not args.memory:
        parser.error("--points requires --memory")
    # A fresh in-process store has no search to page through
    if args.memory and is_next_command(" ".join(args.message)):
        parser.error("'next' needs a previous search; use Redis or send an address")
    return args


async def load_points(store: MemoryStore, path: Path) -> int:
    records = json.loads(path.read_text(encoding="utf-8"))
    for record in records:
        record.setdefault("distance", 0.0)
        await store.add_point(PointOfInterest.model_validate(record))
    return len(records)


async def run(args: argparse.Namespace) -> str:
    store = None
    if args.memory:
        store = MemoryStore()
        if args.points:
            await load_points(store, args.points)

    orchestrator = build_orchestrator(store=store)
    try:
        message = InboundMessage(Body=" ".join(args.message), From=args.sender)
        # A fresh in-process store always sees a new sender; say hello first
        if args.memory:
            await orchestrator.handle_message(InboundMessage(Body="hi", From=args.sender))
        return await orchestrator.handle_message(message)
    finally:
        await orchestrator.drain()
        await orchestrator.geocoder.aclose()
        await orchestrator.store.close()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_cli_logging(logging.INFO if args.verbose else logging.WARNING)
    print(asyncio.run(run(args)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
