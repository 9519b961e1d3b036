#!/usr/bin/env python3
"""
Interactive place picker.

Talks to a running Place Picker API and lets you build your
"places I'd like to visit" list from the terminal. Every add/remove
shows up immediately and is rolled back if the API rejects it.

Usage:
    python scripts/place_picker.py                       # Default API URL from settings
    python scripts/place_picker.py --base-url URL        # Custom API URL
    python scripts/place_picker.py --near 48.85 2.35     # Sort catalog by distance

Commands:
    list                 Show the catalog
    list near LAT LON    Show the catalog, nearest first
    selected             Show your places
    add ID               Add a place
    remove ID            Remove a place
    dismiss              Clear the last error
    quit                 Exit
"""

import argparse
import asyncio
import shlex
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from config import settings, configure_logging
from exceptions import AppError
from integrations.places_api import PlacesApiClient
from models.place import Place
from models.selection import SelectionCollection
from models.transaction import TransactionError
from services.place_picker_service import PlacePickerSession, ViewStatus


# ===================
# OUTPUT
# ===================

class Colors:
    """ANSI color codes."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"


def log_header(msg: str):
    print(f"\n{Colors.BOLD}{Colors.CYAN}{msg}{Colors.RESET}")


def log_success(msg: str):
    print(f"{Colors.GREEN}[OK] {msg}{Colors.RESET}")


def log_error(msg: str):
    print(f"{Colors.RED}[ERROR] {msg}{Colors.RESET}")


def print_places(title: str, places: list[Place]):
    log_header(title)
    if not places:
        print("   (none)")
        return
    for place in places:
        print(f"   {place.id:<6} {place.name}")


def render_selection(selection: SelectionCollection):
    print_places("Places I'd like to visit", list(selection.places))


def render_notification(error: Optional[TransactionError]):
    if error is not None:
        log_error(f"{error.message}  (type 'dismiss' to clear)")


# ===================
# REPL
# ===================

async def handle_command(session: PlacePickerSession, words: list[str]) -> bool:
    """Run one command. Returns False when the user wants to quit."""
    command, args = words[0].lower(), words[1:]

    if command in ("quit", "exit", "q"):
        return False

    if command == "list":
        if len(args) == 3 and args[0] == "near":
            lat, lon = float(args[1]), float(args[2])
            print_places("Available places (nearest first)", session.available_places(lat, lon))
        else:
            print_places("Available places", session.available_places())
    elif command == "selected":
        render_selection(session.selected_places)
    elif command == "add" and len(args) == 1:
        transaction = await session.select_place(args[0])
        if transaction.confirmation:
            log_success(transaction.confirmation)
    elif command == "remove" and len(args) == 1:
        transaction = await session.remove_place(args[0])
        if transaction.confirmation:
            log_success(transaction.confirmation)
    elif command == "dismiss":
        session.dismiss_error()
    else:
        print(__doc__.split("Commands:")[1])

    return True


async def handle_line(session: PlacePickerSession, line: str) -> bool:
    """Parse and run one input line, reporting bad input instead of raising."""
    try:
        words = shlex.split(line)
        if not words:
            return True
        return await handle_command(session, words)
    except AppError as e:
        log_error(e.message)
    except ValueError as e:
        log_error(f"Invalid input: {e}")
    return True


async def run(base_url: str, near: Optional[tuple[float, float]]) -> int:
    async with PlacesApiClient(base_url=base_url) as api:
        session = PlacePickerSession(catalog=api, remote=api)

        status = await session.load()
        if status == ViewStatus.ERROR:
            log_error(session.load_error)
            return 1

        session.store.subscribe(render_selection)
        session.notifications.subscribe(render_notification)

        if near:
            print_places("Available places (nearest first)", session.available_places(*near))
        else:
            print_places("Available places", session.available_places())
        render_selection(session.selected_places)

        while True:
            try:
                line = await asyncio.to_thread(input, "\n> ")
            except EOFError:
                break

            if not await handle_line(session, line):
                break

    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Interactive place picker")
    parser.add_argument(
        "--base-url",
        default=settings.api_base_url,
        help=f"Places API URL (default: {settings.api_base_url})"
    )
    parser.add_argument(
        "--near",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help="Sort the catalog by distance from this point"
    )
    args = parser.parse_args()

    configure_logging()

    try:
        exit_code = asyncio.run(run(args.base_url, tuple(args.near) if args.near else None))
    except KeyboardInterrupt:
        print("\n\nBye")
        exit_code = 0

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
