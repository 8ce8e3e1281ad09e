"""
Mini Splendor CLI - Play in the terminal.

Usage:
    minisplendor play [--load FILE] [--save-path FILE]   Interactive game
    minisplendor show FILE                                Print a saved game

Type 'help' in a game for the list of commands.
"""

from __future__ import annotations
import argparse
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from pydantic import ValidationError

from .config import Settings, configure_logging
from .presentation import (
    BuyCardRequest,
    GameService,
    TakeChipRequest,
    render_state,
)

HELP_TEXT = """\
    take <color>     Take one chip (red, blue, green, black, white)
    buy <id>         Buy a card from the table
    end              End your turn now
    new              Start a new game
    save [file]      Save the game
    load [file]      Load a saved game
    show             Print the board
    help             List commands
    quit             Leave, offering to save first"""

QUIT_PROMPT = "Save before quitting? [y/n/cancel]"

SIMPLE_COMMANDS = {"end", "new", "show", "help", "quit"}
FILE_COMMANDS = {"save", "load"}


@dataclass
class Command:
    """A non-action command from the prompt."""
    name: str
    argument: Optional[str] = None


@dataclass
class ParseError:
    """Input that didn't make sense, with a hint for the user."""
    message: str


ParsedLine = Union[TakeChipRequest, BuyCardRequest, Command, ParseError, None]


def parse_command(line: str) -> ParsedLine:
    """
    Parse one line of user input.

    Returns a request for take/buy, a Command for everything else, a
    ParseError for malformed input, or None for a blank line.
    """
    words = line.split()
    if not words:
        return None

    name, args = words[0].lower(), words[1:]

    if name == "take":
        if len(args) != 1:
            return ParseError("Usage: take <color>")
        try:
            return TakeChipRequest(color=args[0])
        except ValidationError:
            return ParseError(f"Unknown color: {args[0]}")

    if name == "buy":
        if len(args) != 1:
            return ParseError("Usage: buy <card id>")
        try:
            return BuyCardRequest(card_id=args[0])
        except ValidationError:
            return ParseError(f"Not a card id: {args[0]}")

    if name == "exit":
        name = "quit"
    if name in FILE_COMMANDS:
        if len(args) > 1:
            return ParseError(f"Usage: {name} [file]")
        return Command(name=name, argument=args[0] if args else None)

    if name in SIMPLE_COMMANDS:
        if args:
            return ParseError(f"'{name}' takes no arguments")
        return Command(name=name)

    return ParseError(f"Unknown command: {words[0]} (type 'help')")


def run_session(
    service: GameService,
    lines: Iterable[str],
    settings: Settings,
    out: Callable[[str], None] = print,
):
    """Feed input lines to the game until they run out or the user quits."""
    if service.get_state().current_player_number is not None:
        out(render_state(service.get_state()))

    lines = iter(lines)
    for line in lines:
        parsed = parse_command(line)
        if parsed is None:
            continue
        if isinstance(parsed, ParseError):
            out(parsed.message)
            continue
        if isinstance(parsed, (TakeChipRequest, BuyCardRequest)):
            response = service.handle_request(parsed)
            out(response.message)
            if response.success:
                out(render_state(response.state))
            continue

        if parsed.name == "quit":
            out(QUIT_PROMPT)
            # End of input counts as "no"
            answer = next(lines, "n").strip().lower()
            if answer in ("y", "yes"):
                out(service.save_game(settings.save_path).message)
            elif answer not in ("n", "no"):
                out("Quit cancelled.")
                continue
            out("Goodbye.")
            return
        if parsed.name == "help":
            out(HELP_TEXT)
        elif parsed.name == "show":
            out(render_state(service.get_state()))
        else:
            response = _run_command(service, parsed, settings)
            out(response.message)
            if response.success:
                out(render_state(response.state))


def _run_command(service: GameService, command: Command, settings: Settings):
    if command.name == "end":
        return service.end_turn()
    if command.name == "new":
        return service.new_game()
    if command.name == "save":
        return service.save_game(command.argument or settings.save_path)
    return service.load_game(command.argument or settings.save_path)


def _prompt_lines(prompt: str = "> ") -> Iterable[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Mini Splendor - two-player chip and card game",
        prog="minisplendor",
    )
    parser.add_argument("--log-level", help="Logging level (overrides MINISPLENDOR_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play an interactive game")
    play_parser.add_argument("--load", metavar="FILE", help="Start from a saved game")
    play_parser.add_argument("--save-path", metavar="FILE", help="Default save file")

    # Show command
    show_parser = subparsers.add_parser("show", help="Print a saved game")
    show_parser.add_argument("save_file", help="Path to a save file")

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
        if args.log_level:
            settings = Settings(save_path=settings.save_path, log_level=args.log_level)
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)
    configure_logging(settings.log_level)

    if args.command == "play":
        cmd_play(args, settings)
    elif args.command == "show":
        cmd_show(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, settings: Settings):
    """Interactive game on stdin/stdout."""
    if args.save_path:
        settings = settings.model_copy(update={"save_path": args.save_path})

    service = GameService()
    if args.load:
        response = service.load_game(args.load)
        print(response.message)
        if not response.success:
            sys.exit(1)
    else:
        service.new_game()

    print("Mini Splendor. Type 'help' for commands.")
    run_session(service, _prompt_lines(), settings)


def cmd_show(args):
    """Print a saved game."""
    service = GameService()
    response = service.load_game(args.save_file)
    if not response.success:
        print(f"Error: {response.message}", file=sys.stderr)
        sys.exit(1)
    print(render_state(response.state))


if __name__ == "__main__":
    main()
