"""
Terminal client for playing against a running game server.

Usage:
    python -m scrabble_client.main config.yaml
    python -m scrabble_client.main --new-game --players 2 --verbose
    python -m scrabble_client.main --game-id 1a2b3c --base-url http://127.0.0.1:5000
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .composer import describe_verdict, render_board, BONUS_LEGEND
from .session import ClientConfig, GameSession


HELP_TEXT = """Commands (coordinates and rack slots are 1-based):
  anchor X Y      choose the start cell
  drop X Y I      drop rack tile I on cell (X, Y)
  rack I          append rack tile I
  type LETTERS    type letters from the rack
  word TEXT       set the word as free text
  back            remove the last letter
  flip | row | col
                  change the direction (before the second letter)
  clear           discard the move
  submit          send the move
  skip            skip the turn
  exchange        start selecting tiles to exchange
  toggle I        select/deselect rack tile I for exchange
  confirm         send the exchange
  cancel          leave exchange mode
  refresh         reload the game
  log             show the move history
  name P TEXT     set the nickname of player P
  help            show this text
  quit            leave"""


def load_config(config_path: str) -> ClientConfig:
    """Load client configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return ClientConfig(**data)


def render(session: GameSession) -> str:
    """Render scores, the board, the rack and the move status as text."""
    composer = session.composer
    snapshot = session.snapshot
    lines: List[str] = []

    if snapshot is not None:
        scores = []
        for i in range(snapshot.num_players):
            turn = ">" if i == snapshot.current_player else " "
            scores.append(f"{turn}{snapshot.player_name(i)}: {snapshot.points.get(i, 0)}")
        if scores:
            lines.append("  ".join(scores))
            lines.append("")

    if session.board is not None:
        layout = snapshot.layout if snapshot else None
        lines.append(render_board(session.board, composer.anchor, composer.direction, composer.word, layout))
        if layout:
            lines.append(BONUS_LEGEND)
        lines.append("")

    values = snapshot.letter_values if snapshot else {}
    used = composer.used_rack_indices
    selected = set(composer.exchange_selection)
    tiles = []
    for i, letter in enumerate(session.rack.letters):
        mark = "*" if i in selected else ("-" if i in used else " ")
        value = f"({values[letter]})" if letter in values else ""
        tiles.append(f"{i + 1}:{letter}{value}{mark}")
    player = snapshot.player_name(snapshot.current_player) if snapshot else "Player ?"
    lines.append(f"{player} rack: {' '.join(tiles)}")

    if composer.exchanging:
        lines.append("Exchange mode: toggle tiles, then confirm or cancel")
    else:
        anchor = f"{composer.anchor.x + 1},{composer.anchor.y + 1}" if composer.anchor else "-"
        direction = composer.direction or "?"
        lines.append(f"Start: {anchor}  Direction: {direction}  Word: {composer.word or '-'}")
        lines.extend(describe_verdict(session.verdict()))

    if session.error:
        lines.append(f"Error: {session.error}")

    return "\n".join(lines)


def _ints(args: List[str], count: int) -> Optional[List[int]]:
    """Parse `count` 1-based integers into 0-based ones."""
    if len(args) != count:
        return None
    try:
        values = [int(a) - 1 for a in args]
    except ValueError:
        return None
    return values if all(v >= 0 for v in values) else None


def dispatch_command(session: GameSession, line: str) -> bool:
    """
    Apply one command line to the session.

    Returns False when the user asked to quit.
    """
    parts = line.split()
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit", "q"):
        return False

    if command == "anchor":
        values = _ints(args, 2)
        if values is None:
            print("Usage: anchor X Y")
        else:
            session.set_anchor(*values)
    elif command == "drop":
        values = _ints(args, 3)
        if values is None:
            print("Usage: drop X Y I")
        else:
            x, y, index = values
            session.handle_drop(x, y, {"rackIndex": str(index)})
    elif command == "rack":
        values = _ints(args, 1)
        if values is None:
            print("Usage: rack I")
        else:
            session.composer.append_from_rack(values[0])
    elif command == "type":
        for letter in "".join(args):
            session.handle_key(letter)
    elif command == "word":
        session.composer.set_word("".join(args))
    elif command == "back":
        session.handle_key("Backspace")
    elif command == "flip":
        session.handle_key("Tab")
    elif command in ("row", "col"):
        session.composer.set_direction(command)
    elif command == "clear":
        session.composer.clear()
    elif command == "submit":
        if session.submit_move() is None and not session.error:
            print("Nothing to submit: the move is incomplete or fails the local checks")
    elif command == "skip":
        session.skip_turn()
    elif command == "exchange":
        if not session.start_exchange():
            print("Clear the current word before exchanging tiles")
    elif command == "toggle":
        values = _ints(args, 1)
        if values is None:
            print("Usage: toggle I")
        else:
            session.toggle_exchange(values[0])
    elif command == "confirm":
        session.confirm_exchange()
    elif command == "cancel":
        session.handle_key("Escape")
    elif command == "refresh":
        session.refresh()
    elif command == "log":
        events = session.snapshot.log if session.snapshot else []
        ordered = sorted(events, key=lambda e: e.time_epoch or 0, reverse=True)
        for event in ordered:
            who = session.snapshot.player_name(event.player) if event.player is not None else "-"
            print(f"{who:<10} {event.type.replace('_', ' '):<16} {event.describe()}")
        if not events:
            print("No moves yet.")
    elif command == "name":
        values = _ints(args[:1], 1)
        nickname = " ".join(args[1:])
        if values is None or not nickname:
            print("Usage: name P TEXT")
        else:
            session.set_nickname(values[0], nickname)
    elif command == "help":
        print(HELP_TEXT)
    else:
        print(f"Unknown command: {command} (try 'help')")

    return True


def main():
    parser = argparse.ArgumentParser(
        description="Play a word-placement game from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  base_url: http://127.0.0.1:5000
  game_id: 1a2b3c
  players: 2
  center_anchor: true
  log_level: INFO
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--game-id", "-g",
        help="Join an existing game"
    )
    parser.add_argument(
        "--new-game",
        action="store_true",
        help="Create a new game on the server"
    )
    parser.add_argument(
        "--players",
        type=int,
        help="Number of players for --new-game"
    )
    parser.add_argument(
        "--base-url",
        help="Game server URL (default: $SCRABBLE_API_URL or http://127.0.0.1:5000)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log requests and state changes"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config) if args.config else ClientConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    overrides = {
        "game_id": args.game_id,
        "players": args.players,
        "base_url": args.base_url,
    }
    config = config.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = GameSession.create(config=config)

    if args.new_game:
        game_id = session.new_game()
        if game_id is None:
            print(f"Error creating game: {session.error}", file=sys.stderr)
            return 1
        print(f"Created game: {game_id}")
    elif config.game_id:
        if not session.load(config.game_id):
            print(f"Error loading game {config.game_id}: {session.error}", file=sys.stderr)
            return 1
    else:
        print("Error: pass --game-id, --new-game or a config with game_id", file=sys.stderr)
        return 1

    print(HELP_TEXT)
    try:
        while True:
            print()
            print(render(session))
            try:
                line = input("> ")
            except EOFError:
                break
            if not dispatch_command(session, line):
                break
    except KeyboardInterrupt:
        print("\nBye")

    return 0


if __name__ == "__main__":
    sys.exit(main())
