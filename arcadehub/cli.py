"""
Arcade Hub CLI - Command-line interface for the engines.

Usage:
    arcadehub games                                  List the catalog
    arcadehub scores <game_id>                       Show the top ten
    arcadehub replay <game_id> --seed N <step>...    Replay a command script
    arcadehub serve [--host H] [--port P]            Run the HTTP API

Replay steps:
    left right down drop rotate flap launch
    move:<left|right|up|down>
    reveal:<row>,<col>   flag:<row>,<col>
    guess:<word>
    flipper:<left|right>:<on|off>
    tick[:<count>]
"""

import argparse
import logging
import os
import sys

from .engine_core.command import Command, CommandType, Direction, Side

SIMPLE_STEPS = {
    "left": CommandType.MOVE_LEFT,
    "right": CommandType.MOVE_RIGHT,
    "down": CommandType.SOFT_DROP,
    "drop": CommandType.HARD_DROP,
    "rotate": CommandType.ROTATE,
    "flap": CommandType.FLAP,
    "launch": CommandType.LAUNCH,
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Arcade Hub - deterministic classic arcade games",
        prog="arcadehub",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("games", help="List the game catalog")

    scores_parser = subparsers.add_parser("scores", help="Show high scores for a game")
    scores_parser.add_argument("game_id", help="Catalog id, e.g. tetris")
    scores_parser.add_argument("--file", help="Score file (default: $ARCADE_SCORES_PATH)")

    replay_parser = subparsers.add_parser("replay", help="Replay a command script")
    replay_parser.add_argument("game_id", help="Catalog id, e.g. tetris")
    replay_parser.add_argument("steps", nargs="*", help="Commands and ticks to apply")
    replay_parser.add_argument("--seed", type=int, default=0, help="Random seed")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    # steps may follow --seed, which leaves them unparsed by the subparser
    args, extra = parser.parse_known_args(argv)
    if extra:
        if args.command != "replay":
            parser.error(f"unrecognized arguments: {' '.join(extra)}")
        args.steps.extend(extra)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else os.getenv("ARCADE_LOG_LEVEL", "WARNING"),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "games":
        cmd_games(args)
    elif args.command == "scores":
        cmd_scores(args)
    elif args.command == "replay":
        cmd_replay(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_games(args):
    """List the catalog."""
    from .games import GAMES

    for game in GAMES:
        timing = f"{game.tick_interval_ms}ms ticks" if game.tick_interval_ms else "input only"
        print(f"{game.game_id:<12} {game.title:<12} {timing}")
        print(f"    {game.description}")
        print(f"    Controls: {game.controls}")


def cmd_scores(args):
    """Show the top ten for one game."""
    from .scores import HighScoreStore

    store = HighScoreStore(args.file or os.getenv("ARCADE_SCORES_PATH"))
    try:
        scores = store.get_scores(args.game_id)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not scores:
        print(f"No scores yet for {args.game_id}")
        return
    for rank, entry in enumerate(scores, start=1):
        print(f"{rank:>2}. {entry.score:>8}  {entry.player_name}  {entry.created_at}")


def cmd_replay(args):
    """Run a command script through a driver and print the outcome."""
    from .games import get_engine
    from .session import TickDriver

    engine = get_engine(args.game_id)
    if engine is None:
        print(f"Error: Unknown game: {args.game_id}")
        sys.exit(1)

    try:
        steps = [parse_step(token) for token in args.steps]
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    driver = TickDriver(engine, seed=args.seed)
    for token, step in zip(args.steps, steps):
        if driver.is_over:
            break
        if isinstance(step, int):
            driver.tick(step)
            continue
        result = driver.apply(step)
        if not result.success:
            print(f"  {token}: rejected ({result.error_code}) {result.message}")

    status = "game over" if driver.is_over else "running"
    print(f"{args.game_id} seed={args.seed}: score {driver.score} ({status})")


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


def parse_step(token: str):
    """
    Parse one replay step.

    Returns a Command, or an int tick count for `tick[:n]`.
    Raises ValueError for anything it does not understand.
    """
    name, _, rest = token.partition(":")
    name = name.lower()

    if name in SIMPLE_STEPS and not rest:
        return Command.simple(SIMPLE_STEPS[name])
    if name == "tick":
        count = int(rest) if rest else 1
        if count < 1:
            raise ValueError(f"Tick count must be positive: {token}")
        return count
    if name == "move":
        try:
            return Command.move(Direction(rest.lower()))
        except ValueError:
            raise ValueError(f"Unknown direction in {token}")
    if name in ("reveal", "flag"):
        try:
            row, col = (int(part) for part in rest.split(","))
        except ValueError:
            raise ValueError(f"Expected {name}:<row>,<col>, got {token}")
        return Command.reveal(row, col) if name == "reveal" else Command.toggle_flag(row, col)
    if name == "guess" and rest:
        return Command.submit_guess(rest)
    if name == "flipper":
        side, _, state = rest.partition(":")
        try:
            return Command.set_flipper(Side(side.lower()), state.lower() == "on")
        except ValueError:
            raise ValueError(f"Unknown flipper side in {token}")

    raise ValueError(f"Unknown step: {token}")


if __name__ == "__main__":
    main()
