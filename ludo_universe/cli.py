"""
Ludo Universe - terminal front end (`python -m ludo_universe` or `ludo-universe`).
Plays a four-player session against the turn engine, printing every event.
"""

import argparse
import random

from loguru import logger

from . import (
    BonusTurnGranted,
    ConfigurationError,
    DiceResolved,
    GameEvent,
    GameSettings,
    InvalidRequest,
    ManualScheduler,
    NoLegalMove,
    PieceMoved,
    RollStarted,
    SessionClosed,
    TurnChanged,
    TurnEngine,
    TurnPhase,
    config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a game of Ludo in the terminal")
    parser.add_argument(
        "--names",
        nargs="*",
        default=[],
        help="Human player names, in seat order",
    )
    parser.add_argument(
        "--colors",
        nargs="*",
        default=None,
        help=f"Four colors in seat order, from {config.PALETTE}",
    )
    parser.add_argument(
        "--bots",
        type=int,
        default=3,
        help="Number of computer-controlled players (trailing seats)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.SEED,
        help="Seed for dice and bot decisions",
    )
    parser.add_argument(
        "--autoplay",
        action="store_true",
        help="Let human seats roll and pick pieces at random instead of prompting",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=40,
        help="Stop after this many turn changes (the game has no win condition)",
    )
    return parser.parse_args()


def describe(engine: TurnEngine, event: GameEvent) -> str:
    if isinstance(event, TurnChanged):
        return f"\n--- {engine.players[event.player_index].display_name}'s turn ---"
    if isinstance(event, RollStarted):
        return "Rolling..."
    if isinstance(event, DiceResolved):
        movable = ", ".join(str(p + 1) for p in event.legal_pieces) or "none"
        return f"Rolled a {event.value} (movable pieces: {movable})"
    if isinstance(event, PieceMoved):
        name = engine.players[event.player_index].display_name
        where = event.location
        tag = ""
        if not where.is_home and engine.is_safe(where.position):
            tag = " [safe]"
        return f"{name} moved piece {event.piece_id + 1} to {where}{tag}"
    if isinstance(event, NoLegalMove):
        return f"{engine.players[event.player_index].display_name} has no valid moves"
    if isinstance(event, BonusTurnGranted):
        return "Rolled a 6! Roll again!"
    if isinstance(event, SessionClosed):
        return "Game over."
    return str(event)


def human_step(engine: TurnEngine, autoplay: bool, rng: random.Random) -> bool:
    """Handle one prompt for the active human. Returns False when the player quits."""
    player = engine.current_player
    if engine.phase is TurnPhase.AWAITING_ROLL:
        if not autoplay:
            answer = input(f"{player.name}, press Enter to roll (q to quit): ")
            if answer.strip().lower() == "q":
                return False
        engine.request_roll(player.index)
        return True

    if autoplay:
        engine.request_move(player.index, rng.choice(engine.legal_pieces))
        return True
    answer = input(f"{player.name}, pick a piece to move (1-4, q to quit): ")
    if answer.strip().lower() == "q":
        return False
    try:
        piece_id = int(answer) - 1
    except ValueError:
        print("Please enter a piece number.")
        return True
    engine.request_move(player.index, piece_id)
    return True


def main() -> None:
    args = parse_args()
    blob = {"playerNames": args.names, "botCount": args.bots}
    if args.colors:
        blob["playerColors"] = args.colors
    try:
        settings = GameSettings.from_mapping(blob).validate()
    except ConfigurationError as e:
        for problem in e.problems:
            print(f"Error: {problem}")
        raise SystemExit(2)

    rng = random.Random(args.seed)
    scheduler = ManualScheduler()
    engine = TurnEngine(settings, scheduler=scheduler, rng=rng)
    engine.events.subscribe_all(lambda event: print(describe(engine, event)))

    engine.start()
    try:
        while engine.turn_number < args.max_turns:
            scheduler.run_until_idle()
            if engine.turn_number >= args.max_turns or not engine.awaiting_human_input:
                break
            try:
                if not human_step(engine, args.autoplay, rng):
                    break
            except InvalidRequest as e:
                print(e.reason)
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, leaving the game")
    finally:
        engine.close()


if __name__ == "__main__":
    main()
