"""
Turn engine for a four-player Ludo session.

Owns the turn state and every piece mutation. Requests that do not fit the
current phase raise ``InvalidRequest`` and leave the state untouched; timed
transitions are continuations handed to a scheduler and dropped once the
session has moved on or been closed.
"""

from __future__ import annotations

import itertools
import random
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np
from loguru import logger

from .board import Board, board as default_board
from .config import config
from .errors import InvalidRequest
from .events import (
    BonusTurnGranted,
    DiceResolved,
    EventBus,
    NoLegalMove,
    PieceMoved,
    RollStarted,
    SessionClosed,
    TurnChanged,
)
from .piece import Piece
from .player import Player
from .scheduler import ManualScheduler, Scheduler, TimerHandle
from .settings import GameSettings
from .strategy import create as create_strategy
from .types import Location, Move, TurnPhase


def compute_legal_pieces(pieces: Iterable[Piece], dice: int) -> Tuple[int, ...]:
    """Pieces that may move with ``dice``: home pieces need a six, ring pieces always go."""
    return tuple(
        pc.piece_id
        for pc in pieces
        if not pc.is_home() or dice == config.EXIT_HOME_ROLL
    )


class TurnEngine:
    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        *,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        events: Optional[EventBus] = None,
        board: Board = default_board,
        bot_strategy: str = config.BOT_STRATEGY,
    ) -> None:
        self.settings = (settings or GameSettings()).validate()
        self.board = board
        self.rng = rng or random.Random(config.SEED)
        self.scheduler = scheduler or ManualScheduler()
        self.events = events or EventBus()

        self.players: List[Player] = []
        for idx in range(config.NUM_PLAYERS):
            is_bot = self.settings.is_bot(idx)
            self.players.append(
                Player(
                    index=idx,
                    name=self.settings.player_names[idx],
                    color=self.settings.player_colors[idx],
                    is_bot=is_bot,
                    strategy=create_strategy(bot_strategy, rng=self.rng)
                    if is_bot
                    else None,
                )
            )

        # --- Turn state ---
        self.current_player_index = 0
        self.dice_value: Optional[int] = None
        self.phase = TurnPhase.AWAITING_ROLL
        self.is_rolling = False
        self.bot_auto_roll = False
        self.legal_pieces: Tuple[int, ...] = ()
        self.last_move: Optional[Move] = None
        self.turn_number = 0
        self.started = False
        self.closed = False

        # Every transition bumps the epoch; continuations remember the epoch
        # they were scheduled in and do nothing if it has changed.
        self._epoch = 0
        self._timer_ids = itertools.count()
        self._timers: Dict[int, TimerHandle] = {}

        logger.info(
            f"New session: {[p.display_name for p in self.players]} "
            f"({self.settings.bot_count} bots)"
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def awaiting_human_input(self) -> bool:
        if self.closed or self.current_player.is_bot:
            return False
        if self.phase is TurnPhase.AWAITING_ROLL:
            return True
        return self.phase is TurnPhase.AWAITING_MOVE and bool(self.legal_pieces)

    def legal_moves(
        self, player_index: Optional[int] = None, dice: Optional[int] = None
    ) -> Tuple[int, ...]:
        """Legal pieces for a player and roll; defaults to the committed roll."""
        if player_index is None and dice is None:
            return self.legal_pieces
        player = self.players[
            self.current_player_index if player_index is None else player_index
        ]
        dice = self.dice_value if dice is None else dice
        if dice is None:
            return ()
        return compute_legal_pieces(player.pieces, dice)

    def legal_mask(self) -> np.ndarray:
        mask = np.zeros(config.PIECES_PER_PLAYER, dtype=bool)
        mask[list(self.legal_pieces)] = True
        return mask

    def location_of(self, player_index: int, piece_id: int) -> Location:
        return self.players[player_index].pieces[piece_id].location

    def is_safe(self, cell: int) -> bool:
        return self.board.is_safe(cell)

    def is_entry(self, cell: int) -> bool:
        return self.board.is_entry(cell)

    def snapshot(self) -> dict:
        return {
            "phase": self.phase.value,
            "current_player": self.current_player_index,
            "dice_value": self.dice_value,
            "is_rolling": self.is_rolling,
            "bot_auto_roll": self.bot_auto_roll,
            "legal_pieces": list(self.legal_pieces),
            "turn_number": self.turn_number,
            "closed": self.closed,
            "players": [p.to_dict() for p in self.players],
        }

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Announce the opening turn. Only valid before the first roll."""
        self._ensure_open()
        if self.started:
            self._reject("Session already started")
        if (
            self.phase is not TurnPhase.AWAITING_ROLL
            or self.turn_number
            or self.dice_value is not None
            or self.last_move is not None
        ):
            self._reject("Session already in progress")
        self.started = True
        self._announce_turn()

    def close(self) -> None:
        """End the session; pending continuations become no-ops."""
        if self.closed:
            return
        self.closed = True
        self._bump()
        for handle in self._timers.values():
            handle.cancel()
        cancelled = len(self._timers)
        self._timers.clear()
        logger.info(f"Session closed ({cancelled} pending continuations cancelled)")
        self.events.publish(SessionClosed())

    # ------------------------------------------------------------------
    # Inbound requests
    # ------------------------------------------------------------------
    def request_roll(self, player_index: int) -> None:
        """Human roll request for ``player_index``; the value arrives via ``DiceResolved``."""
        self._ensure_open()
        if self.phase is TurnPhase.ROLLING:
            self._reject("Dice are already rolling")
        self._check_turn(player_index)
        if self.phase is TurnPhase.AWAITING_MOVE:
            if self.legal_pieces:
                self._reject("Move a piece before rolling again")
            self._reject("No legal move; the turn is passing")
        if self.phase is not TurnPhase.AWAITING_ROLL:
            self._reject(f"Cannot roll while {self.phase.value}")
        self._begin_roll(auto=False)

    def request_move(self, player_index: int, piece_id: int) -> Move:
        self._ensure_open()
        if self.phase is TurnPhase.ROLLING:
            self._reject("Dice are still rolling")
        self._check_turn(player_index)
        if self.phase is not TurnPhase.AWAITING_MOVE or self.dice_value is None:
            self._reject("Please roll the dice first!")
        if piece_id not in self.legal_pieces:
            self._reject(f"Piece {piece_id} cannot be moved with a {self.dice_value}")
        return self._apply_move(piece_id)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _begin_roll(self, *, auto: bool) -> None:
        self.phase = TurnPhase.ROLLING
        self.is_rolling = True
        self.bot_auto_roll = auto
        self.dice_value = None
        self.legal_pieces = ()
        epoch = self._bump()
        logger.debug(
            f"{self.current_player.display_name} rolls ({'auto' if auto else 'manual'})"
        )
        self.events.publish(RollStarted(self.current_player_index))
        if self._epoch == epoch:
            self._schedule(config.ROLL_DURATION, self._finish_roll, "finish_roll")

    def _finish_roll(self) -> None:
        player = self.current_player
        value = self.rng.randint(config.DICE_MIN, config.DICE_MAX)
        self.dice_value = value
        self.is_rolling = False
        self.phase = TurnPhase.AWAITING_MOVE
        self.legal_pieces = compute_legal_pieces(player.pieces, value)
        epoch = self._bump()
        logger.debug(
            f"{player.display_name} rolled {value}; legal pieces {self.legal_pieces}"
        )
        self.events.publish(DiceResolved(player.index, value, self.legal_pieces))
        if self._epoch != epoch:
            return  # a listener already acted on this roll

        if not self.legal_pieces:
            logger.info(f"{player.display_name} has no valid moves")
            self.events.publish(NoLegalMove(player.index))
            if self._epoch == epoch:
                self._schedule(config.NO_MOVE_DELAY, self._advance_turn, "skip_turn")
        elif player.is_bot:
            self._schedule(config.BOT_THINK_DELAY, self._bot_move, "bot_move")

    def _bot_move(self) -> None:
        player = self.current_player
        choice = player.strategy.choose_move(self.legal_pieces)
        if choice not in self.legal_pieces:
            raise RuntimeError(
                f"Strategy {player.strategy.name!r} chose illegal piece {choice}"
            )
        self._apply_move(choice)

    def _bot_roll(self) -> None:
        self._begin_roll(auto=True)

    def _apply_move(self, piece_id: int) -> Move:
        player = self.current_player
        piece = player.pieces[piece_id]
        dice = self.dice_value
        old = piece.location

        if piece.is_home():
            piece.move_to(self.board.entry_cell(player.index))
        else:
            piece.move_to(self.board.advance(piece.position, dice))

        move = Move(
            player_index=player.index,
            piece_id=piece_id,
            dice_roll=dice,
            old_location=old,
            new_location=piece.location,
        )
        self.last_move = move
        self.legal_pieces = ()
        epoch = self._bump()
        logger.debug(
            f"{player.display_name} moved piece {piece_id + 1}: {old} -> {piece.location}"
        )
        self.events.publish(PieceMoved(player.index, piece_id, piece.location))
        if self._epoch != epoch:
            return move

        if dice == config.BONUS_ROLL:
            self._grant_bonus()
        else:
            self._advance_turn()
        return move

    def _grant_bonus(self) -> None:
        player = self.current_player
        self.phase = TurnPhase.RESOLVING_BONUS
        epoch = self._bump()
        self.events.publish(BonusTurnGranted(player.index))
        if self._epoch != epoch:
            return
        self.dice_value = None
        self.bot_auto_roll = False
        self.phase = TurnPhase.AWAITING_ROLL
        self._bump()
        logger.debug(f"{player.display_name} rolled a 6 and rolls again")
        if player.is_bot:
            self._schedule(config.BONUS_CONTINUE_DELAY, self._bot_roll, "bonus_roll")

    def _advance_turn(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.players)
        self.dice_value = None
        self.legal_pieces = ()
        self.is_rolling = False
        self.bot_auto_roll = False
        self.phase = TurnPhase.AWAITING_ROLL
        self.turn_number += 1
        self._bump()
        self._announce_turn()

    def _announce_turn(self) -> None:
        player = self.current_player
        epoch = self._epoch
        logger.info(f"Turn {self.turn_number}: {player.display_name}")
        self.events.publish(TurnChanged(player.index))
        if self._epoch == epoch and player.is_bot:
            self._schedule(config.BOT_TURN_DELAY, self._bot_roll, "bot_roll")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _bump(self) -> int:
        self._epoch += 1
        return self._epoch

    def _schedule(self, delay: float, continuation: Callable[[], None], label: str) -> None:
        if self.closed:
            return
        epoch = self._epoch
        timer_id = next(self._timer_ids)

        def fire() -> None:
            self._timers.pop(timer_id, None)
            if self.closed or epoch != self._epoch:
                logger.warning(
                    f"Dropping stale continuation '{label}' (epoch {epoch}, now {self._epoch})"
                )
                return
            continuation()

        self._timers[timer_id] = self.scheduler.call_later(delay, fire)

    def _ensure_open(self) -> None:
        if self.closed:
            self._reject("Session has ended")

    def _check_turn(self, player_index: int) -> None:
        if not 0 <= player_index < len(self.players):
            self._reject(f"Unknown player {player_index}")
        if player_index != self.current_player_index:
            self._reject("It's not your turn!")
        if self.current_player.is_bot:
            self._reject(f"{self.current_player.display_name} is computer-controlled")

    def _reject(self, reason: str) -> None:
        logger.debug(f"Rejected request: {reason}")
        raise InvalidRequest(reason)
