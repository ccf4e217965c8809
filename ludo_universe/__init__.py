"""
Ludo Universe turn engine.
Board topology, piece/player model, turn state machine and scripted bots.
"""

from .board import Board, board
from .config import config
from .engine import TurnEngine, compute_legal_pieces
from .errors import ConfigurationError, InvalidRequest, LudoError
from .events import (
    BonusTurnGranted,
    DiceResolved,
    EventBus,
    GameEvent,
    NoLegalMove,
    PieceMoved,
    RollStarted,
    SessionClosed,
    TurnChanged,
)
from .piece import Piece
from .player import Player
from .scheduler import AsyncioScheduler, ManualScheduler
from .settings import GameSettings
from .strategy import RandomStrategy
from .types import Location, Move, PieceState, PlayerColor, TurnPhase

__all__ = [
    "Board",
    "board",
    "config",
    "TurnEngine",
    "compute_legal_pieces",
    "LudoError",
    "InvalidRequest",
    "ConfigurationError",
    "EventBus",
    "GameEvent",
    "RollStarted",
    "DiceResolved",
    "PieceMoved",
    "TurnChanged",
    "NoLegalMove",
    "BonusTurnGranted",
    "SessionClosed",
    "Piece",
    "Player",
    "ManualScheduler",
    "AsyncioScheduler",
    "GameSettings",
    "RandomStrategy",
    "Location",
    "Move",
    "PieceState",
    "PlayerColor",
    "TurnPhase",
]
