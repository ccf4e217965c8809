from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PlayerColor(Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class PieceState(Enum):
    AT_HOME = "at_home"
    ON_PATH = "on_path"


class TurnPhase(Enum):
    AWAITING_ROLL = "awaiting_roll"
    ROLLING = "rolling"
    AWAITING_MOVE = "awaiting_move"
    RESOLVING_BONUS = "resolving_bonus"


@dataclass(frozen=True, slots=True)
class Location:
    """Where a piece sits: home, or an absolute ring cell."""

    state: PieceState
    position: int | None = None

    @classmethod
    def home(cls) -> "Location":
        return cls(PieceState.AT_HOME)

    @classmethod
    def on_path(cls, position: int) -> "Location":
        return cls(PieceState.ON_PATH, position)

    @property
    def is_home(self) -> bool:
        return self.state is PieceState.AT_HOME

    def __str__(self) -> str:
        return "home" if self.is_home else f"cell {self.position}"


@dataclass(frozen=True, slots=True)
class Move:
    player_index: int
    piece_id: int
    dice_roll: int
    old_location: Location
    new_location: Location

    @property
    def exited_home(self) -> bool:
        return self.old_location.is_home and not self.new_location.is_home
