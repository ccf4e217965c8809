from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .config import config
from .piece import Piece
from .types import PlayerColor

if TYPE_CHECKING:  # avoid runtime imports to prevent circular deps
    from .strategy import Strategy


@dataclass(slots=True)
class Player:
    index: int
    name: str
    color: PlayerColor
    is_bot: bool = False
    strategy: Optional["Strategy"] = field(default=None, repr=False)
    pieces: list[Piece] = field(init=False)

    def __post_init__(self) -> None:
        self.pieces = [
            Piece(player_index=self.index, piece_id=i)
            for i in range(config.PIECES_PER_PLAYER)
        ]

    @property
    def display_name(self) -> str:
        return f"{self.name} (Bot)" if self.is_bot else self.name

    def pieces_at_home(self) -> int:
        return sum(1 for p in self.pieces if p.is_home())

    def pieces_on_path(self) -> int:
        return len(self.pieces) - self.pieces_at_home()

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "name": self.name,
            "display_name": self.display_name,
            "color": self.color.value,
            "is_bot": self.is_bot,
            "pieces": [p.to_dict() for p in self.pieces],
        }
