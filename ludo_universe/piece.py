from dataclasses import dataclass

from .types import Location, PieceState


@dataclass(slots=True)
class Piece:
    """Lightweight piece model. Holds state only.

    Legality and movement rules live in the turn engine; ring arithmetic
    lives in the board topology.
    """

    player_index: int  # owner, 0..3
    piece_id: int  # 0..3 per player
    position: int | None = None  # None = at home; 0..51 absolute ring cell

    @property
    def state(self) -> PieceState:
        return PieceState.AT_HOME if self.position is None else PieceState.ON_PATH

    @property
    def location(self) -> Location:
        if self.position is None:
            return Location.home()
        return Location.on_path(self.position)

    def is_home(self) -> bool:
        return self.position is None

    def move_to(self, new_position: int) -> None:
        self.position = new_position

    def to_dict(self) -> dict:
        return {
            "piece_id": self.piece_id,
            "state": self.state.value,
            "position": self.position,
        }

    def __str__(self) -> str:
        return f"Piece({self.player_index}_{self.piece_id}: {self.location})"
