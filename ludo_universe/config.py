import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass(slots=True)
class Config:
    # --- Board ---
    PATH_LENGTH: int = 52  # shared ring, cells 0..51
    NUM_PLAYERS: int = 4
    PIECES_PER_PLAYER: int = 4
    FIRST_ENTRY_CELL: int = 1  # player 0 leaves home here
    ENTRY_SPACING: int = 13  # ring offset between consecutive players
    SAFE_OFFSET: int = 8  # intermediate safe cell, counted from each entry

    # --- Dice ---
    DICE_MIN: int = 1
    DICE_MAX: int = 6
    EXIT_HOME_ROLL: int = 6
    BONUS_ROLL: int = 6

    PALETTE: list[str] = field(
        default_factory=lambda: ["red", "blue", "green", "yellow"]
    )

    # --- Presentation delays (seconds) ---
    ROLL_FLICKER_STEPS: int = 10
    ROLL_FLICKER_INTERVAL: float = 0.1
    ROLL_SETTLE_DELAY: float = 0.3
    BOT_THINK_DELAY: float = 1.0
    NO_MOVE_DELAY: float = 1.0
    BOT_TURN_DELAY: float = 0.5
    BONUS_CONTINUE_DELAY: float = 0.5

    # --- Runtime ---
    SEED: int | None = _optional_int(os.getenv("LUDO_SEED"))
    BOT_STRATEGY: str = os.getenv("LUDO_BOT_STRATEGY", "random")

    # Derived (populated in __post_init__ due to slots)
    ROLL_DURATION: float = 0.0

    def __post_init__(self):
        self.ROLL_DURATION = (
            self.ROLL_FLICKER_STEPS * self.ROLL_FLICKER_INTERVAL
            + self.ROLL_SETTLE_DELAY
        )
        if self.PATH_LENGTH != self.ENTRY_SPACING * self.NUM_PLAYERS:
            raise ValueError("ENTRY_SPACING * NUM_PLAYERS must cover the ring")


config = Config()
