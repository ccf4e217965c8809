"""
Initial game configuration.

Settings arrive from the menu as a persisted key-value blob
(``playerNames``, ``playerColors``, ``botCount``) and are validated here,
before any session exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from loguru import logger

from .config import config
from .errors import ConfigurationError
from .types import PlayerColor


def default_name(index: int) -> str:
    return f"Player {index + 1}"


def _default_colors() -> List[PlayerColor]:
    return [PlayerColor(c) for c in config.PALETTE]


@dataclass(slots=True)
class GameSettings:
    player_names: List[str] = field(
        default_factory=lambda: [default_name(i) for i in range(config.NUM_PLAYERS)]
    )
    player_colors: List[PlayerColor] = field(default_factory=_default_colors)
    bot_count: int = 0

    @property
    def human_count(self) -> int:
        return config.NUM_PLAYERS - self.bot_count

    def is_bot(self, index: int) -> bool:
        """Bots always occupy the trailing seats."""
        return index >= self.human_count

    def problems(self) -> List[str]:
        found: List[str] = []
        seats_known = False
        if isinstance(self.bot_count, bool) or not isinstance(self.bot_count, int):
            found.append(f"Bot count must be an integer, got {self.bot_count!r}")
        elif not 0 <= self.bot_count <= config.NUM_PLAYERS:
            found.append(
                f"Bot count must be between 0 and {config.NUM_PLAYERS}, got {self.bot_count}"
            )
        elif self.human_count < 1:
            found.append("At least one human player is required")
        else:
            seats_known = True

        if len(self.player_names) != config.NUM_PLAYERS:
            found.append(
                f"Expected {config.NUM_PLAYERS} player names, got {len(self.player_names)}"
            )
        else:
            for idx, name in enumerate(self.player_names):
                if seats_known and self.is_bot(idx):
                    continue
                if not str(name or "").strip():
                    found.append(f"Please enter a name for Player {idx + 1}")

        if len(self.player_colors) != config.NUM_PLAYERS:
            found.append(
                f"Expected {config.NUM_PLAYERS} player colors, got {len(self.player_colors)}"
            )
        else:
            for idx, color in enumerate(self.player_colors):
                if not isinstance(color, PlayerColor):
                    found.append(
                        f"Unknown color {color!r} for Player {idx + 1}; choose from {config.PALETTE}"
                    )
            if len(set(self.player_colors)) != len(self.player_colors):
                found.append("Each player must have a unique color")
        return found

    def validate(self) -> "GameSettings":
        found = self.problems()
        if found:
            logger.warning(f"Rejected game settings: {found}")
            raise ConfigurationError(found)
        return self

    @classmethod
    def from_mapping(cls, blob: Mapping[str, Any]) -> "GameSettings":
        """Build settings from the menu's saved blob, filling the same defaults.

        Names missing from the blob (bot seats are never saved) become
        ``Player N``. Unknown colors raise ``ConfigurationError``.
        """
        names = list(blob.get("playerNames") or [])
        player_names = [
            names[i] if i < len(names) and names[i] else default_name(i)
            for i in range(config.NUM_PLAYERS)
        ]

        raw_colors = blob.get("playerColors") or config.PALETTE
        player_colors: List[PlayerColor] = []
        bad: List[str] = []
        for raw in raw_colors:
            try:
                player_colors.append(PlayerColor(str(raw).lower()))
            except ValueError:
                bad.append(f"Unknown color {raw!r}; choose from {config.PALETTE}")
        if bad:
            raise ConfigurationError(bad)

        bot_count = blob.get("botCount") or 0
        if isinstance(bot_count, str) and bot_count.strip().lstrip("-").isdigit():
            bot_count = int(bot_count)

        return cls(
            player_names=player_names,
            player_colors=player_colors,
            bot_count=bot_count,
        )

    def to_mapping(self) -> dict:
        return {
            "playerCount": config.NUM_PLAYERS,
            "botCount": self.bot_count,
            "playerNames": self.player_names[: self.human_count],
            "playerColors": [c.value for c in self.player_colors],
        }
