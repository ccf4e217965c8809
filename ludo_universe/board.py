"""
Board topology for the shared 52-cell ring.
Pure geometry: entry cells, safe cells and forward movement with wraparound.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Tuple

from .config import config


def _compute_entry_cells() -> Tuple[int, ...]:
    return tuple(
        (config.FIRST_ENTRY_CELL + config.ENTRY_SPACING * idx) % config.PATH_LENGTH
        for idx in range(config.NUM_PLAYERS)
    )


def _compute_safe_cells(entries: Tuple[int, ...]) -> FrozenSet[int]:
    safe = set(entries)
    # One star cell part-way along each player's stretch of the ring
    for entry in entries:
        safe.add((entry + config.SAFE_OFFSET) % config.PATH_LENGTH)
    return frozenset(safe)


_ENTRY_CELLS = _compute_entry_cells()
_SAFE_CELLS = _compute_safe_cells(_ENTRY_CELLS)


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable ring layout consulted read-only by the turn engine.

    Callers validate their inputs; no method here raises.
    """

    path_length: int = config.PATH_LENGTH
    entry_cells: Tuple[int, ...] = _ENTRY_CELLS
    safe_cells: FrozenSet[int] = _SAFE_CELLS
    _entry_owner: Dict[int, int] = field(
        default_factory=lambda: {cell: idx for idx, cell in enumerate(_ENTRY_CELLS)},
        repr=False,
        compare=False,
    )

    def entry_cell(self, player_index: int) -> int:
        """Cell a piece of ``player_index`` occupies when it leaves home."""
        return self.entry_cells[player_index]

    def is_safe(self, cell: int) -> bool:
        return cell in self.safe_cells

    def is_entry(self, cell: int) -> bool:
        return cell in self._entry_owner

    def entry_owner(self, cell: int) -> int | None:
        return self._entry_owner.get(cell)

    def advance(self, cell: int, steps: int) -> int:
        return (cell + steps) % self.path_length

    def to_dict(self) -> dict:
        return {
            "path_length": self.path_length,
            "entry_cells": list(self.entry_cells),
            "safe_cells": sorted(self.safe_cells),
        }


board = Board()
