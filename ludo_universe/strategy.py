from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Protocol, Sequence, Type

import numpy as np


class Strategy(Protocol):
    name: str

    def choose_move(self, legal_pieces: Sequence[int]) -> int:
        ...


@dataclass(slots=True)
class RandomStrategy:
    """Uniform pick among the legal pieces. No lookahead."""

    name = "random"
    rng: random.Random = field(default_factory=random.Random)

    def choose_move(self, legal_pieces: Sequence[int]) -> int:
        if not legal_pieces:
            raise ValueError("choose_move requires at least one legal piece")
        return self.rng.choice(sorted(legal_pieces))

    def choose_from_mask(self, action_mask: np.ndarray) -> int:
        """Same policy, fed by a boolean mask over the player's pieces."""
        return self.choose_move(np.flatnonzero(action_mask).tolist())


STRATEGY_REGISTRY: Dict[str, Type[Strategy]] = {
    RandomStrategy.name: RandomStrategy,
}


def create(strategy_name: str, rng: random.Random | None = None) -> Strategy:
    cls = STRATEGY_REGISTRY.get(strategy_name.lower())
    if cls is None:
        raise KeyError(
            f"Unknown strategy '{strategy_name}'. Available: {available()}"
        )
    if rng is None:
        return cls()
    return cls(rng=rng)


def available() -> list[str]:
    return list(STRATEGY_REGISTRY)
