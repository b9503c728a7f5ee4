"""Randomness port for the battle engine.

Every random decision (first-turn tie-break, capture roll, random wild
species) goes through a Dice instance so tests can pass a seeded or scripted
source instead of relying on the global `random` module.
"""
from __future__ import annotations

from random import Random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class Dice:
    """Thin wrapper around random.Random exposing the decisions the engine needs."""

    def __init__(self, seed: Optional[int] = None, *, source: Optional[Random] = None) -> None:
        self._random = source if source is not None else Random(seed)

    def random(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        return self._random.random()

    def coin_flip(self) -> bool:
        return self.random() < 0.5

    def chance(self, probability: float) -> bool:
        """True with the given probability (clamped to [0, 1])."""
        if probability <= 0:
            return False
        if probability >= 1:
            return True
        return self.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[int(self.random() * len(seq)) % len(seq)]
