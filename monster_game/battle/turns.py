"""Turn order: who opens the battle and how control alternates."""
from __future__ import annotations

from monster_game.core.rng import Dice
from .models import Side

def decide_first_turn(player_hp: int, wild_hp: int, rng: Dice) -> Side:
    """Higher current hit points act first; a tie is settled by a coin flip."""
    if player_hp > wild_hp:
        return Side.PLAYER
    if wild_hp > player_hp:
        return Side.WILD
    return Side.PLAYER if rng.coin_flip() else Side.WILD

def other_side(side: Side) -> Side:
    return Side.WILD if side is Side.PLAYER else Side.PLAYER

__all__ = ["decide_first_turn", "other_side"]
