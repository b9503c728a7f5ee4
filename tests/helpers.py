"""Shared test doubles: scripted dice, manual clock, in-memory roster, builders."""
from __future__ import annotations
from typing import Iterable, List, Optional

from monster_game.battle.models import BattleSession, Combatant, Side
from monster_game.core.rng import Dice

class ScriptedDice(Dice):
    """Dice whose random() returns queued values (then 0.99 forever)."""
    def __init__(self, values: Iterable[float] = ()):
        super().__init__(0)
        self.values: List[float] = list(values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.values.pop(0) if self.values else 0.99

class FakeClock:
    def __init__(self):
        self.t = 0.0

    def __call__(self) -> float:
        return self.t

    def sleep(self, seconds: float) -> None:
        self.t += seconds

class FakeRoster:
    def __init__(self, fail: Optional[Exception] = None):
        self.fail = fail
        self.written = []
        self.added = []

    def write_back_hit_points(self, monster_id, hit_points):
        if self.fail:
            raise self.fail
        self.written.append((monster_id, hit_points))
        return {"id": monster_id, "currentHp": hit_points}

    def add_captured_monster(self, player_id, species_id, nickname=None):
        self.added.append((player_id, species_id))
        return {"id": "new-1", "speciesId": species_id}

def make_wild(hp: int = 35, max_hp: int = 35) -> Combatant:
    return Combatant("electric_mouse", "Electric Mouse", "⚡", hp, max_hp)

def make_player(hp: int = 40, max_hp: int = 40, nickname: Optional[str] = "Ember") -> Combatant:
    return Combatant("fire_lizard", "Fire Lizard", "🔥", hp, max_hp, id="mon-1", nickname=nickname)

def make_session(wild: Optional[Combatant] = None, player: Optional[Combatant] = None,
                 turn_owner: Side = Side.PLAYER) -> BattleSession:
    return BattleSession(wild=wild or make_wild(), player=player or make_player(), turn_owner=turn_owner)
