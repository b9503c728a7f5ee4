"""Post-battle hand-off to the roster service.

victory / captured: the player's monster keeps the hit points it ended with;
captured additionally adds the wild species to the roster.
defeat: the monster is revived to full hit points.
escaped: nothing is written.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import requests

from monster_game.core.errors import ApiError, RewardError
from monster_game.core.logging import logger
from .models import BattleResult, BattleStatus

class RosterGateway(Protocol):
    def write_back_hit_points(self, monster_id: str, hit_points: int) -> Any: ...
    def add_captured_monster(self, player_id: str, species_id: str, nickname: Optional[str] = None) -> Dict[str, Any]: ...

@dataclass(frozen=True)
class RewardOutcome:
    status: BattleStatus
    written_hp: Optional[int] = None
    new_entry: Optional[Dict[str, Any]] = None

class RewardProcessor:
    def __init__(self, roster: RosterGateway, player_id: str):
        self.roster = roster
        self.player_id = player_id

    def process(self, result: BattleResult) -> RewardOutcome:
        status = result.status
        player = result.player
        if status is BattleStatus.ESCAPED:
            return RewardOutcome(status)
        if status is BattleStatus.ONGOING:
            raise ValueError("cannot process rewards for an ongoing battle")
        hp = player.max_hp if status is BattleStatus.DEFEAT else player.current_hp
        new_entry = None
        try:
            self.roster.write_back_hit_points(player.id, hp)
            if status is BattleStatus.CAPTURED and result.captured is not None:
                new_entry = self.roster.add_captured_monster(self.player_id, result.captured.species_id)
        except (ApiError, requests.RequestException) as e:
            logger.error("RewardHandoffFailed", status=status.value, error=str(e))
            raise RewardError(status.value, str(e)) from e
        logger.info("RewardsProcessed", status=status.value, monster=player.id, hp=hp)
        return RewardOutcome(status, written_hp=hp, new_entry=new_entry)
