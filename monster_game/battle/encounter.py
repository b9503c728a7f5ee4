"""Encounter seeding.

The map side decides when an encounter happens and hands over the wild
species id plus the roster entry the player sends out. This module turns that
trigger into the two seed combatants the orchestrator needs, and can stash the
seed in the `battle_init` slot between screens.
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from monster_game.core.logging import logger
from monster_game.data.species import SpeciesCatalog
from monster_game.system.storage import SessionStorage
from .factory import convert_roster_entry, create_wild_combatant
from .models import Combatant

SEED_KEY = "battle_init"

@dataclass(frozen=True)
class EncounterSeed:
    wild: Optional[Combatant]
    player: Optional[Combatant]

    @property
    def complete(self) -> bool:
        return self.wild is not None and self.player is not None

def seed_from_trigger(catalog: SpeciesCatalog, roster: Iterable[Mapping[str, Any]],
                      wild_species_id: str, monster_id: str) -> EncounterSeed:
    wild = create_wild_combatant(wild_species_id, catalog)
    entry = next((m for m in roster if isinstance(m, Mapping) and m.get("id") == monster_id), None)
    if entry is None:
        logger.warn("RosterEntryNotFound", monster_id=monster_id)
    player = convert_roster_entry(entry, catalog) if entry is not None else None
    return EncounterSeed(wild=wild, player=player)

def save_seed(storage: SessionStorage, seed: EncounterSeed) -> None:
    payload = {
        "wild": seed.wild.to_json() if seed.wild else None,
        "player": seed.player.to_json() if seed.player else None,
    }
    storage.set_item(SEED_KEY, json.dumps(payload, ensure_ascii=False))

def load_seed(storage: SessionStorage) -> Optional[EncounterSeed]:
    raw = storage.get_item(SEED_KEY)
    if raw is None:
        return None
    try:
        data = json.loads(raw)
        wild = Combatant.from_json(data["wild"]) if data.get("wild") else None
        player = Combatant.from_json(data["player"]) if data.get("player") else None
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warn("EncounterSeedMalformed", error=str(e))
        return None
    return EncounterSeed(wild=wild, player=player)

def clear_seed(storage: SessionStorage) -> None:
    storage.remove_item(SEED_KEY)
