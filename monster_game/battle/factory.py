"""Factory helpers for constructing Combatant instances.

Wild combatants come from the species catalog; player combatants come from
roster entries returned by the remote API. Roster payloads are loosely typed,
so they are validated here and anything that does not fit the Combatant shape
is rejected (None) before a battle can start from it.
"""
from __future__ import annotations
from typing import Any, Mapping, Optional

from monster_game.core.errors import EncounterSetupError
from monster_game.core.logging import logger
from monster_game.core.rng import Dice
from monster_game.data.species import DEFAULT_ICON, Species, SpeciesCatalog
from .models import Combatant

def _wild_from_species(species: Species) -> Combatant:
    return Combatant(
        species_id=species.id,
        species_name=species.name,
        icon=species.icon,
        current_hp=species.base_hp,
        max_hp=species.base_hp,
    )

def create_wild_combatant(species_id: str, catalog: SpeciesCatalog) -> Optional[Combatant]:
    species = catalog.lookup_by_id(species_id)
    if species is None:
        logger.warn("SpeciesNotFound", species_id=species_id)
        return None
    return _wild_from_species(species)

def create_random_wild_combatant(catalog: SpeciesCatalog, rng: Dice) -> Combatant:
    pool = catalog.all()
    if not pool:
        raise EncounterSetupError("Species catalog is empty")
    return _wild_from_species(rng.choice(pool))


def _field(entry: Mapping[str, Any], *names: str) -> Any:
    for n in names:
        if n in entry:
            return entry[n]
    return None

def _is_hp(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

def convert_roster_entry(entry: Any, catalog: SpeciesCatalog) -> Optional[Combatant]:
    """Turn an owned-monster payload into the player's Combatant, or None if invalid."""
    if not isinstance(entry, Mapping):
        logger.error("RosterEntryInvalid", reason="not a mapping")
        return None
    monster_id = _field(entry, "id")
    species_id = _field(entry, "speciesId", "species_id")
    if not isinstance(monster_id, str) or not monster_id or not isinstance(species_id, str) or not species_id:
        logger.error("RosterEntryInvalid", reason="missing id or species id", id=monster_id, species_id=species_id)
        return None
    current_hp = _field(entry, "currentHp", "current_hp")
    max_hp = _field(entry, "maxHp", "max_hp")
    if not _is_hp(current_hp) or not _is_hp(max_hp):
        logger.error("RosterEntryInvalid", reason="hp not an integer", current_hp=current_hp, max_hp=max_hp)
        return None
    if current_hp < 0 or max_hp <= 0 or current_hp > max_hp:
        logger.error("RosterEntryInvalid", reason="hp out of range", current_hp=current_hp, max_hp=max_hp)
        return None

    # Species name: roster-supplied info first, then the catalog by id
    name = ""
    info = _field(entry, "species")
    if isinstance(info, Mapping):
        name = str(info.get("name") or "")
    if not name:
        name = str(_field(entry, "speciesName", "species_name") or "")

    icon = DEFAULT_ICON
    if not name:
        species = catalog.lookup_by_id(species_id)
        if species is None:
            logger.error("RosterEntryInvalid", reason="unknown species", species_id=species_id)
            return None
        name, icon = species.name, species.icon
    else:
        species = catalog.lookup_by_id(species_id) or catalog.lookup_by_name(name)
        if species is not None:
            icon = species.icon
        else:
            logger.warn("SpeciesIconMissing", species_name=name)

    nickname = _field(entry, "nickname")
    return Combatant(
        id=monster_id,
        species_id=species_id,
        species_name=name,
        icon=icon,
        nickname=nickname if isinstance(nickname, str) and nickname else None,
        current_hp=current_hp,
        max_hp=max_hp,
    )

__all__ = ["create_wild_combatant", "create_random_wild_combatant", "convert_roster_entry"]
