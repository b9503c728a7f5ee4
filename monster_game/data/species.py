"""Species catalog.

Read-only reference data: species id -> display name, base hit points and icon.
The default catalog is loaded once from assets/species.json; tests and the
remote API path can build a catalog from any iterable of Species.
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from monster_game.core.errors import DataLoadError
from monster_game.core.paths import SPECIES_FILE

DEFAULT_ICON = "🎮"

@dataclass(frozen=True)
class Species:
    id: str
    name: str
    base_hp: int
    icon: str = DEFAULT_ICON
    rarity: str = "common"
    description: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Species":
        # API payloads use camelCase baseHp, the bundled asset uses base_hp
        base_hp = data.get("base_hp", data.get("baseHp"))
        if not isinstance(base_hp, int) or isinstance(base_hp, bool) or base_hp <= 0:
            raise ValueError(f"species {data.get('id')!r} has invalid base hp {base_hp!r}")
        sid = data.get("id")
        name = data.get("name")
        if not sid or not name:
            raise ValueError("species entry needs both id and name")
        return cls(
            id=str(sid),
            name=str(name),
            base_hp=base_hp,
            icon=data.get("icon") or DEFAULT_ICON,
            rarity=data.get("rarity", "common"),
            description=data.get("description", ""),
        )


class SpeciesCatalog:
    def __init__(self, species: Iterable[Species]):
        self._by_id: Dict[str, Species] = {}
        for sp in species:
            self._by_id[sp.id] = sp
        self._by_name = {sp.name.lower(): sp for sp in self._by_id.values()}

    def lookup_by_id(self, species_id: str) -> Optional[Species]:
        return self._by_id.get(species_id)

    def lookup_by_name(self, name: str) -> Optional[Species]:
        return self._by_name.get(str(name).strip().lower())

    def all(self) -> Tuple[Species, ...]:
        return tuple(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, species_id: object) -> bool:
        return species_id in self._by_id


def load_catalog(path: Path) -> SpeciesCatalog:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return SpeciesCatalog(Species.from_json(item) for item in raw)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        raise DataLoadError(str(path), str(e)) from e


@lru_cache(maxsize=None)
def default_catalog() -> SpeciesCatalog:
    return load_catalog(SPECIES_FILE)


# Simple CLI for debugging
if __name__ == "__main__":
    for sp in default_catalog().all():
        print(f"{sp.icon} {sp.id:<16} {sp.name:<16} HP {sp.base_hp}")
