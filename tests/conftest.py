from __future__ import annotations

import pytest

from monster_game.data.species import Species, SpeciesCatalog
from monster_game.system.storage import SessionStorage


@pytest.fixture
def catalog() -> SpeciesCatalog:
    return SpeciesCatalog([
        Species("electric_mouse", "Electric Mouse", 35, "⚡"),
        Species("fire_lizard", "Fire Lizard", 40, "🔥"),
        Species("big_golem", "Big Golem", 100, "🗿"),
    ])


@pytest.fixture
def storage(tmp_path) -> SessionStorage:
    return SessionStorage(tmp_path / "session")
