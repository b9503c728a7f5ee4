import json

import pytest

from monster_game.core.errors import DataLoadError
from monster_game.data.species import DEFAULT_ICON, Species, SpeciesCatalog, default_catalog, load_catalog


def test_default_catalog_contents():
    cat = default_catalog()
    assert len(cat) == 5
    mouse = cat.lookup_by_id("electric_mouse")
    assert mouse.base_hp == 35
    assert mouse.name == "Electric Mouse"
    assert cat.lookup_by_id("rock_snake").base_hp == 50


def test_lookup_by_name_is_case_insensitive(catalog):
    assert catalog.lookup_by_name("  FIRE lizard ").id == "fire_lizard"
    assert catalog.lookup_by_name("nobody") is None
    assert catalog.lookup_by_id("nobody") is None


def test_species_from_api_payload():
    sp = Species.from_json({"id": "x", "name": "X", "baseHp": 12})
    assert sp.base_hp == 12
    assert sp.icon == DEFAULT_ICON


@pytest.mark.parametrize("payload", [
    {"id": "x", "name": "X", "base_hp": 0},
    {"id": "x", "name": "X", "base_hp": "10"},
    {"id": "x", "name": "X", "base_hp": True},
    {"id": "", "name": "X", "base_hp": 10},
])
def test_species_rejects_bad_entries(payload):
    with pytest.raises(ValueError):
        Species.from_json(payload)


def test_load_catalog_reports_bad_file(tmp_path):
    bad = tmp_path / "species.json"
    bad.write_text("{oops")
    with pytest.raises(DataLoadError):
        load_catalog(bad)
    with pytest.raises(DataLoadError):
        load_catalog(tmp_path / "missing.json")


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "species.json"
    path.write_text(json.dumps([{"id": "a", "name": "A", "base_hp": 5, "icon": "*"}]))
    cat = load_catalog(path)
    assert "a" in cat
    assert cat.all() == (Species("a", "A", 5, "*"),)


def test_empty_catalog():
    assert SpeciesCatalog([]).all() == ()
