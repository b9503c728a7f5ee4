import json
from dataclasses import replace

from helpers import make_session
from monster_game.battle.actions import build_result
from monster_game.battle.models import BattleStatus
from monster_game.battle.store import BATTLE_KEY, RESULT_KEY, BattleSessionStore
from monster_game.system.storage import SessionStorage


def test_session_round_trip(storage):
    store = BattleSessionStore(storage)
    session = make_session()
    assert store.save(session)
    assert store.load() == session


def test_empty_slot_loads_none(storage):
    assert BattleSessionStore(storage).load() is None


def test_corrupt_slot_is_treated_as_absent(storage, capsys):
    storage.set_item(BATTLE_KEY, "{not json")
    assert BattleSessionStore(storage).load() is None
    assert "BattleSlotMalformed" in capsys.readouterr().out


def test_invalid_snapshot_is_treated_as_absent(storage):
    data = make_session().to_json()
    data["turn_count"] = 0
    storage.set_item(BATTLE_KEY, json.dumps(data))
    assert BattleSessionStore(storage).load() is None

    data = make_session().to_json()
    data["wild"]["current_hp"] = "35"
    storage.set_item(BATTLE_KEY, json.dumps(data))
    assert BattleSessionStore(storage).load() is None


def test_clear_removes_the_slot(storage):
    store = BattleSessionStore(storage)
    store.save(make_session())
    store.clear()
    assert store.load() is None
    assert BATTLE_KEY not in storage.keys()
    store.clear()  # already gone


def test_failed_write_is_reported_not_raised(tmp_path, capsys):
    blocker = tmp_path / "blocked"
    blocker.write_text("x")
    store = BattleSessionStore(SessionStorage(blocker))
    assert store.save(make_session()) is False
    assert "BattleSaveFailed" in capsys.readouterr().out


def test_result_slot(storage):
    store = BattleSessionStore(storage)
    session = make_session()
    result = build_result(replace(session, status=BattleStatus.VICTORY))
    assert store.save_result(result)
    assert RESULT_KEY in storage.keys()
    assert store.load_result() == result
    store.clear_result()
    assert store.load_result() is None


def test_mistyped_names_are_treated_as_absent(storage):
    store = BattleSessionStore(storage)
    for side, key, value in [("wild", "species_name", None), ("wild", "icon", 7),
                             ("player", "id", 42), ("player", "nickname", ["Ember"])]:
        data = make_session().to_json()
        data[side][key] = value
        storage.set_item(BATTLE_KEY, json.dumps(data))
        assert store.load() is None, (side, key)


def test_storage_clear_drops_every_slot(storage):
    storage.set_item("current_battle", "{}")
    storage.set_item("battle_init", "{}")
    assert storage.keys() == ["battle_init", "current_battle"]
    storage.clear()
    assert storage.keys() == []
    assert storage.get_item("battle_init") is None
