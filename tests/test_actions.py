import pytest

from helpers import ScriptedDice, make_player, make_session, make_wild
from monster_game.battle.actions import (PLAYER_ATTACK_DAMAGE, WILD_ATTACK_DAMAGE, ActionOutcome, apply_action,
                                         build_result, capture_eligible, initialize_session)
from monster_game.battle.models import Action, BattleStatus, LogCategory, Side


def categories(session):
    return [e.category for e in session.log]


def test_initialize_session_opening_log():
    s = initialize_session(make_wild(), make_player(), ScriptedDice())
    assert s.turn_owner is Side.PLAYER
    assert s.status is BattleStatus.ONGOING
    assert s.turn_count == 1
    assert categories(s) == [LogCategory.INFO, LogCategory.INFO]
    assert "Electric Mouse" in s.log[0].message
    assert "Ember" in s.log[1].message
    assert s.id.startswith("battle-")
    assert len({e.id for e in s.log}) == 2


@pytest.mark.parametrize("hp", [1, 5, 10, 11, 35])
def test_player_attack_damage_is_clamped(hp):
    s = make_session(wild=make_wild(hp=hp))
    out, _ = apply_action(s, Action.ATTACK, ScriptedDice(), actor=Side.PLAYER)
    assert out.wild.current_hp == max(0, hp - PLAYER_ATTACK_DAMAGE)


@pytest.mark.parametrize("hp", [1, 8, 9, 40])
def test_wild_attack_damage_is_clamped(hp):
    s = make_session(player=make_player(hp=hp), turn_owner=Side.WILD)
    out, _ = apply_action(s, Action.ATTACK, ScriptedDice())
    assert out.player.current_hp == max(0, hp - WILD_ATTACK_DAMAGE)


def test_three_player_attacks():
    s = initialize_session(make_wild(), make_player(), ScriptedDice())
    for _ in range(3):
        s, outcome = apply_action(s, Action.ATTACK, ScriptedDice(), actor=Side.PLAYER)
        assert outcome is ActionOutcome.HIT
    assert (s.wild.current_hp, s.wild.max_hp) == (5, 35)
    assert s.status is BattleStatus.ONGOING
    assert s.turn_count == 3
    assert len(s.log) == 8
    assert categories(s)[2:] == [LogCategory.ATTACK, LogCategory.DAMAGE] * 3


def test_player_knockout_is_victory():
    s = make_session(wild=make_wild(hp=10))
    out, outcome = apply_action(s, Action.ATTACK, ScriptedDice())
    assert outcome is ActionOutcome.KNOCKED_OUT
    assert out.status is BattleStatus.VICTORY
    assert out.wild.current_hp == 0
    assert out.log[-1].category is LogCategory.VICTORY
    assert out.turn_owner is Side.PLAYER


def test_wild_knockout_is_defeat():
    s = make_session(player=make_player(hp=8), turn_owner=Side.WILD)
    out, outcome = apply_action(s, Action.ATTACK, ScriptedDice())
    assert outcome is ActionOutcome.KNOCKED_OUT
    assert out.status is BattleStatus.DEFEAT
    assert out.player.current_hp == 0
    assert out.log[-1].category is LogCategory.DEFEAT
    assert out.turn_owner is Side.WILD


def test_forced_capture_success():
    s = make_session(wild=make_wild(hp=15))
    out, outcome = apply_action(s, Action.CAPTURE, ScriptedDice([0.0]))
    assert outcome is ActionOutcome.CAPTURED
    assert out.status is BattleStatus.CAPTURED
    assert categories(out)[-2:] == [LogCategory.CAPTURE, LogCategory.VICTORY]
    assert out.turn_owner is Side.PLAYER


def test_failed_capture_passes_the_turn():
    s = make_session(wild=make_wild(hp=15))
    out, outcome = apply_action(s, Action.CAPTURE, ScriptedDice([0.9]), capture_rate=0.5)
    assert outcome is ActionOutcome.CAPTURE_FAILED
    assert out.status is BattleStatus.ONGOING
    assert categories(out) == [LogCategory.CAPTURE, LogCategory.INFO]
    assert out.turn_owner is Side.WILD


def test_ineligible_capture_counts_as_an_action():
    dice = ScriptedDice([0.0])
    s = make_session(wild=make_wild(hp=18))
    out, outcome = apply_action(s, Action.CAPTURE, dice)
    assert outcome is ActionOutcome.CAPTURE_INELIGIBLE
    assert dice.calls == 0
    assert categories(out) == [LogCategory.INFO]
    assert out.wild == s.wild
    assert out.turn_owner is Side.WILD
    assert out.player_actions == 1


def test_escape_is_immediate():
    s = make_session(turn_owner=Side.WILD)
    out, outcome = apply_action(s, Action.ESCAPE, ScriptedDice(), actor=Side.PLAYER)
    assert outcome is ActionOutcome.ESCAPED
    assert out.status is BattleStatus.ESCAPED
    assert out.log[-1].category is LogCategory.ESCAPE
    assert out.turn_owner is Side.WILD


def test_terminal_status_never_changes():
    s, _ = apply_action(make_session(), Action.ESCAPE, ScriptedDice())
    for action in Action:
        for actor in (Side.PLAYER, Side.WILD):
            out, outcome = apply_action(s, action, ScriptedDice([0.0]), actor=actor)
            assert out is s
            assert outcome is ActionOutcome.NOT_APPLIED


@pytest.mark.parametrize("action", [Action.CAPTURE, Action.ESCAPE])
def test_wild_side_only_attacks(action):
    with pytest.raises(ValueError):
        apply_action(make_session(turn_owner=Side.WILD), action, ScriptedDice())


def test_turn_owner_alternates():
    s = make_session(wild=make_wild(hp=100, max_hp=100), player=make_player(hp=100, max_hp=100))
    owners = [s.turn_owner]
    for _ in range(8):
        s, _ = apply_action(s, Action.ATTACK, ScriptedDice())
        owners.append(s.turn_owner)
    assert all(a is not b for a, b in zip(owners, owners[1:]))
    assert s.turn_count == 4


def test_input_snapshot_is_untouched():
    s = make_session()
    before = s.to_json()
    apply_action(s, Action.ATTACK, ScriptedDice())
    assert s.to_json() == before


@pytest.mark.parametrize("max_hp", [1, 7, 35, 40])
def test_capture_eligibility_is_monotonic(max_hp):
    flags = [capture_eligible(make_wild(hp=h, max_hp=max_hp)) for h in range(max_hp + 1)]
    for h, ok in enumerate(flags):
        assert ok == (h <= max_hp / 2)
    # once ineligible, every higher hp stays ineligible
    first_no = flags.index(False) if False in flags else len(flags)
    assert all(flags[:first_no]) and not any(flags[first_no:])


def test_build_result_for_capture():
    s, _ = apply_action(make_session(wild=make_wild(hp=10)), Action.CAPTURE, ScriptedDice([0.0]))
    result = build_result(s)
    assert result.status is BattleStatus.CAPTURED
    assert result.captured.species_id == "electric_mouse"
    assert result.captured.nickname == "Electric Mouse"
    assert result.captured.current_hp == 10
    assert result.total_turns == 1
    assert result.log == s.log


def test_build_result_without_capture():
    s, _ = apply_action(make_session(), Action.ESCAPE, ScriptedDice())
    assert build_result(s).captured is None
