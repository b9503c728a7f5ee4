"""Action resolution.

`apply_action` is a pure transition: it takes a BattleSession snapshot and
returns a new one plus an ActionOutcome describing what happened. Damage is
fixed per side and never scales; capture is gated on the wild combatant being
at or below half of its hit points and then rolled against `capture_rate`.
"""
from __future__ import annotations
from dataclasses import replace
from enum import Enum
from typing import Optional, Tuple

from monster_game.core.rng import Dice
from .models import (Action, BattleResult, BattleSession, BattleStatus, CaptureRecord,
                     Combatant, LogCategory, LogEntry, Side)
from .turns import decide_first_turn, other_side

PLAYER_ATTACK_DAMAGE = 10
WILD_ATTACK_DAMAGE = 8
CAPTURE_RATE = 0.5


class ActionOutcome(str, Enum):
    HIT = "hit"
    KNOCKED_OUT = "knocked_out"
    CAPTURE_INELIGIBLE = "capture_ineligible"
    CAPTURE_FAILED = "capture_failed"
    CAPTURED = "captured"
    ESCAPED = "escaped"
    NOT_APPLIED = "not_applied"


def make_log_entry(message: str, category: LogCategory) -> LogEntry:
    return LogEntry(message=message, category=category)

def attack_damage(attacker: Side) -> int:
    return PLAYER_ATTACK_DAMAGE if attacker is Side.PLAYER else WILD_ATTACK_DAMAGE

def capture_eligible(wild: Combatant) -> bool:
    # integer form of current_hp <= max_hp / 2
    return wild.current_hp * 2 <= wild.max_hp


def initialize_session(wild: Combatant, player: Combatant, rng: Dice) -> BattleSession:
    first = decide_first_turn(player.current_hp, wild.current_hp, rng)
    opener = (f"{player.display_name} moves first!" if first is Side.PLAYER
              else f"The wild {wild.species_name} moves first!")
    return BattleSession(
        wild=wild,
        player=player,
        turn_owner=first,
        log=(
            make_log_entry(f"A wild {wild.species_name} appeared!", LogCategory.INFO),
            make_log_entry(opener, LogCategory.INFO),
        ),
    )


def _attack(session: BattleSession, actor: Side) -> Tuple[BattleSession, ActionOutcome]:
    damage = attack_damage(actor)
    if actor is Side.PLAYER:
        target = session.wild.with_hp(session.wild.current_hp - damage)
        s = replace(session, wild=target).with_log(
            make_log_entry(f"{session.player.display_name} attacks!", LogCategory.ATTACK),
            make_log_entry(f"The wild {target.species_name} takes {damage} damage!", LogCategory.DAMAGE),
        )
        if target.fainted:
            s = replace(s, status=BattleStatus.VICTORY).with_log(
                make_log_entry(f"The wild {target.species_name} was defeated!", LogCategory.VICTORY))
            return s, ActionOutcome.KNOCKED_OUT
        return s, ActionOutcome.HIT
    target = session.player.with_hp(session.player.current_hp - damage)
    s = replace(session, player=target).with_log(
        make_log_entry(f"The wild {session.wild.species_name} attacks!", LogCategory.ATTACK),
        make_log_entry(f"{target.display_name} takes {damage} damage!", LogCategory.DAMAGE),
    )
    if target.fainted:
        s = replace(s, status=BattleStatus.DEFEAT).with_log(
            make_log_entry(f"{target.display_name} fainted...", LogCategory.DEFEAT))
        return s, ActionOutcome.KNOCKED_OUT
    return s, ActionOutcome.HIT

def _capture(session: BattleSession, rng: Dice, capture_rate: float) -> Tuple[BattleSession, ActionOutcome]:
    wild = session.wild
    if not capture_eligible(wild):
        return session.with_log(make_log_entry(
            f"The wild {wild.species_name} is too strong to catch. Wear it down first!",
            LogCategory.INFO)), ActionOutcome.CAPTURE_INELIGIBLE
    attempt = make_log_entry("You threw a capture ball...", LogCategory.CAPTURE)
    if rng.chance(capture_rate):
        s = replace(session, status=BattleStatus.CAPTURED).with_log(
            attempt, make_log_entry(f"Caught the wild {wild.species_name}!", LogCategory.VICTORY))
        return s, ActionOutcome.CAPTURED
    return session.with_log(
        attempt, make_log_entry("Oh no! It broke free...", LogCategory.INFO)), ActionOutcome.CAPTURE_FAILED

def _escape(session: BattleSession) -> Tuple[BattleSession, ActionOutcome]:
    s = replace(session, status=BattleStatus.ESCAPED).with_log(
        make_log_entry("Got away safely!", LogCategory.ESCAPE))
    return s, ActionOutcome.ESCAPED


def apply_action(session: BattleSession, action: Action, rng: Dice, *,
                 actor: Optional[Side] = None,
                 capture_rate: float = CAPTURE_RATE) -> Tuple[BattleSession, ActionOutcome]:
    """Resolve one action for `actor` (defaults to the turn owner).

    The wild side only ever attacks. Terminal sessions are returned unchanged.
    """
    if session.status.terminal:
        return session, ActionOutcome.NOT_APPLIED
    actor = actor or session.turn_owner
    action = Action(action)
    if actor is Side.WILD and action is not Action.ATTACK:
        raise ValueError(f"wild side cannot {action.value}")

    if action is Action.ATTACK:
        result, outcome = _attack(session, actor)
    elif action is Action.CAPTURE:
        result, outcome = _capture(session, rng, capture_rate)
    else:
        result, outcome = _escape(session)

    if actor is Side.PLAYER:
        acted = result.player_actions + 1
        result = replace(result, player_actions=acted, turn_count=max(1, acted))
    if result.ongoing:
        result = replace(result, turn_owner=other_side(actor))
    return result, outcome


def build_result(session: BattleSession) -> BattleResult:
    captured = CaptureRecord.from_combatant(session.wild) if session.status is BattleStatus.CAPTURED else None
    return BattleResult(
        status=session.status,
        player=session.player,
        total_turns=session.turn_count,
        log=session.log,
        captured=captured,
    )

__all__ = [
    "ActionOutcome", "apply_action", "attack_damage", "build_result", "capture_eligible",
    "initialize_session", "make_log_entry", "PLAYER_ATTACK_DAMAGE", "WILD_ATTACK_DAMAGE", "CAPTURE_RATE",
]
