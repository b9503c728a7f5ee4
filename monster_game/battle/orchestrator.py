"""Encounter lifecycle.

EncounterOrchestrator owns one BattleSession from start to hand-off:

    UNINITIALIZED -> LOADING -> ONGOING -> RESOLVING -> DONE

A stored session is resumed as-is; otherwise both seed combatants are
required. While ONGOING the player acts through `submit` and the wild side
acts on a timer. Every transition runs under the `processing` flag and is
persisted before the flag drops. The first terminal snapshot schedules the
finalisation, which hands the BattleResult to the reward processor and clears
the stored session whether or not the hand-off succeeds.
"""
from __future__ import annotations
from enum import Enum
from typing import Callable, List, Optional

from monster_game.core.errors import EncounterSetupError, RewardError
from monster_game.core.logging import logger
from monster_game.core.rng import Dice
from monster_game.core.scheduler import ScheduledTask, TimerQueue
from .actions import CAPTURE_RATE, apply_action, build_result, initialize_session
from .encounter import EncounterSeed
from .models import Action, BattleResult, BattleSession, Side
from .rewards import RewardOutcome, RewardProcessor
from .store import BattleSessionStore

OPPONENT_DELAY = 1.5
FINALIZE_DELAY = 2.0


class Phase(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    ONGOING = "ongoing"
    RESOLVING = "resolving"
    DONE = "done"


class EncounterOrchestrator:
    def __init__(self, store: BattleSessionStore, scheduler: TimerQueue, rng: Dice,
                 rewards: Optional[RewardProcessor] = None, *,
                 opponent_delay: float = OPPONENT_DELAY,
                 finalize_delay: float = FINALIZE_DELAY,
                 capture_rate: float = CAPTURE_RATE):
        self.store = store
        self.scheduler = scheduler
        self.rng = rng
        self.rewards = rewards
        self.opponent_delay = opponent_delay
        self.finalize_delay = finalize_delay
        self.capture_rate = capture_rate

        self.phase = Phase.UNINITIALIZED
        self.session: Optional[BattleSession] = None
        self.processing = False
        self.result: Optional[BattleResult] = None
        self.reward: Optional[RewardOutcome] = None
        self.error: Optional[RewardError] = None
        self._pending: Optional[ScheduledTask] = None
        self._listeners: List[Callable[[BattleSession], None]] = []

    def on_change(self, fn: Callable[[BattleSession], None]):
        self._listeners.append(fn)

    def _notify(self):
        if self.session is None:
            return
        for fn in self._listeners:
            fn(self.session)

    @property
    def done(self) -> bool:
        return self.phase is Phase.DONE

    @property
    def awaiting_player(self) -> bool:
        s = self.session
        return (self.phase is Phase.ONGOING and not self.processing and s is not None
                and s.ongoing and s.turn_owner is Side.PLAYER)

    # --- Lifecycle ---
    def start(self, seed: Optional[EncounterSeed] = None) -> BattleSession:
        if self.phase is not Phase.UNINITIALIZED:
            raise RuntimeError(f"orchestrator already started (phase={self.phase.value})")
        self.phase = Phase.LOADING
        session = self.store.load()
        if session is not None:
            logger.info("BattleResumed", battle=session.id, status=session.status.value,
                        turn=session.turn_owner.value)
        else:
            if seed is None or not seed.complete:
                self.phase = Phase.DONE
                missing = [name for name, c in (("wild", seed and seed.wild), ("player", seed and seed.player)) if c is None]
                logger.error("EncounterSetupFailed", missing=",".join(missing))
                raise EncounterSetupError(f"Cannot start battle: missing {' and '.join(missing)} combatant")
            session = initialize_session(seed.wild, seed.player, self.rng)
            self.store.save(session)
            logger.info("BattleStarted", battle=session.id, wild=session.wild.species_id,
                        player=session.player.id, first=session.turn_owner.value)
        self.session = session
        self.phase = Phase.ONGOING
        self._notify()
        self._schedule_next()
        return session

    def submit(self, action: Action) -> bool:
        """Apply a player action. Returns False when the action is ignored.

        Escape is also accepted while the wild side is deliberating; its pending
        attack is cancelled.
        """
        action = Action(action)
        if self.awaiting_player:
            self._transition(action, Side.PLAYER)
            return True
        s = self.session
        if (action is Action.ESCAPE and self.phase is Phase.ONGOING and not self.processing
                and s is not None and s.ongoing and s.turn_owner is Side.WILD):
            self._cancel_pending()
            self._transition(action, Side.PLAYER)
            return True
        logger.debug("ActionIgnored", action=action.value, phase=self.phase.value, processing=self.processing)
        return False

    def abandon(self) -> None:
        """Leave mid-battle: nothing is rewarded and the battle cannot be resumed."""
        self._cancel_pending()
        if self.phase in (Phase.UNINITIALIZED, Phase.DONE):
            return
        self.store.clear()
        self.phase = Phase.DONE
        logger.info("BattleAbandoned", battle=self.session.id if self.session else "-")

    def teardown(self) -> None:
        """Drop pending timers; the stored session stays resumable."""
        self._cancel_pending()

    # --- Internals ---
    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _transition(self, action: Action, actor: Side):
        assert self.session is not None
        self.processing = True
        try:
            new, outcome = apply_action(self.session, action, self.rng, actor=actor,
                                        capture_rate=self.capture_rate)
            self.session = new
            self.store.save(new)
        finally:
            self.processing = False
        logger.debug("ActionResolved", actor=actor.value, action=action.value,
                     outcome=outcome.value, status=new.status.value, turn=new.turn_count)
        self._notify()
        self._schedule_next()

    def _schedule_next(self):
        s = self.session
        if self.phase is not Phase.ONGOING or s is None:
            return
        if s.status.terminal:
            self._pending = self.scheduler.call_later(self.finalize_delay, self._finalize, "finalize")
        elif s.turn_owner is Side.WILD:
            self._pending = self.scheduler.call_later(self.opponent_delay, self._wild_turn, "wild-turn")

    def _wild_turn(self):
        self._pending = None
        s = self.session
        if (self.phase is not Phase.ONGOING or self.processing or s is None
                or not s.ongoing or s.turn_owner is not Side.WILD):
            return
        self._transition(Action.ATTACK, Side.WILD)

    def _finalize(self):
        self._pending = None
        if self.phase is not Phase.ONGOING or self.session is None:
            return
        self.phase = Phase.RESOLVING
        result = build_result(self.session)
        self.result = result
        self.store.save_result(result)
        try:
            if self.rewards is not None:
                self.reward = self.rewards.process(result)
        except RewardError as e:
            self.error = e
            raise
        finally:
            self.store.clear()
            self.phase = Phase.DONE
        logger.info("BattleFinished", battle=self.session.id, status=result.status.value,
                    turns=result.total_turns)
