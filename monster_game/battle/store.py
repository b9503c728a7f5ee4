"""Battle session persistence.

Keeps the current BattleSession in the `current_battle` slot so an
in-progress battle survives a restart. Persistence is best effort: a failed
write only costs resume-after-restart, and unreadable data is treated as no
saved battle at all.
"""
from __future__ import annotations
import json
from typing import Optional

from monster_game.core.logging import logger
from monster_game.system.storage import SessionStorage
from .models import BattleResult, BattleSession

BATTLE_KEY = "current_battle"
RESULT_KEY = "battle_result"

_MALFORMED = (ValueError, KeyError, TypeError, AttributeError)

class BattleSessionStore:
    def __init__(self, storage: SessionStorage):
        self.storage = storage

    def save(self, session: BattleSession) -> bool:
        try:
            self.storage.set_item(BATTLE_KEY, json.dumps(session.to_json(), ensure_ascii=False))
        except (OSError, TypeError, ValueError) as e:
            logger.warn("BattleSaveFailed", battle=session.id, error=str(e))
            return False
        return True

    def load(self) -> Optional[BattleSession]:
        try:
            raw = self.storage.get_item(BATTLE_KEY)
        except (OSError, ValueError) as e:
            logger.warn("BattleLoadFailed", error=str(e))
            return None
        if raw is None:
            return None
        try:
            session = BattleSession.from_json(json.loads(raw))
        except _MALFORMED as e:
            logger.warn("BattleSlotMalformed", error=str(e))
            return None
        logger.debug("BattleRestored", battle=session.id, status=session.status.value)
        return session

    def clear(self) -> None:
        try:
            self.storage.remove_item(BATTLE_KEY)
        except OSError as e:
            logger.warn("BattleClearFailed", error=str(e))

    # Result slot read by a results screen after the battle has been cleared
    def save_result(self, result: BattleResult) -> bool:
        try:
            self.storage.set_item(RESULT_KEY, json.dumps(result.to_json(), ensure_ascii=False))
        except (OSError, TypeError, ValueError) as e:
            logger.warn("BattleResultSaveFailed", error=str(e))
            return False
        return True

    def load_result(self) -> Optional[BattleResult]:
        try:
            raw = self.storage.get_item(RESULT_KEY)
            return BattleResult.from_json(json.loads(raw)) if raw is not None else None
        except (OSError,) + _MALFORMED as e:
            logger.warn("BattleResultSlotMalformed", error=str(e))
            return None

    def clear_result(self) -> None:
        try:
            self.storage.remove_item(RESULT_KEY)
        except OSError as e:
            logger.warn("BattleResultClearFailed", error=str(e))
