"""
Error classes for clearer exception sources.
"""
from __future__ import annotations
from typing import Any

class MonsterGameError(Exception):
    pass

class DataLoadError(MonsterGameError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class EncounterSetupError(MonsterGameError):
    """Raised when a battle cannot start (missing or invalid seed combatants)."""

class RewardError(MonsterGameError):
    """Raised when the post-battle hand-off to the roster service fails."""
    def __init__(self, status: str, detail: str):
        super().__init__(f"Reward processing for '{status}' failed: {detail}")
        self.status = status
        self.detail = detail

class ApiError(MonsterGameError):
    def __init__(self, status: int, message: str, payload: Any = None):
        super().__init__(f"[{status}] {message}")
        self.status = status
        self.message = message
        self.payload = payload
