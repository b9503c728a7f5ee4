"""Battle value types.

All battle state is immutable: resolvers return new snapshots through
`dataclasses.replace` instead of mutating in place. `to_json`/`from_json`
produce the opaque snapshot kept in the session slot; `from_json` is strict
and raises ValueError/KeyError/TypeError on anything malformed.
"""
from __future__ import annotations
import time
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class Side(str, Enum):
    PLAYER = "player"
    WILD = "wild"


class BattleStatus(str, Enum):
    ONGOING = "ongoing"
    VICTORY = "victory"
    DEFEAT = "defeat"
    CAPTURED = "captured"
    ESCAPED = "escaped"

    @property
    def terminal(self) -> bool:
        return self is not BattleStatus.ONGOING


class Action(str, Enum):
    ATTACK = "attack"
    CAPTURE = "capture"
    ESCAPE = "escape"


class LogCategory(str, Enum):
    INFO = "info"
    ATTACK = "attack"
    DAMAGE = "damage"
    CAPTURE = "capture"
    ESCAPE = "escape"
    VICTORY = "victory"
    DEFEAT = "defeat"


def _require_int(value: Any, name: str) -> int:
    # bool is an int subclass; a flag never stands in for hit points
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {value!r}")
    return value


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {value!r}")
    return value

def _optional_str(value: Any, name: str) -> Optional[str]:
    return None if value is None else _require_str(value, name)


@dataclass(frozen=True)
class Combatant:
    species_id: str
    species_name: str
    icon: str
    current_hp: int
    max_hp: int
    id: Optional[str] = None
    nickname: Optional[str] = None

    def __post_init__(self):
        if self.max_hp <= 0:
            raise ValueError(f"max_hp must be positive, got {self.max_hp}")
        if not 0 <= self.current_hp <= self.max_hp:
            raise ValueError(f"current_hp {self.current_hp} outside 0..{self.max_hp}")

    @property
    def display_name(self) -> str:
        return self.nickname or self.species_name

    @property
    def fainted(self) -> bool:
        return self.current_hp <= 0

    def with_hp(self, hp: int) -> "Combatant":
        return replace(self, current_hp=max(0, min(self.max_hp, hp)))

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "species_id": self.species_id,
            "species_name": self.species_name,
            "icon": self.icon,
            "nickname": self.nickname,
            "current_hp": self.current_hp,
            "max_hp": self.max_hp,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Combatant":
        return cls(
            species_id=_require_str(data["species_id"], "species_id"),
            species_name=_require_str(data["species_name"], "species_name"),
            icon=_require_str(data["icon"], "icon"),
            current_hp=_require_int(data["current_hp"], "current_hp"),
            max_hp=_require_int(data["max_hp"], "max_hp"),
            id=_optional_str(data.get("id"), "id"),
            nickname=_optional_str(data.get("nickname"), "nickname"),
        )


@dataclass(frozen=True)
class LogEntry:
    message: str
    category: LogCategory
    id: str = field(default_factory=lambda: f"log-{uuid.uuid4().hex}")
    timestamp: float = field(default_factory=time.time)

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "message": self.message,
                "category": self.category.value, "timestamp": self.timestamp}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "LogEntry":
        ts = data["timestamp"]
        if not isinstance(ts, (int, float)) or isinstance(ts, bool):
            raise TypeError(f"timestamp must be numeric, got {ts!r}")
        return cls(message=str(data["message"]), category=LogCategory(data["category"]),
                   id=str(data["id"]), timestamp=float(ts))


@dataclass(frozen=True)
class BattleSession:
    wild: Combatant
    player: Combatant
    turn_owner: Side
    status: BattleStatus = BattleStatus.ONGOING
    turn_count: int = 1
    player_actions: int = 0
    log: Tuple[LogEntry, ...] = ()
    id: str = field(default_factory=lambda: f"battle-{uuid.uuid4().hex}")

    @property
    def ongoing(self) -> bool:
        return self.status is BattleStatus.ONGOING

    def combatant(self, side: Side) -> Combatant:
        return self.player if side is Side.PLAYER else self.wild

    def with_log(self, *entries: LogEntry) -> "BattleSession":
        return replace(self, log=self.log + tuple(entries))

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "wild": self.wild.to_json(),
            "player": self.player.to_json(),
            "turn_owner": self.turn_owner.value,
            "status": self.status.value,
            "turn_count": self.turn_count,
            "player_actions": self.player_actions,
            "log": [e.to_json() for e in self.log],
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "BattleSession":
        turn_count = _require_int(data["turn_count"], "turn_count")
        if turn_count < 1:
            raise ValueError(f"turn_count must be >= 1, got {turn_count}")
        player = Combatant.from_json(data["player"])
        if not player.id:
            raise ValueError("player combatant has no id")
        return cls(
            id=str(data["id"]),
            wild=Combatant.from_json(data["wild"]),
            player=player,
            turn_owner=Side(data["turn_owner"]),
            status=BattleStatus(data["status"]),
            turn_count=turn_count,
            player_actions=_require_int(data.get("player_actions", 0), "player_actions"),
            log=tuple(LogEntry.from_json(e) for e in data["log"]),
        )


@dataclass(frozen=True)
class CaptureRecord:
    """The wild combatant as it joins the roster."""
    species_id: str
    species_name: str
    nickname: str
    current_hp: int
    max_hp: int

    @classmethod
    def from_combatant(cls, wild: Combatant) -> "CaptureRecord":
        return cls(wild.species_id, wild.species_name, wild.species_name,
                   wild.current_hp, wild.max_hp)

    def to_json(self) -> Dict[str, Any]:
        return {"species_id": self.species_id, "species_name": self.species_name,
                "nickname": self.nickname, "current_hp": self.current_hp, "max_hp": self.max_hp}


@dataclass(frozen=True)
class BattleResult:
    status: BattleStatus
    player: Combatant
    total_turns: int
    log: Tuple[LogEntry, ...]
    captured: Optional[CaptureRecord] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "player": self.player.to_json(),
            "captured": self.captured.to_json() if self.captured else None,
            "total_turns": self.total_turns,
            "log": [e.to_json() for e in self.log],
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "BattleResult":
        cap = data.get("captured")
        return cls(
            status=BattleStatus(data["status"]),
            player=Combatant.from_json(data["player"]),
            total_turns=_require_int(data["total_turns"], "total_turns"),
            log=tuple(LogEntry.from_json(e) for e in data["log"]),
            captured=CaptureRecord(**cap) if cap else None,
        )
