"""
Battle system package.
Modules:
- models.py (Combatant, BattleSession, LogEntry, BattleResult)
- factory.py (wild / roster combatant construction)
- turns.py (first turn, alternation)
- actions.py (attack / capture / escape resolution)
- store.py (session slot persistence)
- rewards.py (post-battle roster hand-off)
- orchestrator.py (encounter lifecycle)
"""
from .models import Action, BattleResult, BattleSession, BattleStatus, Combatant, LogEntry, Side
from .orchestrator import EncounterOrchestrator, Phase
__all__ = ["Action","BattleResult","BattleSession","BattleStatus","Combatant","LogEntry","Side",
           "EncounterOrchestrator","Phase"]
