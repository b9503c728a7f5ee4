"""
Battle screen rendering with Rich: opponent / player panels with HP bars,
the most recent log lines, and the action prompt.
"""
from __future__ import annotations
from typing import Optional

from rich.align import Align
from rich.box import ROUNDED
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from monster_game.battle.actions import capture_eligible
from monster_game.battle.models import BattleResult, BattleSession, BattleStatus, Combatant, LogCategory, Side

console = Console()

LOG_STYLES = {
    LogCategory.ATTACK: "red",
    LogCategory.DAMAGE: "dark_orange",
    LogCategory.CAPTURE: "magenta",
    LogCategory.ESCAPE: "bright_black",
    LogCategory.INFO: "cyan",
    LogCategory.VICTORY: "green",
    LogCategory.DEFEAT: "bold red",
}

RESULT_TITLES = {
    BattleStatus.VICTORY: ("🏆", "Victory!"),
    BattleStatus.CAPTURED: ("🎯", "Capture successful!"),
    BattleStatus.DEFEAT: ("💫", "Defeated..."),
    BattleStatus.ESCAPED: ("🏃", "Escaped"),
}

def hp_percentage(current: int, max_hp: int) -> int:
    if max_hp <= 0:
        return 0
    return round(current / max_hp * 100)

def hp_bar_color(percent: int) -> str:
    if percent > 60:
        return "green"
    if percent > 30:
        return "yellow"
    return "red"

def hp_bar(current: int, max_hp: int, width: int = 20) -> str:
    if max_hp <= 0 or current <= 0:
        return "[red]FAINTED[/red]"
    pct = hp_percentage(current, max_hp)
    filled = int(current / max_hp * width)
    color = hp_bar_color(pct)
    return f"[{color}]{'█' * filled}{'░' * (width - filled)}[/{color}]"

def _combatant_panel(c: Combatant, title: str, active: bool) -> Panel:
    body = (f"[bold]{c.icon} {c.display_name}[/bold]\n"
            f"HP: {c.current_hp}/{c.max_hp}\n{hp_bar(c.current_hp, c.max_hp)}")
    return Panel(body, title=f"[bold]{title}[/bold]", box=ROUNDED, width=40, padding=(0, 1),
                 border_style="bright_cyan" if active else "bright_white")

def render_session(session: BattleSession, out: Optional[Console] = None, log_lines: int = 6) -> None:
    out = out or console
    state = "in battle" if session.ongoing else "finished"
    out.print(f"\n[bold]Turn {session.turn_count}[/bold] - {state}")
    wild_panel = _combatant_panel(session.wild, "WILD", session.turn_owner is Side.WILD)
    player_panel = _combatant_panel(session.player, "YOUR MONSTER", session.turn_owner is Side.PLAYER)
    out.print(Align.center(Columns([wild_panel, player_panel], equal=True, padding=(0, 4))))
    lines = Text()
    for entry in session.log[-log_lines:]:
        lines.append(entry.message + "\n", style=LOG_STYLES.get(entry.category, ""))
    out.print(Panel(lines, title="Battle log", box=ROUNDED, width=84))

def action_prompt(session: BattleSession) -> str:
    capture = "[C]apture" if capture_eligible(session.wild) else "[dim][C]apture (HP must be 50% or lower)[/dim]"
    return f"[bold][A]ttack[/bold]  {capture}  [bold][E]scape[/bold]  [bold][Q]uit[/bold]"

def render_result(result: BattleResult, out: Optional[Console] = None) -> None:
    out = out or console
    icon, title = RESULT_TITLES.get(result.status, ("⚔️", result.status.value))
    attacks = sum(1 for e in result.log if e.category is LogCategory.ATTACK)
    body = [f"{icon} [bold]{title}[/bold]",
            f"{result.player.display_name}: {result.player.current_hp}/{result.player.max_hp} HP",
            f"Turns: {result.total_turns}   Attacks: {attacks}"]
    if result.captured:
        body.append(f"New partner: {result.captured.nickname} ({result.captured.species_name})")
    if result.status is BattleStatus.DEFEAT:
        body.append("Your monster was revived to full HP.")
    out.print(Panel("\n".join(body), title="Battle result", box=ROUNDED, width=60))
