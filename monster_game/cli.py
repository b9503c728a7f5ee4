from __future__ import annotations
import argparse
from typing import Any, List, Mapping, Optional

from monster_game.api.client import RosterApi
from monster_game.battle.encounter import EncounterSeed, clear_seed, load_seed, save_seed, seed_from_trigger
from monster_game.battle.factory import convert_roster_entry, create_random_wild_combatant, create_wild_combatant
from monster_game.battle.models import Action
from monster_game.battle.orchestrator import EncounterOrchestrator
from monster_game.battle.rewards import RewardProcessor
from monster_game.battle.store import BattleSessionStore
from monster_game.core.errors import ApiError, DataLoadError, EncounterSetupError, RewardError
from monster_game.core.logging import logger
from monster_game.core.rng import Dice
from monster_game.core.scheduler import TimerQueue
from monster_game.data.species import SpeciesCatalog, default_catalog
from monster_game.system.settings import Settings
from monster_game.system.storage import SessionStorage
from monster_game.ui.battle import action_prompt, console, render_result, render_session

KEYS = {"a": Action.ATTACK, "c": Action.CAPTURE, "e": Action.ESCAPE}

# Offline starter used by --demo (no roster service involved)
DEMO_ENTRY = {"id": "demo-starter", "speciesId": "fire_lizard", "nickname": "Ember",
              "currentHp": 40, "maxHp": 40}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="monster-game", description="Fight a wild monster in the terminal")
    parser.add_argument("--species", help="wild species id (random when omitted)")
    parser.add_argument("--monster", help="roster entry id to send out (first healthy one when omitted)")
    parser.add_argument("--player", help="remember this player id in the settings file")
    parser.add_argument("--token", help="remember this API token in the settings file")
    parser.add_argument("--demo", action="store_true", help="offline battle with a demo starter, no rewards")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser

def _wild(catalog: SpeciesCatalog, species: Optional[str], rng: Dice):
    return create_wild_combatant(species, catalog) if species else create_random_wild_combatant(catalog, rng)

def _pick_monster(roster: List[Any], wanted: Optional[str]) -> Optional[str]:
    if wanted:
        return wanted
    for m in roster:
        if not isinstance(m, Mapping):
            continue
        hp = m.get("currentHp")
        if isinstance(hp, int) and not isinstance(hp, bool) and hp > 0:
            return m.get("id")
    return None

def _build_seed(args, settings: Settings, catalog: SpeciesCatalog, rng: Dice, api: Optional[RosterApi]) -> EncounterSeed:
    if api is None:
        return EncounterSeed(wild=_wild(catalog, args.species, rng), player=convert_roster_entry(DEMO_ENTRY, catalog))
    roster = api.list_monsters(settings.data.player_id)
    monster_id = _pick_monster(roster, args.monster)
    species = args.species or create_random_wild_combatant(catalog, rng).species_id
    return seed_from_trigger(catalog, roster, species, monster_id or "")

def _resolve_seed(args, settings: Settings, catalog: SpeciesCatalog, rng: Dice,
                  api: Optional[RosterApi], storage: SessionStorage) -> EncounterSeed:
    """Seed for a new battle. A trigger stashed by an earlier run wins over a fresh one."""
    try:
        stashed = load_seed(storage)
    except OSError as e:
        logger.warn("EncounterSeedLoadFailed", error=str(e))
        stashed = None
    if stashed is not None and stashed.complete:
        logger.info("EncounterSeedRestored", wild=stashed.wild.species_id, player=stashed.player.id)
        return stashed
    seed = _build_seed(args, settings, catalog, rng, api)
    try:
        save_seed(storage, seed)
    except OSError as e:
        logger.warn("EncounterSeedSaveFailed", error=str(e))
    return seed

def _forget_seed(storage: SessionStorage) -> None:
    try:
        clear_seed(storage)
    except OSError as e:
        logger.warn("EncounterSeedClearFailed", error=str(e))

def _play(orch: EncounterOrchestrator, scheduler: TimerQueue) -> bool:
    """Drive the battle until it is done. Returns False if the player quit."""
    while not orch.done:
        if orch.awaiting_player:
            console.print(action_prompt(orch.session))
            try:
                choice = input("> ").strip().lower()[:1]
            except EOFError:
                choice = "q"
            if choice == "q":
                orch.abandon()
                console.print("You left the battle. Nothing was gained.")
                return False
            action = KEYS.get(choice)
            if action is None:
                console.print("[yellow]Choose A, C, E or Q.[/yellow]")
                continue
            orch.submit(action)
        elif scheduler.has_pending():
            scheduler.run_until_idle(max_tasks=1)
        else:
            break
    return True

def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    if args.player or args.token:
        if args.player:
            settings.data.player_id = args.player
        if args.token:
            settings.data.api_token = args.token
        settings.save()
    settings.apply_log_level()
    if args.debug:
        logger.set_level("DEBUG")

    try:
        catalog = default_catalog()
    except DataLoadError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    storage = SessionStorage(settings.data.session_path)
    store = BattleSessionStore(storage)
    rng = Dice()
    scheduler = TimerQueue()

    api = None
    rewards = None
    if not args.demo:
        if not settings.data.player_id:
            console.print("[red]No player_id configured. Set it in the settings file or use --demo.[/red]")
            return 1
        api = RosterApi(settings.data.api_base_url, settings.data.api_token)
        rewards = RewardProcessor(api, settings.data.player_id)

    orch = EncounterOrchestrator(store, scheduler, rng, rewards,
                                 opponent_delay=settings.data.opponent_delay,
                                 finalize_delay=settings.data.finalize_delay,
                                 capture_rate=settings.data.capture_rate)
    orch.on_change(render_session)

    try:
        seed = None if store.load() is not None else _resolve_seed(args, settings, catalog, rng, api, storage)
        orch.start(seed)
    except (EncounterSetupError, ApiError) as e:
        _forget_seed(storage)
        console.print(f"[red]Battle could not start: {e}[/red]")
        return 1

    try:
        finished = _play(orch, scheduler)
    except RewardError as e:
        finished = True
        console.print(f"[red]Battle finished but the roster was not updated: {e}[/red]")
    except KeyboardInterrupt:
        orch.teardown()
        console.print("\nBattle paused. Run again to resume.")
        return 130
    _forget_seed(storage)
    if not finished:
        return 0
    if orch.result is not None:
        render_result(orch.result)
        store.clear_result()
    return 0

def main():
    raise SystemExit(run())

if __name__ == "__main__":
    main()
