"""
Centralized path helpers.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at monster_game/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]
ASSETS = PACKAGE / "assets"
SPECIES_FILE = ASSETS / "species.json"

HOME_DIR = Path.home() / ".monster_game"
DEFAULT_SESSION_DIR = HOME_DIR / "session"
