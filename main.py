#!/usr/bin/env python3
"""
Monster Game - terminal encounter

Thin wrapper around the command line front-end in monster_game.cli.
Battle rules, persistence and reward hand-off live in the monster_game package.

To run: python main.py --demo
"""

from monster_game.cli import main

if __name__ == "__main__":
    main()
