"""Client-local, session-scoped key/value slots.

Each key is one `<key>.json` file in the session directory. Values are
strings (callers serialise); missing keys read back as None. Errors from the
filesystem propagate so callers decide whether they are fatal.
"""
from __future__ import annotations
import re
from pathlib import Path
from typing import List, Optional

from monster_game.core.logging import logger

_KEY_RE = re.compile(r"^[A-Za-z0-9_\-]+$")

class SessionStorage:
    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key {key!r}")
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        p = self._path(key)
        if not p.is_file():
            return None
        return p.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        p = self._path(key)
        self.root.mkdir(parents=True, exist_ok=True)
        tmp = p.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(p)
        logger.debug("SlotWritten", key=key, file=str(p))

    def remove_item(self, key: str) -> None:
        p = self._path(key)
        if p.exists():
            p.unlink()
            logger.debug("SlotRemoved", key=key)

    def keys(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob("*.json"))

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)
