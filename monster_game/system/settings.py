from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from monster_game.core.logging import logger
from monster_game.core.paths import DEFAULT_SESSION_DIR

SETTINGS_FILENAME = ".monster_game_settings.json"

@dataclass
class SettingsData:
    log_level: str = "INFO"                        # DEBUG / INFO / WARN / ERROR
    api_base_url: str = "http://localhost:8787"
    api_token: Optional[str] = None
    player_id: Optional[str] = None
    opponent_delay: float = 1.5                    # seconds before the wild side attacks
    finalize_delay: float = 2.0                    # seconds a finished battle stays on screen
    capture_rate: float = 0.5                      # success chance once capture is allowed
    session_dir: str = ""                          # blank -> ~/.monster_game/session

    def normalize(self):
        if self.log_level not in {"DEBUG","INFO","WARN","ERROR"}:
            self.log_level = "INFO"
        for name, default in (("opponent_delay", 1.5), ("finalize_delay", 2.0)):
            val = getattr(self, name)
            if not isinstance(val, (int, float)) or isinstance(val, bool) or val < 0:
                setattr(self, name, default)
        rate = self.capture_rate
        if not isinstance(rate, (int, float)) or isinstance(rate, bool) or not 0.0 <= rate <= 1.0:
            self.capture_rate = 0.5
        if not self.api_base_url:
            self.api_base_url = "http://localhost:8787"

    @property
    def session_path(self) -> Path:
        return Path(self.session_dir).expanduser() if self.session_dir else DEFAULT_SESSION_DIR

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2))
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply_log_level(self):
        logger.set_level(self.data.log_level)  # type: ignore[arg-type]
