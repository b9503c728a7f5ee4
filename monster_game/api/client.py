"""REST client for the player/roster service.

Every endpoint answers with an envelope `{"success": bool, "data": ...,
"message"|"error": str}`. Non-2xx answers, `success: false` and unparsable
bodies raise ApiError carrying the HTTP status; network failures raise
ApiError with status 0.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

import requests

from monster_game.core.errors import ApiError
from monster_game.core.logging import logger

DEFAULT_BASE_URL = "http://localhost:8787"

class RosterApi:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, token: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, body: Any = None, require_auth: bool = True) -> Any:
        headers = {"Content-Type": "application/json"}
        if require_auth:
            if not self.token:
                raise ApiError(401, "Login required")
            headers["Authorization"] = f"Bearer {self.token}"
        url = f"{self.base_url}{endpoint}"
        try:
            resp = self.session.request(method, url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("ApiNetworkError", method=method, url=url, error=str(e))
            raise ApiError(0, "Network error") from e
        try:
            payload = resp.json()
        except ValueError as e:
            raise ApiError(resp.status_code, f"Could not parse response: {resp.reason}") from e
        if not resp.ok:
            message = _message(payload) or f"HTTP Error: {resp.status_code}"
            logger.warn("ApiRequestFailed", method=method, url=url, status=resp.status_code)
            raise ApiError(resp.status_code, message, payload)
        if not isinstance(payload, dict) or not payload.get("success"):
            raise ApiError(resp.status_code, _message(payload) or "API error", payload)
        logger.debug("ApiRequestOk", method=method, url=url)
        return payload.get("data")

    # --- Players ---
    def create_player(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/api/players", {"name": name})

    def get_player(self, player_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/players/{player_id}")

    def get_me(self) -> Dict[str, Any]:
        return self._request("GET", "/api/players/me")

    # --- Roster ---
    def list_monsters(self, player_id: str) -> List[Dict[str, Any]]:
        data = self._request("GET", f"/api/players/{player_id}/monsters")
        # Some deployments wrap the list as {"monsters": [...]}
        if isinstance(data, dict):
            data = data.get("monsters", [])
        return list(data or [])

    def add_captured_monster(self, player_id: str, species_id: str, nickname: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"speciesId": species_id}
        if nickname:
            body["nickname"] = nickname
        return self._request("POST", f"/api/players/{player_id}/monsters", body)

    def update_monster(self, monster_id: str, nickname: Optional[str] = None,
                       current_hp: Optional[int] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if nickname is not None:
            body["nickname"] = nickname
        if current_hp is not None:
            body["currentHp"] = current_hp
        return self._request("PUT", f"/api/monsters/{monster_id}", body)

    def write_back_hit_points(self, monster_id: str, hit_points: int) -> Dict[str, Any]:
        return self.update_monster(monster_id, current_hp=hit_points)

    def release_monster(self, monster_id: str) -> None:
        self._request("DELETE", f"/api/monsters/{monster_id}")

    # --- Public ---
    def list_species(self) -> List[Dict[str, Any]]:
        return list(self._request("GET", "/api/species", require_auth=False) or [])


def _message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        return payload.get("message") or payload.get("error")
    return None
