"""On-disk storage of the login cookie between invocations."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, TypedDict

from utils.logging import get_logger

logger = get_logger(__name__)


class LoginCookie(TypedDict):
    name: str
    value: str
    domain: str


class SessionStore:
    """JSON file holding one :class:`LoginCookie`."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> Optional[LoginCookie]:
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring user settings in %s: %s", self.path, exc)
            return None
        if not isinstance(raw, dict) or not {"name", "value", "domain"} <= raw.keys():
            logger.warning("Ignoring user settings in %s: not a login cookie", self.path)
            return None
        return LoginCookie(name=str(raw["name"]), value=str(raw["value"]), domain=str(raw["domain"]))

    def save(self, cookie: LoginCookie) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(cookie), encoding="utf-8")
        logger.debug("Saved session cookie to %s", self.path)

    def clear(self) -> bool:
        """Remove the stored cookie; False when there was none."""
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
