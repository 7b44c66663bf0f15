"""Process-wide configuration for the Greenhouse tooling."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urljoin, urlparse

import yaml

from config import defaults
from core.errors import ConfigError
from core.regions import RegionTable

OVERRIDABLE_KEYS = (
    "greenhouseUrl",
    "copyFromBoard",
    "copyToBoard",
    "testJobBoard",
    "protectedJobBoards",
    "regions",
)


@dataclass(frozen=True)
class Config:
    """Immutable settings shared by every command of one invocation."""

    greenhouse_url: str = defaults.GREENHOUSE_URL
    copy_from_board: str = defaults.COPY_FROM_BOARD
    copy_to_board: str = defaults.COPY_TO_BOARD
    test_job_board: Optional[str] = None
    protected_job_boards: List[str] = field(default_factory=lambda: list(defaults.PROTECTED_JOB_BOARDS))
    regions: Dict[str, List[str]] = field(default_factory=lambda: {k: list(v) for k, v in defaults.REGIONS.items()})
    filtered_attributes: List[str] = field(default_factory=lambda: list(defaults.FILTERED_ATTRIBUTES))
    usa_cities: List[str] = field(default_factory=lambda: list(defaults.USA_CITIES))
    development: bool = False

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, Any]] = None, *, development: bool = False) -> "Config":
        """Merge ``overrides`` (camelCase keys, as in the YAML file) over the defaults."""
        overrides = dict(overrides or {})
        unexpected = [key for key in overrides if key not in OVERRIDABLE_KEYS]
        if unexpected:
            raise ConfigError(f"Unexpected {', '.join(unexpected)} in overrides")

        kwargs: Dict[str, Any] = {"development": development}
        if "greenhouseUrl" in overrides:
            kwargs["greenhouse_url"] = str(overrides["greenhouseUrl"])
        if "copyFromBoard" in overrides:
            kwargs["copy_from_board"] = str(overrides["copyFromBoard"])
        if "copyToBoard" in overrides:
            kwargs["copy_to_board"] = str(overrides["copyToBoard"])
        if "testJobBoard" in overrides:
            kwargs["test_job_board"] = str(overrides["testJobBoard"])
        if "protectedJobBoards" in overrides:
            boards = overrides["protectedJobBoards"]
            if not isinstance(boards, list):
                raise ConfigError("protectedJobBoards must be a list of board names")
            kwargs["protected_job_boards"] = [str(board) for board in boards]
        if "regions" in overrides:
            kwargs["regions"] = _parse_regions(overrides["regions"])
        return cls(**kwargs)

    # -------------------- derived values --------------------
    @property
    def region_names(self) -> List[str]:
        return list(self.regions)

    @property
    def region_table(self) -> RegionTable:
        return RegionTable(self.regions)

    def is_canonical(self) -> bool:
        return self.greenhouse_url.rstrip("/") == defaults.GREENHOUSE_URL

    @property
    def user_settings_path(self) -> Path:
        name = ".canonical-greenhouse.json" if self.is_canonical() else ".ght-greenhouse.json"
        return Path.home() / name

    @property
    def login_url(self) -> str:
        if self.is_canonical():
            return defaults.AUTH_URL
        return self.url("/users/sign_in")

    @property
    def board_to_post_name(self) -> str:
        """Board new posts go to; the test board while developing."""
        if not self.development:
            return self.copy_to_board
        if self.test_job_board:
            return self.test_job_board
        return defaults.TEST_JOB_BOARD if self.is_canonical() else self.copy_to_board

    @property
    def hostname(self) -> str:
        return urlparse(self.greenhouse_url).hostname or ""

    def url(self, relative: str) -> str:
        return urljoin(self.greenhouse_url, relative)


def _parse_regions(raw: Any) -> Dict[str, List[str]]:
    if not isinstance(raw, dict):
        raise ConfigError("regions must map region names to lists of locations")
    regions: Dict[str, List[str]] = {}
    for name, cities in raw.items():
        if not isinstance(cities, list) or not cities:
            raise ConfigError(f"Region {name!r} must list at least one location")
        regions[str(name)] = [str(city) for city in cities]
    return regions


def load_config(path: Path | str | None = None, *, development: bool = False) -> Config:
    """Build a :class:`Config` from an optional YAML overrides file."""
    if path is None:
        return Config.from_overrides({}, development=development)
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: '{config_path}'")
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            overrides = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unable to load config file: '{config_path}'") from exc
    if not isinstance(overrides, dict):
        raise ConfigError(f"Config file '{config_path}' must contain a mapping")
    return Config.from_overrides(overrides, development=development)
