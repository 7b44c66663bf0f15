from __future__ import annotations

from pathlib import Path

import pytest

from config import defaults
from config.settings import Config, load_config
from core.errors import ConfigError


def test_defaults() -> None:
    config = Config()
    assert config.greenhouse_url == defaults.GREENHOUSE_URL
    assert config.region_names == ["americas", "latam", "apac", "emea"]
    assert config.is_canonical()
    assert config.login_url == defaults.AUTH_URL
    assert config.board_to_post_name == "Canonical - Jobs"
    assert config.user_settings_path.name == ".canonical-greenhouse.json"
    assert config.hostname == "canonical.greenhouse.io"


def test_url_joins_relative_paths() -> None:
    assert Config().url("/plans/10/jobapp") == "https://canonical.greenhouse.io/plans/10/jobapp"


def test_overrides_for_another_instance() -> None:
    config = Config.from_overrides(
        {
            "greenhouseUrl": "https://acme.greenhouse.io",
            "copyToBoard": "Acme Jobs",
            "protectedJobBoards": ["Acme"],
            "regions": {"europe": ["Berlin", "Paris"]},
        }
    )
    assert not config.is_canonical()
    assert config.login_url == "https://acme.greenhouse.io/users/sign_in"
    assert config.user_settings_path.name == ".ght-greenhouse.json"
    assert config.protected_job_boards == ["Acme"]
    assert config.region_table.cities("europe") == ("Berlin", "Paris")
    assert config.board_to_post_name == "Acme Jobs"


def test_development_board() -> None:
    assert Config(development=True).board_to_post_name == defaults.TEST_JOB_BOARD
    assert Config.from_overrides({"testJobBoard": "Sandbox"}, development=True).board_to_post_name == "Sandbox"


def test_unknown_override_key() -> None:
    with pytest.raises(ConfigError, match="Unexpected copyBoard"):
        Config.from_overrides({"copyBoard": "x"})


def test_invalid_regions_override() -> None:
    with pytest.raises(ConfigError):
        Config.from_overrides({"regions": {"empty": []}})
    with pytest.raises(ConfigError):
        Config.from_overrides({"regions": ["emea"]})


def test_defaults_are_not_shared_between_configs() -> None:
    first = Config()
    first.regions["emea"].append("Home based - EMEA, Nowhere")
    assert "Home based - EMEA, Nowhere" not in Config().regions["emea"]
    assert "Home based - EMEA, Nowhere" not in defaults.REGIONS["emea"]


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "ght.yaml"
    path.write_text("copyFromBoard: Source\nregions:\n  nordics:\n    - Oslo\n    - Stockholm\n", encoding="utf-8")
    config = load_config(path)
    assert config.copy_from_board == "Source"
    assert config.region_names == ["nordics"]


def test_load_config_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)


def test_load_config_without_path() -> None:
    assert load_config(None, development=True).development is True
