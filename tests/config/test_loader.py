from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from linksift.config import ConfigLocator, ConfigRepository, GlobalConfig, SchedulerConfig
from linksift.errors import ConfigError


def test_config_locator_uses_env_and_creates_directories(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINKSIFT_HOME", str(tmp_path))
    locator = ConfigLocator()
    root = tmp_path.resolve()
    assert locator.project_root == root
    assert locator.outputs_dir == root / "data" / "outputs"
    assert locator.logs_dir == root / "logs"
    assert locator.global_config_path() == root / "data" / "global_config.yaml"
    for path in (locator.data_dir, locator.outputs_dir, locator.logs_dir):
        assert path.exists()


def test_first_load_writes_defaults(temp_config_repository: ConfigRepository) -> None:
    cfg = temp_config_repository.load_global_config()
    assert cfg == GlobalConfig()
    path = temp_config_repository.locator.global_config_path()
    payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert payload["verifier"]["timeout"] == 8.0
    assert payload["scheduler"]["max_concurrency"] == 5


def test_config_repository_roundtrip(temp_config_repository: ConfigRepository) -> None:
    cfg = GlobalConfig(scheduler=SchedulerConfig(max_concurrency=8))
    path = temp_config_repository.save_global_config(cfg)
    assert path.exists()
    assert temp_config_repository.reload() == cfg


def test_load_is_cached_until_reload(temp_config_repository: ConfigRepository) -> None:
    first = temp_config_repository.load_global_config()
    path = temp_config_repository.locator.global_config_path()
    path.write_text("scheduler:\n  max_concurrency: 2\n", encoding="utf-8")
    assert temp_config_repository.load_global_config() is first
    assert temp_config_repository.reload().scheduler.max_concurrency == 2


def test_invalid_yaml_raises_config_error(temp_config_repository: ConfigRepository) -> None:
    path = temp_config_repository.locator.global_config_path()
    path.write_text("verifier: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        temp_config_repository.load_global_config()


def test_schema_violation_raises_config_error(temp_config_repository: ConfigRepository) -> None:
    path = temp_config_repository.locator.global_config_path()
    path.write_text("scheduler:\n  max_concurrency: 100\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        temp_config_repository.load_global_config()


def test_non_mapping_file_is_rejected(temp_config_repository: ConfigRepository) -> None:
    path = temp_config_repository.locator.global_config_path()
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        temp_config_repository.load_global_config()
