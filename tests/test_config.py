import importlib
import logging

import pytest

from bmilog import config


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(reload_config, monkeypatch):
    for name in ("BMILOG_STORE_PATH", "BMILOG_HISTORY_KEY", "BMILOG_UPDATE_URL", "BMILOG_UPDATE_PERIOD"):
        monkeypatch.delenv(name, raising=False)
    cfg = reload_config()
    assert cfg.HISTORY_KEY == "bmiHistory"
    assert cfg.UPDATE_URL == ""
    assert cfg.UPDATE_PERIOD == 3600
    assert cfg.STORE_PATH.endswith("storage.json")


def test_environment_overrides(reload_config, tmp_path):
    cfg = reload_config(
        BMILOG_STORE_PATH=str(tmp_path / "s.json"),
        BMILOG_HISTORY_KEY="custom",
        BMILOG_UPDATE_PERIOD="60",
    )
    assert cfg.STORE_PATH == str(tmp_path / "s.json")
    assert cfg.HISTORY_KEY == "custom"
    assert cfg.UPDATE_PERIOD == 60.0


def test_configure_logging_without_targets_adds_no_handlers():
    root = logging.getLogger()
    before = root.handlers[:]
    config.configure_logging(verbose=False, log_file_path=None)
    assert root.handlers == before


def test_malformed_update_period_falls_back_to_default(reload_config, caplog):
    with caplog.at_level(logging.WARNING):
        cfg = reload_config(BMILOG_UPDATE_PERIOD="soon")
    assert cfg.UPDATE_PERIOD == 3600
    assert "BMILOG_UPDATE_PERIOD" in caplog.text
