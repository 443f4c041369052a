# tests/unit/test_config.py
from pathlib import Path

import pytest
from pydantic import ValidationError

from streamavg.app.core.config import (
    ConfigError,
    Mode,
    RuntimeConfig,
    load_defaults,
    lookup_mode,
    make_config,
)


def test_defaults():
    cfg = make_config()
    assert cfg.mode is Mode.CMA
    assert cfg.window_size == 10
    assert cfg.show_intermediates is False
    assert cfg.data_file is None

@pytest.mark.parametrize("name,mode", [("CMA", Mode.CMA), ("SMA", Mode.SMA), (" sma ", Mode.SMA), ("cma", Mode.CMA)])
def test_lookup_mode(name, mode):
    assert lookup_mode(name) is mode

@pytest.mark.parametrize("name", ["EMA", "", "CMAX"])
def test_lookup_mode_unknown(name):
    with pytest.raises(ConfigError, match="Unknown runtime mode"):
        lookup_mode(name)

def test_config_is_immutable():
    cfg = make_config(mode="SMA", window_size=3)
    with pytest.raises(ValidationError):
        cfg.window_size = 4

@pytest.mark.parametrize("bad", [0, -5])
def test_window_size_must_be_positive(bad):
    with pytest.raises(ConfigError, match="window_size"):
        make_config(mode="SMA", window_size=bad)

def test_runtime_config_direct_validation():
    with pytest.raises(ValidationError):
        RuntimeConfig(mode=Mode.SMA, window_size=0)

@pytest.mark.parametrize("w", [0, -5])
def test_window_size_ignored_for_cma(w):
    cfg = make_config(mode="CMA", window_size=w)
    assert cfg.mode is Mode.CMA
    assert cfg.window_size == w

def test_load_defaults_without_file():
    assert load_defaults() == {"mode": Mode.CMA, "window_size": 10, "show_intermediates": False}

def test_load_defaults_from_yaml(tmp_path: Path):
    p = tmp_path / "avg.yml"
    p.write_text("mode: SMA\nwindow-size: 4\nshow_intermediates: true\n", encoding="utf-8")
    values = load_defaults(p)
    assert values == {"mode": "SMA", "window_size": 4, "show_intermediates": True}
    cfg = make_config(**values)
    assert (cfg.mode, cfg.window_size, cfg.show_intermediates) == (Mode.SMA, 4, True)

def test_load_defaults_from_env(tmp_path: Path, monkeypatch):
    p = tmp_path / "avg.yml"
    p.write_text("window_size: 7\n", encoding="utf-8")
    monkeypatch.setenv("AVG_CONFIG", str(p))
    assert load_defaults()["window_size"] == 7

def test_load_defaults_ignores_unknown_keys(tmp_path: Path, caplog):
    p = tmp_path / "avg.yml"
    p.write_text("colour: blue\nmode: CMA\n", encoding="utf-8")
    values = load_defaults(p)
    assert "colour" not in values
    assert "Ignoring unknown config key" in caplog.text

def test_load_defaults_empty_file(tmp_path: Path):
    p = tmp_path / "avg.yml"
    p.write_text("", encoding="utf-8")
    assert load_defaults(p)["mode"] is Mode.CMA

@pytest.mark.parametrize("body", ["- a\n- b\n", "mode: [unclosed\n"])
def test_load_defaults_bad_yaml(tmp_path: Path, body):
    p = tmp_path / "avg.yml"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_defaults(p)

def test_load_defaults_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError, match="Cannot read config file"):
        load_defaults(tmp_path / "missing.yml")
