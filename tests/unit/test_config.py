from pathlib import Path

import pytest

from mritumor.config import AppConfig, getenv_bool, load_yaml

REPO_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "app.yaml"

def test_repo_config_loads(monkeypatch):
    monkeypatch.delenv("MODEL_SPACE", raising=False)
    cfg = AppConfig(load_yaml(REPO_CONFIG))
    assert cfg.space_id == "yadollahi/mri-tumor-detector"
    assert cfg.api_name == "/predict"
    assert "png" in cfg.accepted_types

def test_defaults_for_empty_config(monkeypatch):
    monkeypatch.delenv("MODEL_SPACE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("SHOW_DEBUG", raising=False)
    cfg = AppConfig({})
    assert cfg.title == "MRI Tumor Detector"
    assert cfg.space_id == "yadollahi/mri-tumor-detector"
    assert cfg.hub_url == "https://huggingface.co"
    assert cfg.status_timeout == 30
    assert cfg.preview_max_size == 512
    assert cfg.log_level == "INFO"
    assert cfg.show_debug is False

def test_env_overrides(monkeypatch):
    monkeypatch.setenv("MODEL_SPACE", "someone/other-space")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SHOW_DEBUG", "yes")
    cfg = AppConfig({"remote": {"space_id": "x/y"}})
    assert cfg.space_id == "someone/other-space"
    assert cfg.log_level == "DEBUG"
    assert cfg.show_debug is True

def test_accepted_types_are_normalized():
    cfg = AppConfig({"ui": {"accepted_types": [".PNG", "jpg"]}})
    assert cfg.accepted_types == ["png", "jpg"]

def test_getenv_bool(monkeypatch):
    monkeypatch.delenv("FLAG", raising=False)
    assert getenv_bool("FLAG", True) is True
    monkeypatch.setenv("FLAG", "off")
    assert getenv_bool("FLAG", True) is False

def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml(tmp_path / "nope.yaml")
