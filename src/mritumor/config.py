from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging
import os
import yaml

DEFAULT_CONFIG = "configs/app.yaml"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def load_yaml(path: str | Path) -> dict:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    return yaml.safe_load(p.read_text(encoding="utf-8")) or {}

def getenv_bool(name: str, default: bool=False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1","true","yes","y","on"}

def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

@dataclass
class AppConfig:
    raw: dict

    @property
    def title(self) -> str:
        return str(self.raw.get("app", {}).get("title", "MRI Tumor Detector"))

    @property
    def space_id(self) -> str:
        # allow env override
        return os.getenv("MODEL_SPACE", str(self.raw.get("remote", {}).get("space_id", "yadollahi/mri-tumor-detector")))

    @property
    def api_name(self) -> str:
        return str(self.raw.get("remote", {}).get("api_name", "/predict"))

    @property
    def hub_url(self) -> str:
        return str(self.raw.get("remote", {}).get("hub_url", "https://huggingface.co")).rstrip("/")

    @property
    def status_timeout(self) -> int:
        return int(self.raw.get("remote", {}).get("status_timeout", 30))

    @property
    def accepted_types(self) -> list[str]:
        return [str(t).lower().lstrip(".") for t in self.raw.get("ui", {}).get("accepted_types", ["png", "jpg", "jpeg"])]

    @property
    def preview_max_size(self) -> int:
        return int(self.raw.get("ui", {}).get("preview_max_size", 512))

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", str(self.raw.get("logging", {}).get("level", "INFO")))

    @property
    def show_debug(self) -> bool:
        return getenv_bool("SHOW_DEBUG", bool(self.raw.get("ui", {}).get("show_debug", False)))
