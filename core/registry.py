import os
import tomllib
from typing import Any, Dict, List, Optional
from importlib import import_module

from dotenv import load_dotenv

from core.types import Page

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "app": {
        "title": "MedLens",
        "data_dir": ".medlens",
        "log_level": "INFO",
        "thumbnail_px": 320,
        "user_id": "demo-user",
    },
    "analysis": {
        "model": "gemini-3-pro-preview",
        "timeout_seconds": 120,
        "progress_interval": 3.0,
        "default_location": "Global",
    },
    "modules": {},
}


def load_config(path: str = "config.toml") -> Dict[str, Any]:
    load_dotenv()
    cfg: Dict[str, Any] = {k: dict(v) for k, v in DEFAULTS.items()}
    if os.path.exists(path):
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section, values in raw.items():
            if isinstance(values, dict):
                cfg.setdefault(section, {}).update(values)
            else:
                cfg[section] = values
    return cfg


def api_key() -> Optional[str]:
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")


def load_enabled_modules(cfg: Dict[str, Any]) -> List[Page]:
    mods = []
    mod_cfg = cfg.get("modules", {})
    ordered = sorted(((m, v.get("order", 999)) for m, v in mod_cfg.items() if v.get("enabled", True)), key=lambda x: x[1])
    for name, _ in ordered:
        mod = import_module(f"modules.{name}.{name}")
        mods.append(mod)
    return mods


def nav_modules(cfg: Dict[str, Any], mods: List[Page]) -> List[Page]:
    mod_cfg = cfg.get("modules", {})
    return [m for m in mods if mod_cfg.get(m.id, {}).get("nav", True)]
