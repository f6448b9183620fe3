# src/stsquery/config.py
"""
Settings for ``STSClient.from_environment``. The client constructor itself
never reads the environment or any file.
"""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

from .utils import getenv_str

CONFIG_PATH = Path(".config") / "stsquery" / "config.toml"

# Setting name -> environment variables consulted, highest priority first.
SETTINGS: Dict[str, Tuple[str, ...]] = {
    "AWS_ACCESS_KEY_ID": ("AWS_ACCESS_KEY_ID",),
    "AWS_SECRET_ACCESS_KEY": ("AWS_SECRET_ACCESS_KEY",),
    "AWS_SESSION_TOKEN": ("AWS_SESSION_TOKEN",),
    "AWS_DEFAULT_REGION": ("AWS_DEFAULT_REGION", "AWS_REGION"),
    "AWS_STS_ENDPOINT": ("AWS_STS_ENDPOINT",),
}


def load_toml_config() -> Dict[str, str]:
    """Read the [aws] table of ~/.config/stsquery/config.toml, keys upper-cased."""
    cfg_path = Path.home() / CONFIG_PATH
    if not cfg_path.exists():
        return {}
    with cfg_path.open("rb") as f:
        section = tomllib.load(f).get("aws", {})
    return {k.upper(): str(v) for k, v in section.items()}


def resolved_aws_settings() -> Dict[str, Optional[str]]:
    """
    Resolve every key of SETTINGS from the environment (after loading a .env
    if present), falling back to config.toml. Unresolved values are None.
    """
    load_dotenv()
    toml_cfg = load_toml_config()

    resolved: Dict[str, Optional[str]] = {}
    for name, env_names in SETTINGS.items():
        value = toml_cfg.get(name)
        for env_name in reversed(env_names):
            value = getenv_str(env_name, value)
        resolved[name] = value
    return resolved
