# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import Optional, TypedDict

import platformdirs
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from timbers.errors import UserError

APP_NAME = "timbers"
CONFIG_ENV_VAR = "TIMBERS_CONFIG"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

GROUP_STRATEGIES = ("auto", "day", "work-item")


class Configuration(TypedDict):
    ledger_dir: str
    stage_entries: bool
    commit_entries: bool
    group_strategy: str
    color: bool


def get_default_configuration() -> Configuration:
    return {
        "ledger_dir": ".timbers",
        "stage_entries": True,
        "commit_entries": True,
        "group_strategy": "auto",
        "color": True,
    }


def resolve_config_path(path: Optional[Path] = None) -> Path:
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return APP_CONFIG_PATH


def load_configuration(path: Optional[Path] = None) -> Configuration:
    """
    Read config.yaml, filling any missing keys with defaults.

    A missing file yields the defaults; nothing is written.
    """
    config_path = resolve_config_path(path)
    config = get_default_configuration()
    if not config_path.is_file():
        return config

    raw_config = load(config_path.read_text(), Loader=Loader)
    if raw_config is None:
        return config
    if not isinstance(raw_config, dict):
        raise UserError(f"configuration file is not a mapping: {config_path}")

    for key in config:
        if key in raw_config:
            config[key] = raw_config[key]  # type: ignore[literal-required]

    if config["group_strategy"] not in GROUP_STRATEGIES:
        raise UserError(
            f"group_strategy must be one of {', '.join(GROUP_STRATEGIES)}, "
            f"got {config['group_strategy']!r}"
        )
    return config


def ensure_configuration_file(path: Optional[Path] = None) -> Path:
    config_path = resolve_config_path(path)
    if not config_path.is_file():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(dump(dict(get_default_configuration()), Dumper=Dumper))
    return config_path
