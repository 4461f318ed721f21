"""Fabroku CLI - Utility functions"""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from fabroku_cli.constants import CONFIG_DIR_NAME, HOME_ENV_VAR


def get_config_dir() -> Path:
    """Config directory (~/.fabroku unless FABROKU_HOME is set)"""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR_NAME


def find_env_file() -> Optional[Path]:
    """Smart .env file detection"""
    search_paths = [
        Path.cwd() / ".env",
        get_config_dir() / ".env",
    ]

    for path in search_paths:
        if path.is_file():
            return path

    return None


def load_env() -> Dict[str, Optional[str]]:
    """Load .env values (if any) with the process environment on top"""
    env_file = find_env_file()
    env_vars: Dict[str, Optional[str]] = {}
    if env_file:
        env_vars.update(dotenv_values(env_file))
    env_vars.update(os.environ)
    return env_vars
