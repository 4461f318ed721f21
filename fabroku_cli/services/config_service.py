"""
Configuration Management Service

Loads and stores CLI credentials in <config dir>/config.json.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional

from fabroku_cli.constants import API_URL_ENV_VAR, CONFIG_FILE_NAME, DEFAULT_API_URL
from fabroku_cli.exceptions import ConfigurationError
from fabroku_cli.models.session import Session
from fabroku_cli.utils import get_config_dir, load_env

DEFAULT_CONFIG: Dict[str, Any] = {
    "api_url": DEFAULT_API_URL,
    "token": None,
    "user": None,
}


class ConfigService:
    """
    Persisted CLI configuration.

    Responsibilities:
    - Create the config file with defaults on first use
    - Build the Session object commands pass to the API client
    - Store and clear credentials
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or get_config_dir()

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def load(self) -> Dict[str, Any]:
        """
        Load raw config, writing defaults if the file doesn't exist yet.

        Returns:
            Config dictionary

        Raises:
            ConfigurationError: If the file exists but isn't valid JSON
        """
        if not self.config_path.exists():
            self.save(DEFAULT_CONFIG)
            return dict(DEFAULT_CONFIG)

        try:
            data = json.loads(self.config_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Invalid config file: {self.config_path}",
                context=f"{e}. Delete it or run: fabroku login",
            )

        if not isinstance(data, dict):
            raise ConfigurationError(f"Invalid config file: {self.config_path}")
        return data

    def save(self, config: Dict[str, Any]) -> None:
        """Write config as pretty-printed JSON."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")

    def load_session(self) -> Session:
        """
        Build the session for this process.

        FABROKU_API_URL (environment or .env) overrides the stored API URL.
        """
        session = Session.from_dict(self.load())
        override = load_env().get(API_URL_ENV_VAR)
        if override:
            session.api_url = override
        return session

    def set_credentials(self, token: str, user: str, api_url: Optional[str] = None) -> None:
        config = self.load()
        config["token"] = token
        config["user"] = user
        if api_url:
            config["api_url"] = api_url
        self.save(config)

    def clear_credentials(self) -> None:
        config = self.load()
        config["token"] = None
        config["user"] = None
        config["api_url"] = DEFAULT_API_URL
        self.save(config)
