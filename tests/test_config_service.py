"""Tests for stored configuration and session loading."""

import json

import pytest

from fabroku_cli.constants import DEFAULT_API_URL
from fabroku_cli.exceptions import ConfigurationError
from fabroku_cli.services.config_service import ConfigService


def test_defaults_written_on_first_use(fabroku_home):
    config = ConfigService().load()

    assert config == {"api_url": DEFAULT_API_URL, "token": None, "user": None}
    assert json.loads((fabroku_home / "config.json").read_text()) == config


def test_session_from_stored_credentials(logged_in):
    session = ConfigService().load_session()

    assert session.is_authenticated
    assert session.user == "octocat"
    assert "secret-token" not in repr(session)


def test_environment_overrides_api_url(logged_in, monkeypatch):
    monkeypatch.setenv("FABROKU_API_URL", "http://localhost:8000")

    assert ConfigService().load_session().api_url == "http://localhost:8000"


def test_dotenv_overrides_api_url(logged_in, tmp_path):
    (tmp_path / "cwd" / ".env").write_text("FABROKU_API_URL=http://localhost:9000\n")

    assert ConfigService().load_session().api_url == "http://localhost:9000"


def test_credentials_round_trip(tmp_path):
    service = ConfigService(tmp_path / "cfg")

    service.set_credentials("tok", "octocat", "https://api.test")
    assert service.load_session().token == "tok"

    service.clear_credentials()
    assert service.load() == {"api_url": DEFAULT_API_URL, "token": None, "user": None}


def test_invalid_json(fabroku_home):
    fabroku_home.mkdir(parents=True)
    (fabroku_home / "config.json").write_text("{not json")

    with pytest.raises(ConfigurationError) as exc:
        ConfigService().load()

    assert "fabroku login" in exc.value.context
