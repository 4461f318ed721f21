"""Shared fixtures: isolated config dir, logged-in session, fake API."""

import json
from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock, patch

import pytest

from fabroku_cli.models.app import App


@pytest.fixture(autouse=True)
def fabroku_home(tmp_path: Path, monkeypatch) -> Path:
    """Point the CLI at a throwaway config dir and working directory."""
    home = tmp_path / "fabroku-home"
    monkeypatch.setenv("FABROKU_HOME", str(home))
    monkeypatch.delenv("FABROKU_API_URL", raising=False)
    monkeypatch.setenv("COLUMNS", "200")
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return home


@pytest.fixture
def logged_in(fabroku_home: Path) -> Path:
    fabroku_home.mkdir(parents=True, exist_ok=True)
    config_path = fabroku_home / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "api_url": "https://api.test",
                "token": "secret-token",
                "user": "octocat",
            }
        )
    )
    return config_path


@pytest.fixture
def fake_api():
    """Replace the API client every authenticated command builds."""
    api = MagicMock(name="FabrokuAPI")
    with patch(
        "fabroku_cli.base.authenticated_command.FabrokuAPI", return_value=api
    ) as api_class:
        api.api_class = api_class
        yield api


@pytest.fixture
def no_sleep():
    with patch("fabroku_cli.services.deploy_poller.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def make_app() -> Callable[..., App]:
    def _make_app(
        id=1,
        name="my-api",
        git="https://github.com/fabrica/my-api",
        status="RUNNING",
        domain=None,
        project=10,
    ) -> App:
        return App(id=id, name=name, git=git, status=status, domain=domain, project=project)

    return _make_app


@pytest.fixture
def backend_project(tmp_path: Path) -> Path:
    """Directory with every backend deploy file in place."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "Procfile").write_text("web: gunicorn config.wsgi\n")
    (project / "requirements.txt").write_text("django\n")
    (project / "runtime.txt").write_text("python-3.13.2\n")
    return project
