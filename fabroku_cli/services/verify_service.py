"""
Project Verification Service

Checks that a project directory has the files the platform needs to
deploy it, and optionally generates them from templates.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union

from fabroku_cli.models.results import AppType, FileCheck, RequiredFile, VerificationReport

STATIC_JSON = {
    "root": "dist/",
    "clean_urls": True,
    "routes": {"/**": "index.html"},
    "headers": {
        "/**": {"Cache-Control": "public, max-age=0, must-revalidate"},
        "/assets/**": {"Cache-Control": "public, max-age=31536000, immutable"},
    },
}

FRONTEND_FILES = (
    RequiredFile(
        ".buildpacks",
        "Buildpacks for static deploys",
        "https://github.com/heroku/heroku-buildpack-nodejs\n"
        "https://github.com/dokku/buildpack-nginx\n",
    ),
    RequiredFile(".static", "Static build marker", ""),
    RequiredFile(
        "static.json",
        "Static server configuration (SPA routes)",
        json.dumps(STATIC_JSON, indent=2) + "\n",
    ),
)

BACKEND_FILES = (
    RequiredFile(
        "Procfile",
        "Command that starts the server",
        "web: gunicorn config.wsgi --bind 0.0.0.0:$PORT\n",
    ),
    # Dependencies can't be guessed, never generated
    RequiredFile("requirements.txt", "Python dependencies of the project"),
    RequiredFile("runtime.txt", "Python version used to deploy", "python-3.13.2\n"),
)

REQUIRED_FILES: Dict[AppType, tuple] = {
    AppType.FRONTEND: FRONTEND_FILES,
    AppType.BACKEND: BACKEND_FILES,
}

BACKEND_MARKERS = ("manage.py", "requirements.txt", "setup.py", "pyproject.toml", "Pipfile")


def detect_app_type(directory: Path) -> Optional[AppType]:
    """
    Guess the app type from marker files.

    package.json means frontend, unless a Procfile runs node/npm.
    """
    if (directory / "package.json").exists():
        procfile = directory / "Procfile"
        if procfile.exists():
            content = procfile.read_text(encoding="utf-8", errors="replace")
            if "node" in content or "npm" in content:
                return AppType.BACKEND
        return AppType.FRONTEND

    if any((directory / marker).exists() for marker in BACKEND_MARKERS):
        return AppType.BACKEND

    return None


class ProjectVerifier:
    """Verifies (and with fix=True repairs) a project directory."""

    def __init__(
        self,
        directory: Union[str, Path] = ".",
        app_type: Optional[Union[AppType, str]] = None,
        fix: bool = False,
    ):
        self.directory = Path(directory).resolve()
        self.app_type = AppType(app_type) if isinstance(app_type, str) else app_type
        self.fix = fix

    def verify(self) -> VerificationReport:
        app_type = self.app_type or detect_app_type(self.directory)
        report = VerificationReport(directory=self.directory, app_type=app_type, fix=self.fix)
        if app_type is None:
            return report

        for required in REQUIRED_FILES[app_type]:
            path = self.directory / required.name
            check = FileCheck(required=required, present=path.exists())
            if not check.present and self.fix and required.can_generate:
                path.write_text(required.template, encoding="utf-8")
                check.generated = True
            report.checks.append(check)

        return report
