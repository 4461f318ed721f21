"""Tests for app resolution by reference and by git remote."""

import random
from unittest.mock import MagicMock

import pytest

from fabroku_cli.exceptions import (
    APIError,
    AppNotFoundError,
    GitRepositoryNotFoundError,
    NoMatchingAppError,
    ResolutionFailure,
)
from fabroku_cli.models.app import GitIdentity
from fabroku_cli.services.app_resolver import AppResolver, find_app_by_git_url


def _resolver(apps, identity=None):
    api = MagicMock()
    api.list_apps.return_value = apps
    git = MagicMock()
    git.identity.return_value = identity
    return AppResolver(api, git=git), api


class TestFindByReference:
    def test_matches_name(self, make_app):
        target = make_app(id=2, name="web")
        resolver, _ = _resolver([make_app(id=1, name="api"), target])

        assert resolver.find_by_reference("web") == target

    def test_matches_id_as_string(self, make_app):
        target = make_app(id=42, name="web")
        resolver, _ = _resolver([make_app(id=1, name="api"), target])

        assert resolver.find_by_reference("42") == target

    def test_unknown_reference_fails(self, make_app):
        resolver, _ = _resolver([make_app(name="api")])

        with pytest.raises(AppNotFoundError) as exc:
            resolver.find_by_reference("nope")

        assert "fabroku apps" in exc.value.context

    def test_api_errors_propagate(self):
        resolver, api = _resolver([])
        api.list_apps.side_effect = APIError(401, "Invalid token")

        with pytest.raises(APIError) as exc:
            resolver.find_by_reference("api")

        assert exc.value.is_unauthorized


class TestGitResolution:
    def test_ssh_remote_matches_https_app(self, make_app):
        target = make_app(id=3, git="https://github.com/fabrica/web/")
        resolver, _ = _resolver(
            [make_app(id=1, git="https://github.com/fabrica/api"), target],
            identity=GitIdentity("git@github.com:fabrica/web.git", "main"),
        )

        assert resolver.resolve(None, ".") == target

    def test_match_is_independent_of_order(self, make_app):
        target = make_app(id=7, git="git@github.com:fabrica/web.git")
        others = [make_app(id=i, git=f"https://github.com/fabrica/other-{i}") for i in range(5)]
        apps = others + [target]

        for _ in range(5):
            random.shuffle(apps)
            assert find_app_by_git_url(apps, "https://github.com/fabrica/web") == target

    def test_first_match_wins(self, make_app):
        first = make_app(id=1, name="first", git="https://github.com/fabrica/web")
        second = make_app(id=2, name="second", git="git@github.com:fabrica/web.git")

        assert find_app_by_git_url([first, second], "https://github.com/fabrica/web") is first

    def test_apps_without_git_are_skipped(self, make_app):
        target = make_app(id=2, git="https://github.com/fabrica/web")

        assert find_app_by_git_url([make_app(id=1, git=None), target], target.git) is target

    def test_no_match_fails_closed(self, make_app):
        resolver, _ = _resolver(
            [make_app(git="https://github.com/fabrica/api")],
            identity=GitIdentity("https://github.com/fabrica/unknown"),
        )

        with pytest.raises(NoMatchingAppError):
            resolver.resolve(None, ".")

    def test_no_remote_fails_without_api_calls(self):
        resolver, api = _resolver([], identity=None)

        with pytest.raises(GitRepositoryNotFoundError) as exc:
            resolver.resolve(None, "/tmp/project")

        assert isinstance(exc.value, ResolutionFailure)
        assert "--app" in exc.value.context
        api.list_apps.assert_not_called()

    def test_reference_skips_git(self, make_app):
        resolver, _ = _resolver([make_app(name="api")])

        resolver.resolve("api", ".")

        resolver.git.identity.assert_not_called()
