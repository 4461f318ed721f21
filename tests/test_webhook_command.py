"""Tests for `fabroku webhook`."""

from click.testing import CliRunner

from fabroku_cli.exceptions import APIError
from fabroku_cli.main import cli


def _diagnosis(webhook_ok=True, **overrides):
    checks = {
        "backend_url_public": {"ok": True, "message": "https://api.fabroku.dev"},
        "user_git_token": {"ok": True, "message": "Token present"},
        "project_git_token": {"ok": True, "message": "2 members with token"},
        "git_url_parseable": {"ok": True, "message": "fabrica/my-api"},
        "webhook_exists": {"ok": webhook_ok, "message": "Webhook found" if webhook_ok else "No webhook"},
    }
    checks.update(overrides)
    return {
        "app": {"name": "my-api", "git": "https://github.com/fabrica/my-api", "branch": "main"},
        "webhook_url": "https://api.fabroku.dev/api/webhooks/github/",
        "checks": checks,
    }


def test_lists_apps_without_id(logged_in, fake_api, make_app):
    fake_api.list_apps.return_value = [make_app(id=7, name="my-api")]

    result = CliRunner().invoke(cli, ["webhook"])

    assert result.exit_code == 0, result.output
    assert "Your apps:" in result.output
    assert "7 - my-api (https://github.com/fabrica/my-api)" in result.output
    fake_api.diagnose_webhook.assert_not_called()


def test_all_checks_ok(logged_in, fake_api):
    fake_api.diagnose_webhook.return_value = _diagnosis()

    result = CliRunner().invoke(cli, ["webhook", "7"])

    assert result.exit_code == 0, result.output
    assert "Webhook Diagnosis" in result.output
    assert "App: #7" in result.output
    assert "Public BACKEND_URL" in result.output
    assert "Webhook on GitHub" in result.output
    assert "Everything looks OK!" in result.output
    fake_api.diagnose_webhook.assert_called_once_with("7")
    fake_api.setup_webhook.assert_not_called()


def test_missing_webhook_is_created(logged_in, fake_api):
    fake_api.diagnose_webhook.return_value = _diagnosis(webhook_ok=False)
    fake_api.setup_webhook.return_value = {
        "status": "webhook criado",
        "webhook_url": "https://api.fabroku.dev/api/webhooks/github/",
        "hook_id": 99,
    }

    result = CliRunner().invoke(cli, ["webhook", "7"])

    assert result.exit_code == 0, result.output
    assert "Problems found" in result.output
    assert "Webhook created successfully!" in result.output
    assert "Hook ID: 99" in result.output
    fake_api.setup_webhook.assert_called_once_with("7")


def test_setup_error_does_not_abort(logged_in, fake_api):
    fake_api.diagnose_webhook.return_value = _diagnosis()
    fake_api.setup_webhook.side_effect = APIError(403, "Missing admin:repo_hook scope")
    fake_api.test_commit_status.return_value = {
        "repo_name": "fabrica/my-api",
        "token_preview": "ghp_...abcd",
        "repo_access": {"ok": True, "message": "OK"},
        "branch_access": {"ok": True, "message": "main", "sha": "abc123"},
        "create_status": {"ok": True, "message": "Created"},
    }

    result = CliRunner().invoke(cli, ["webhook", "7", "--setup", "--test"])

    assert result.exit_code == 0, result.output
    assert "Error creating webhook" in result.output
    assert "Missing admin:repo_hook scope" in result.output
    assert "Commit status works!" in result.output


def test_existing_webhook(logged_in, fake_api):
    fake_api.diagnose_webhook.return_value = _diagnosis()
    fake_api.setup_webhook.return_value = {"status": "webhook já existe", "hook_id": 12}

    result = CliRunner().invoke(cli, ["webhook", "7", "--setup"])

    assert "Webhook is already configured." in result.output


def test_repo_access_failure_stops_test(logged_in, fake_api):
    fake_api.diagnose_webhook.return_value = _diagnosis()
    fake_api.test_commit_status.return_value = {
        "repo_access": {"ok": False, "message": "Forbidden", "error": "403 Forbidden"},
        "branch_access": {"ok": True, "message": "main"},
    }

    result = CliRunner().invoke(cli, ["webhook", "7", "--test"])

    assert "Error: 403 Forbidden" in result.output
    assert "Branch access" not in result.output


def test_failed_hints(logged_in, fake_api):
    fake_api.diagnose_webhook.return_value = _diagnosis(
        backend_url_public={"ok": False, "message": "localhost", "value": "http://localhost:8000"},
        user_git_token={"ok": False, "message": "No token"},
    )

    result = CliRunner().invoke(cli, ["webhook", "7"])

    assert "Current value: http://localhost:8000" in result.output
    assert "BACKEND_URL is set to localhost" in result.output
    assert "Log in to Fabroku again" in result.output


def test_diagnosis_error_exits(logged_in, fake_api):
    fake_api.diagnose_webhook.side_effect = APIError(404, "Not found.")

    result = CliRunner().invoke(cli, ["webhook", "999"])

    assert result.exit_code == 1
    assert "Not found." in result.output
