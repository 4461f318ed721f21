"""
Fabroku API Client

Authenticated JSON-over-HTTPS wrapper with named endpoints.
"""

import json
from typing import Any, Dict, List, Optional

import requests

from fabroku_cli.constants import AUTH_SCHEME, REQUEST_TIMEOUT_SECONDS
from fabroku_cli.exceptions import APIConnectionError, APIError
from fabroku_cli.models.app import App
from fabroku_cli.models.deployment import DeployTask, StatusSnapshot
from fabroku_cli.models.session import Session


class FabrokuAPI:
    """
    HTTP client for the Fabroku API.

    Never retries: every non-success response becomes an APIError and
    callers decide what the status code means.
    """

    def __init__(
        self,
        session: Session,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = session.api_url.rstrip("/")
        self.token = session.token
        self.timeout = timeout
        self.http = http or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"{AUTH_SCHEME} {self.token}"
        return headers

    def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            body: Optional JSON body

        Returns:
            Decoded JSON (None for an empty body)

        Raises:
            APIError: On any non-2xx response
            APIConnectionError: If the API could not be reached
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(
                method,
                url,
                headers=self.headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise APIConnectionError(f"Could not reach {url}: {e}")

        if not response.ok:
            raise APIError(response.status_code, self._error_detail(response))

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        """Use the body's detail field, the JSON body itself, or the raw text."""
        try:
            data = response.json()
        except ValueError:
            return response.text

        if isinstance(data, dict) and data.get("detail"):
            return str(data["detail"])
        return json.dumps(data)

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", path, body)

    # --- Endpoints ---

    def check_auth(self) -> Any:
        return self.get("/api/auth/check/")

    def get_user_me(self) -> Dict[str, Any]:
        return self.get("/api/auth/users/me/") or {}

    def list_apps(self) -> List[App]:
        """List apps; accepts both paginated and bare-list responses."""
        data = self.get("/api/apps/apps/")
        if isinstance(data, dict):
            data = data.get("results") or []
        return [App.from_dict(item) for item in data or []]

    def redeploy_app(self, app_id) -> DeployTask:
        return DeployTask.from_dict(self.post(f"/api/apps/apps/{app_id}/redeploy/"))

    def get_app_status(self, app_id) -> StatusSnapshot:
        return StatusSnapshot.from_dict(self.get(f"/api/apps/apps/{app_id}/get_app_status/"))

    def diagnose_webhook(self, app_id) -> Dict[str, Any]:
        return self.get(f"/api/apps/apps/{app_id}/diagnose_webhook/")

    def setup_webhook(self, app_id) -> Dict[str, Any]:
        return self.post(f"/api/apps/apps/{app_id}/setup_webhook/")

    def test_commit_status(self, app_id) -> Dict[str, Any]:
        return self.post(f"/api/apps/apps/{app_id}/test_commit_status/")
