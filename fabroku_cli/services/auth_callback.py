"""
Login Callback Listener

One-shot local HTTP server that receives the token the platform sends
back after the browser login.
"""

import html
import socket
import time
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Optional
from urllib.parse import parse_qs, urlparse

from fabroku_cli.constants import CALLBACK_PATH, LOGIN_TIMEOUT_SECONDS

PAGE_TEMPLATE = """<!DOCTYPE html>
<html><head><meta charset="utf-8"><title>{title}</title>
<style>
  body{{font-family:system-ui,sans-serif;display:flex;justify-content:center;
  align-items:center;min-height:100vh;margin:0;background:#1a1a2e;color:#eee}}
  div{{text-align:center;padding:2rem}}
  h1{{margin-bottom:1rem}}
</style></head>
<body><div>{body}</div></body></html>"""


@dataclass
class CallbackResult:
    """Query parameters received on /callback."""

    token: Optional[str] = None
    user: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return bool(self.token)

    @classmethod
    def from_query(cls, query: str) -> "CallbackResult":
        params = {key: values[0] for key, values in parse_qs(query).items() if values}
        return cls(
            token=params.get("token"),
            user=params.get("user"),
            error=params.get("error"),
            message=params.get("message"),
        )


def render_page(title: str, body: str) -> bytes:
    return PAGE_TEMPLATE.format(title=html.escape(title), body=body).encode("utf-8")


def find_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class _CallbackHandler(BaseHTTPRequestHandler):
    server: "CallbackServer"

    def do_GET(self):  # noqa: N802
        url = urlparse(self.path)
        if url.path != CALLBACK_PATH:
            self._respond(render_page("Fabroku CLI", "<p>Waiting for callback...</p>"))
            return

        result = CallbackResult.from_query(url.query)
        if result.is_success:
            page = render_page(
                "Fabroku CLI - Authenticated",
                "<h1>Login successful!</h1><p>You can close this window and go back to the terminal.</p>",
            )
        else:
            reason = html.escape(result.message or result.error or "Unknown error")
            page = render_page(
                "Fabroku CLI - Error",
                f"<h1>Authentication error</h1><p>{reason}</p>",
            )
        self._respond(page)
        self.server.result = result

    def _respond(self, page: bytes) -> None:
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(page)))
        self.end_headers()
        self.wfile.write(page)

    def log_message(self, format, *args):
        # Keep the terminal clean
        pass


class CallbackServer(HTTPServer):
    """Serves requests until /callback is hit or the deadline passes."""

    def __init__(self, port: int, host: str = "127.0.0.1"):
        super().__init__((host, port), _CallbackHandler)
        self.result: Optional[CallbackResult] = None

    def wait_for_callback(self, timeout: float = LOGIN_TIMEOUT_SECONDS) -> Optional[CallbackResult]:
        """
        Block until the callback arrives.

        Returns:
            CallbackResult, or None if nothing arrived before the timeout
        """
        deadline = time.monotonic() + timeout
        try:
            while self.result is None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return None
                self.timeout = min(remaining, 1.0)
                self.handle_request()
            return self.result
        finally:
            self.server_close()
