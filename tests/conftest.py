"""
tests/conftest.py

Shared fixtures: an in-memory pasty server mounted through
httpx.MockTransport, and clients wired to it. The local_server fixture is
the only real socket, bound to localhost for transport-level tests.
"""

import itertools
import json
import re
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

from pasty_client import SyncUnauthenticatedClient, UnauthenticatedClient

BASE_URL = "https://pasty.test"

PASTE_PATH = re.compile(r"/api/v2/pastes/([^/]+)")


class FakePasty:
    """Minimal pasty v2 server: info, create, read, update, delete."""

    def __init__(self):
        self.pastes = {}
        self.tokens = {}
        self.requests = []
        self._ids = itertools.count(1)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/v2/info" and request.method == "GET":
            return httpx.Response(200, json={
                "version": "v0.4.0-test",
                "pasteLifetime": -1,
                "modificationTokens": True,
                "reports": False,
            })

        if path == "/api/v2/pastes" and request.method == "POST":
            return self._create(json.loads(request.content))

        match = PASTE_PATH.fullmatch(path)
        if not match:
            return httpx.Response(404, json={"message": "not found"})

        paste_id = match.group(1)
        if paste_id not in self.pastes:
            return httpx.Response(404, json={"message": "paste not found"})

        if request.method == "GET":
            return httpx.Response(200, json=self.pastes[paste_id])

        if request.headers.get("Authorization") != f"Bearer {self.tokens[paste_id]}":
            return httpx.Response(401, json={"message": "unauthorized"})

        if request.method == "PATCH":
            return self._update(paste_id, json.loads(request.content))
        if request.method == "DELETE":
            del self.pastes[paste_id]
            del self.tokens[paste_id]
            return httpx.Response(200)

        return httpx.Response(405)

    def _create(self, body):
        if not body.get("content"):
            return httpx.Response(400, json={"message": "missing paste content"})
        paste_id = f"p{next(self._ids)}"
        token = f"token-{paste_id}"
        paste = {
            "id": paste_id,
            "content": body["content"],
            "created": int(time.time()),
            "metadata": body.get("metadata") or {},
        }
        self.pastes[paste_id] = paste
        self.tokens[paste_id] = token
        return httpx.Response(201, json={**paste, "modificationToken": token})

    def _update(self, paste_id, body):
        paste = self.pastes[paste_id]
        if body.get("content"):
            paste["content"] = body["content"]
        for key, value in (body.get("metadata") or {}).items():
            if value is None:
                paste["metadata"].pop(key, None)
            else:
                paste["metadata"][key] = value
        return httpx.Response(200, json=paste)


@pytest.fixture
def fake_pasty():
    return FakePasty()


@pytest.fixture
def transport(fake_pasty):
    return httpx.MockTransport(fake_pasty.handler)


@pytest.fixture
def client(transport):
    return UnauthenticatedClient(BASE_URL, transport=transport)


@pytest.fixture
def sync_client(transport):
    return SyncUnauthenticatedClient(BASE_URL, transport=transport)


@pytest.fixture
def pasty_home(tmp_path, monkeypatch):
    """Point config and token storage at a temp directory."""
    monkeypatch.setenv("PASTY_HOME", str(tmp_path / "pasty"))
    monkeypatch.delenv("PASTY_URL", raising=False)
    return tmp_path / "pasty"


class _SlowPasteHandler(BaseHTTPRequestHandler):
    """Serves any paste id; the id "slow" answers after a delay."""

    def do_GET(self):
        match = PASTE_PATH.fullmatch(self.path)
        if not match:
            self.send_response(404)
            self.end_headers()
            return

        paste_id = match.group(1)
        if paste_id == "slow":
            time.sleep(0.3)
        body = json.dumps({"id": paste_id, "content": f"content of {paste_id}", "created": 0}).encode()

        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_server():
    """Real HTTP server on localhost, for tests that need a real transport."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _SlowPasteHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def redirect_to_https(request: httpx.Request) -> httpx.Response:
    """http:// answers 308 to the https:// twin, https:// serves instance info."""
    if request.url.scheme == "http":
        return httpx.Response(308, headers={"Location": str(request.url.copy_with(scheme="https"))})
    return httpx.Response(200, json={
        "version": "v0.4.0-test",
        "pasteLifetime": -1,
        "modificationTokens": True,
        "reports": False,
    })
