"""Fixtures — fake requests sessions and responses, local redirecting server."""

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, Optional
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

ROOT_HTML = '<html><link href="/style.css"/><img src="pic.png"></html>'


def make_response(
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
    content: bytes = b"",
) -> MagicMock:
    """Build a stand-in for ``requests.Response``."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = CaseInsensitiveDict(headers or {})
    resp.content = content
    resp.text = content.decode("utf-8")

    def raise_for_status():
        if status_code >= 400:
            raise requests.HTTPError(f"{status_code} Error")

    resp.raise_for_status.side_effect = raise_for_status
    return resp


def make_session(root: Optional[MagicMock] = None, heads: Optional[dict] = None) -> MagicMock:
    """Session whose GET returns ``root`` and whose HEAD looks up ``heads`` by URL.

    A ``heads`` value that is an exception instance is raised instead.
    """
    heads = heads or {}
    session = MagicMock(spec=requests.Session)
    session.get.return_value = root if root is not None else make_response(content=b"")

    def head(url, **kwargs):
        outcome = heads.get(url)
        if outcome is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    session.head.side_effect = head
    return session


@pytest.fixture
def root_html():
    return ROOT_HTML


@pytest.fixture
def example_session():
    """Session serving the two-resource example page on http://example.com."""
    return make_session(
        root=make_response(content=ROOT_HTML.encode("utf-8")),
        heads={
            "http://example.com/style.css": make_response(
                headers={"Content-Length": "500", "Content-Type": "text/css"}
            ),
            "http://example.com/pic.png": make_response(
                headers={"Content-Length": "2000", "Content-Type": "image/png"}
            ),
        },
    )


class _RedirectChainHandler(BaseHTTPRequestHandler):
    """Serves ``/hop/N`` as a 302 to ``/hop/N-1``; ``/hop/0`` is the final answer.

    ``/hop/N`` pages hold ``REDIRECT_PAGE_HTML`` and ``/hop/N.png`` paths are
    images of ``REDIRECT_IMAGE_SIZE`` bytes.
    """

    def _respond(self, send_body: bool) -> None:
        path = self.path
        suffix = ".png" if path.endswith(".png") else ""
        hops = int(path[len("/hop/"):len(path) - len(suffix)])
        if hops > 0:
            self.send_response(302)
            self.send_header("Location", f"/hop/{hops - 1}{suffix}")
            self.send_header("Content-Length", "0")
            self.end_headers()
            return
        if suffix:
            body = b"\x89PNG" + b"\0" * (REDIRECT_IMAGE_SIZE - 4)
            content_type = "image/png"
        else:
            body = REDIRECT_PAGE_HTML.encode("utf-8")
            content_type = "text/html; charset=utf-8"
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if send_body:
            self.wfile.write(body)

    def do_GET(self):
        self._respond(send_body=True)

    def do_HEAD(self):
        self._respond(send_body=False)

    def log_message(self, format, *args):
        pass


REDIRECT_PAGE_HTML = '<html><img src="/hop/2.png"><img src="/hop/4.png"></html>'
REDIRECT_IMAGE_SIZE = 64


@pytest.fixture
def redirect_server(monkeypatch):
    """Base URL of a local server answering through chains of 302 redirects."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    server = ThreadingHTTPServer(("127.0.0.1", 0), _RedirectChainHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()
