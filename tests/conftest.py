"""Shared fixtures: an in-process Docker daemon mock on a unix socket."""

from __future__ import annotations

import json
import logging
import os
import shutil
import socketserver
import tempfile
import threading
import time
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler
from pathlib import Path
from typing import Any, Callable, Iterator, List

import pytest

from simdock import DockerClient, new_client

TESTFILES = Path(__file__).parent / "testfiles"


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: Any
    body: bytes

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))


class _DaemonHandler(BaseHTTPRequestHandler):
    def _reply(self) -> None:
        daemon: MockDaemon = self.server.mock  # type: ignore[attr-defined]
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        daemon.requests.append(RecordedRequest(self.command, self.path, self.headers, body))

        if daemon.delay:
            time.sleep(daemon.delay)

        payload = b"" if daemon.status == 204 else daemon.body
        self.send_response(daemon.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if daemon.drip_delay:
            for i in range(len(payload)):
                time.sleep(daemon.drip_delay)
                self.wfile.write(payload[i:i + 1])
                self.wfile.flush()
        elif payload:
            self.wfile.write(payload)

    do_GET = _reply
    do_POST = _reply
    do_DELETE = _reply

    def log_message(self, format: str, *args: Any) -> None:
        pass


class _UnixServer(socketserver.ThreadingMixIn, socketserver.UnixStreamServer):
    daemon_threads = True


class MockDaemon:
    """Answers every request with the configured status and body."""

    def __init__(self, socket_path: str) -> None:
        self.socket_path = socket_path
        self.status = 200
        self.body = b""
        self.delay = 0.0
        # Seconds to wait before each body byte
        self.drip_delay = 0.0
        self.requests: List[RecordedRequest] = []
        self._server = _UnixServer(socket_path, _DaemonHandler)
        self._server.mock = self  # type: ignore[attr-defined]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()

    def respond(self, status: int = 200, body: bytes | str = b"") -> None:
        self.status = status
        self.body = body.encode("utf-8") if isinstance(body, str) else body

    def respond_with_file(self, name: str, status: int = 200) -> None:
        self.respond(status, (TESTFILES / name).read_bytes())

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def mock_daemon() -> Iterator[MockDaemon]:
    # AF_UNIX paths are limited to ~108 bytes, so stay out of pytest's tmp_path
    sock_dir = tempfile.mkdtemp(prefix="simdock-")
    daemon = MockDaemon(os.path.join(sock_dir, "docker.sock"))
    daemon.start()
    yield daemon
    daemon.stop()
    shutil.rmtree(sock_dir, ignore_errors=True)


@pytest.fixture
def client(mock_daemon: MockDaemon) -> DockerClient:
    return new_client(mock_daemon.socket_path)


@pytest.fixture
def missing_socket() -> Iterator[str]:
    sock_dir = tempfile.mkdtemp(prefix="simdock-")
    yield os.path.join(sock_dir, "absent.sock")
    shutil.rmtree(sock_dir, ignore_errors=True)


@pytest.fixture
def testfile() -> Callable[[str], Any]:
    def load(name: str) -> Any:
        return json.loads((TESTFILES / name).read_text(encoding="utf-8"))

    return load
