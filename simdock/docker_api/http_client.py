"""
HTTP Client for Docker Unix Socket
Pure Python implementation using http.client and socket
"""

import socket
import http.client
import json
import logging
import time
from functools import partial
from typing import Optional, Dict, Any, Callable
from urllib.parse import quote

from .exceptions import TransportError, UnexpectedStatusError, DecodeError

logger = logging.getLogger(__name__)

# Every request gets the same fixed timeout (seconds), covering the whole round trip
DEFAULT_TIMEOUT = 5

READ_CHUNK_SIZE = 64 * 1024


class UnixHTTPConnection(http.client.HTTPConnection):
    """HTTP connection over Unix socket"""

    def __init__(self, socket_path: str, timeout: float = DEFAULT_TIMEOUT):
        # Host is only a placeholder, routing is done by the socket path
        super().__init__('localhost', timeout=timeout)
        self.socket_path = socket_path

    def connect(self):
        """Connect to Unix socket"""
        self.sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.sock.settimeout(self.timeout)
        self.sock.connect(self.socket_path)


class Response:
    """Status code and raw body of a finished request"""

    def __init__(self, status: int, body: bytes):
        self.status = status
        self.body = body

    def __repr__(self):
        return f"<Response [{self.status}]>"

    def json(self) -> Any:
        """
        Decode the body as JSON

        Raises:
            DecodeError: If the body is empty or not valid JSON
        """
        if not self.body:
            raise DecodeError("empty response body")
        try:
            return json.loads(self.body.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"invalid JSON response: {e}") from e


class DockerHTTPClient:
    """HTTP client for Docker daemon"""

    def __init__(self, socket_path: str, timeout: float = DEFAULT_TIMEOUT,
                 connection_factory: Optional[Callable[[], http.client.HTTPConnection]] = None):
        """
        Initialize Docker HTTP client

        The socket is not touched here, a missing socket only shows up
        as a TransportError on the first request.

        Args:
            socket_path: Docker socket path (a unix:// prefix is stripped)
            timeout: Request timeout in seconds
            connection_factory: Callable returning a fresh connection per request
        """
        self.socket_path = socket_path.replace('unix://', '')
        self.timeout = timeout

        if connection_factory is None:
            connection_factory = partial(UnixHTTPConnection, self.socket_path, timeout=timeout)
        self._connection_factory = connection_factory

    @staticmethod
    def _build_url(path: str, params: Optional[Dict[str, Any]] = None) -> str:
        if not params:
            return path

        query_parts = []
        for key, value in params.items():
            if isinstance(value, bool):
                value = 'true' if value else 'false'
            query_parts.append(f"{key}={quote(str(value))}")
        return f"{path}?{'&'.join(query_parts)}"

    @staticmethod
    def _limit_to_deadline(conn, deadline: float):
        """Shrink the socket timeout to what is left of the request deadline"""
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise socket.timeout('request deadline exceeded')
        if getattr(conn, 'sock', None) is not None:
            conn.sock.settimeout(remaining)

    def _read_body(self, conn, response, deadline: float) -> bytes:
        # read1 does at most one recv, so the deadline is checked between recvs
        chunks = []
        while True:
            self._limit_to_deadline(conn, deadline)
            chunk = response.read1(READ_CHUNK_SIZE)
            if not chunk:
                return b''.join(chunks)
            chunks.append(chunk)

    def request(self, method: str, path: str, data: Optional[Dict[str, Any]] = None,
                params: Optional[Dict[str, Any]] = None,
                expected_status: int = http.client.OK) -> Response:
        """
        Make HTTP request to Docker daemon

        Args:
            method: HTTP method (GET, POST, DELETE)
            path: API path
            data: JSON data for request body
            params: URL query parameters
            expected_status: The only status code treated as success

        Returns:
            Response with the undecoded body

        Raises:
            TransportError: If the daemon can not be reached or times out
            UnexpectedStatusError: If the status differs from expected_status
        """
        url = self._build_url(path, params)

        headers = {'Host': 'localhost'}
        body = None
        if data is not None:
            body = json.dumps(data).encode('utf-8')
        if method == 'POST':
            # Docker expects a JSON content type even for empty bodies
            headers['Content-Type'] = 'application/json'
            headers['Content-Length'] = str(len(body) if body else 0)

        deadline = time.monotonic() + self.timeout
        conn = self._connection_factory()
        try:
            conn.request(method, url, body=body, headers=headers)
            self._limit_to_deadline(conn, deadline)
            response = conn.getresponse()
            status = response.status
            payload = self._read_body(conn, response, deadline)
        except (OSError, http.client.HTTPException) as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        finally:
            conn.close()

        logger.debug(f"{method} {url} -> {status}")

        result = Response(status, payload)
        if status != expected_status:
            raise UnexpectedStatusError(expected_status, status, response=result)

        return result

    def get(self, path: str, **kwargs) -> Response:
        """Make GET request"""
        return self.request('GET', path, **kwargs)

    def post(self, path: str, **kwargs) -> Response:
        """Make POST request"""
        return self.request('POST', path, **kwargs)

    def delete(self, path: str, **kwargs) -> Response:
        """Make DELETE request"""
        return self.request('DELETE', path, **kwargs)
