from __future__ import annotations

import json
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Dict, List, Optional, Tuple


def find_free_port() -> int:
    """Find a free port for the test server."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        s.listen(1)
        return s.getsockname()[1]


def make_agent_response(success: bool = True, result: Any = "ok") -> Dict[str, Any]:
    """Result envelope as the golang agent writes it."""
    return {
        "code": 200 if success else 56000,
        "success": success,
        "err": "" if success else "target function not found",
        "result": result if success else None,
    }


class MockAgentServer:
    """Mock HTTP server that simulates the in-process golang agent.

    Records every request (path + decoded JSON body) and answers with a
    configurable status, body, delay and per-byte write delay.
    """

    def __init__(
        self,
        port: int,
        status: int = 200,
        body: Optional[bytes] = None,
        response_delay: float = 0.0,
        chunk_delay: float = 0.0,
    ):
        self.port = port
        self.status = status
        self.body = body if body is not None else json.dumps(make_agent_response()).encode()
        self.response_delay = response_delay
        self.chunk_delay = chunk_delay
        self.requests: List[Tuple[str, Dict[str, Any], Dict[str, str]]] = []
        self.server: Optional[HTTPServer] = None
        self.thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

        server_ref = self

        class Handler(BaseHTTPRequestHandler):
            def log_message(self, format, *args):
                pass  # Suppress logging

            def do_POST(self):
                content_length = int(self.headers.get("Content-Length", 0))
                raw = self.rfile.read(content_length)
                with server_ref._lock:
                    headers = {k.lower(): v for k, v in self.headers.items()}
                    server_ref.requests.append((self.path, json.loads(raw), headers))

                if server_ref.response_delay > 0:
                    time.sleep(server_ref.response_delay)

                self.send_response(server_ref.status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(server_ref.body)))
                self.end_headers()
                if server_ref.chunk_delay <= 0:
                    self.wfile.write(server_ref.body)
                    return
                # Trickle the body one byte at a time
                try:
                    for i in range(len(server_ref.body)):
                        self.wfile.write(server_ref.body[i : i + 1])
                        self.wfile.flush()
                        time.sleep(server_ref.chunk_delay)
                except (BrokenPipeError, ConnectionResetError):
                    pass  # Client gave up

        self.handler_class = Handler

    @property
    def request_count(self) -> int:
        with self._lock:
            return len(self.requests)

    def start(self):
        """Start the mock server."""
        self.server = HTTPServer(("localhost", self.port), self.handler_class)
        self.thread = threading.Thread(target=self.server.serve_forever)
        self.thread.daemon = True
        self.thread.start()
        # Give server time to start
        time.sleep(0.1)

    def stop(self):
        """Stop the mock server."""
        if self.server:
            self.server.shutdown()
            self.server.server_close()
        if self.thread:
            self.thread.join(timeout=5.0)
