"""A throwaway local HTTP payment server for integration tests."""

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


class PaymentServer:
    """Answers every POST with a configurable status and body, recording requests."""

    def __init__(self):
        self.status = 200
        self.body = b"OK"
        self.requests = []

        server = self

        class Handler(BaseHTTPRequestHandler):
            def do_POST(self):
                length = int(self.headers.get("Content-Length", 0))
                server.requests.append(
                    {
                        "path": self.path,
                        "content_type": self.headers.get("Content-Type"),
                        "body": json.loads(self.rfile.read(length)),
                    }
                )
                self.send_response(server.status)
                self.send_header("Content-Length", str(len(server.body)))
                self.end_headers()
                self.wfile.write(server.body)

            def log_message(self, format, *args):  # noqa: A002
                pass

        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        self.url = f"http://127.0.0.1:{self._httpd.server_port}/pay"
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    def configure(self, status, body=b""):
        self.status = status
        self.body = body

    def start(self):
        self._thread.start()

    def close(self):
        self._httpd.shutdown()
        self._httpd.server_close()


@pytest.fixture
def payment_server():
    server = PaymentServer()
    server.start()
    yield server
    server.close()
