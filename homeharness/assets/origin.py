"""
AssetOrigin - serves generated test pages over local HTTP.

Each origin owns one listening socket and one uvicorn server thread. It is
meant to live for exactly one scenario attempt: construct, start (or use as a
context manager), stop. Nothing here is shared between instances.
"""
import socket
import threading
from typing import Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from jinja2 import Environment

from ..errors import AssetOriginError, BindError
from ..logging_config import get_logger
from ..waits import wait_until
from .models import PageFixture

logger = get_logger("homeharness.assets")

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en-US">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{{ page.title }}</title>
</head>
<body>
  <h1 data-testid="page_heading">{{ page.title }}</h1>
  <p id="content" data-testid="page_content">{{ page.content }}</p>
</body>
</html>
"""

_templates = Environment(autoescape=True)
_page_template = _templates.from_string(PAGE_TEMPLATE)


def render_page(page: PageFixture) -> str:
    return _page_template.render(page=page)


class AssetOrigin:
    """A scenario-scoped local origin for generic test pages."""

    STARTUP_TIMEOUT = 10.0
    SHUTDOWN_TIMEOUT = 5.0

    def __init__(self, host: str = "127.0.0.1", port: int = 0):
        self.host = host
        self.requested_port = port
        self.port: Optional[int] = None
        self._socket: Optional[socket.socket] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None
        self._pages: Dict[int, PageFixture] = {}
        self._request_counts: Dict[int, int] = {}
        self._lock = threading.Lock()
        self.app = self._build_app()

    # ==================== Lifecycle ====================

    def start(self) -> "AssetOrigin":
        """Bind the endpoint and start serving. Raises BindError on failure."""
        if self.is_running:
            return self

        sock = self._bind()
        config = uvicorn.Config(self.app, log_level="warning", lifespan="off", access_log=False)
        server = uvicorn.Server(config)
        thread = threading.Thread(
            target=server.run,
            kwargs={"sockets": [sock]},
            name=f"asset-origin-{self.port}",
            daemon=True,
        )
        self._socket, self._server, self._thread = sock, server, thread
        thread.start()

        started = wait_until(
            lambda: server.started or not thread.is_alive(),
            timeout=self.STARTUP_TIMEOUT,
            interval=0.01,
        )
        if not started or not server.started:
            self.stop()
            raise BindError(self.host, self.requested_port, "server did not start")

        logger.info(f"Asset origin listening on {self.base_url}")
        return self

    def stop(self):
        """Stop serving and release the port. Safe to call more than once."""
        server, thread, sock = self._server, self._thread, self._socket
        self._server = self._thread = self._socket = None

        if server is not None:
            server.should_exit = True
        if thread is not None and thread.is_alive():
            thread.join(timeout=self.SHUTDOWN_TIMEOUT)
            if thread.is_alive():
                logger.warning(f"Asset origin thread on port {self.port} did not exit in time")
        if sock is not None:
            sock.close()
            logger.info(f"Asset origin on port {self.port} stopped")

        self._pages.clear()

    def __enter__(self) -> "AssetOrigin":
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    @property
    def is_running(self) -> bool:
        return self._server is not None and self._server.started

    @property
    def base_url(self) -> str:
        if self.port is None:
            raise AssetOriginError("Asset origin has never been started")
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"http://{host}:{self.port}"

    # ==================== Pages ====================

    def get_page(self, index: int) -> PageFixture:
        """Fixture for `index`; the same object for the same index until stop()."""
        if not self.is_running:
            raise AssetOriginError("Asset origin is not running")
        page = self._pages.get(index)
        if page is None:
            page = PageFixture.generate(self.base_url, index)
            self._pages[index] = page
        return page

    def request_count(self, index: int) -> int:
        with self._lock:
            return self._request_counts.get(index, 0)

    # ==================== Internal Helpers ====================

    def _bind(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.requested_port))
        except OSError as e:
            sock.close()
            logger.error(f"Asset origin bind failed on {self.host}:{self.requested_port}: {e}")
            raise BindError(self.host, self.requested_port, str(e)) from e
        self.port = sock.getsockname()[1]
        return sock

    def _record_request(self, index: int):
        with self._lock:
            self._request_counts[index] = self._request_counts.get(index, 0) + 1

    def _build_app(self) -> FastAPI:
        app = FastAPI(title="homeharness asset origin", docs_url=None, redoc_url=None, openapi_url=None)

        @app.get("/pages/generic{index}.html", response_class=HTMLResponse)
        def generic_page(index: str):
            if not (index.isascii() and index.isdigit()) or int(index) < 1:
                raise HTTPException(status_code=404, detail="Unknown page")
            number = int(index)
            self._record_request(number)
            page = PageFixture.generate(self.base_url, number)
            return HTMLResponse(render_page(page))

        return app
