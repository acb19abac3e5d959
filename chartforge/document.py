"""Standalone HTML documents for chart configurations.

A document loads Chart.js, declares one canvas named after the chart id, and
instantiates the chart with the serialized configuration. Documents can be
written to disk or served by a small background HTTP responder whose lifetime
is owned by the returned `ChartServer` handle.
"""

from __future__ import annotations

import logging
import os
import socket
import threading
import time
from pathlib import Path
from types import TracebackType

import numpy as np
import uvicorn
from django.utils.html import format_html
from django.utils.safestring import mark_safe
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from . import settings
from .errors import InvalidArgument
from .jsliteral import js_string
from .schema import ChartSpec
from .serializer import serialize_chart

LOGGER = logging.getLogger(__name__)

MIN_PORT = 1
MAX_PORT = 65535

_DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <script src="{}"></script>
  </head>
  <body>
    <div>
      <canvas id="{}" style="width:100%;max-width:1000px"></canvas>
    </div>
    <script>
new Chart({}, {});
    </script>
  </body>
</html>
"""


def chart_html(spec: ChartSpec) -> str:
    """Return a complete HTML document that renders `spec`.

    Args:
        spec: Chart to embed.

    Returns:
        HTML text. Only the canvas id and the embedded configuration vary
        between charts.
    """

    return str(
        format_html(
            _DOCUMENT_TEMPLATE,
            settings.CHARTJS_URL,
            spec.chart_id,
            mark_safe(js_string(spec.chart_id)),
            mark_safe(serialize_chart(spec)),
        )
    )


def save_chart_html(spec: ChartSpec, path: str | os.PathLike[str]) -> Path:
    """Write the HTML document for `spec` to `path` (UTF-8).

    Returns:
        The written path.

    Raises:
        OSError: When the path cannot be opened for writing.
    """

    target = Path(path)
    html = chart_html(spec)
    with target.open("w", encoding="utf-8") as handle:
        handle.write(html)
    LOGGER.info("Saved %s chart %r to %s.", spec.kind, spec.chart_id, target)
    return target


class ChartServer:
    """A running HTTP responder serving one chart document.

    The document is served by a FastAPI app under uvicorn on a daemon thread
    until `stop` is called. `stop` is idempotent, and the handle is a context
    manager.
    """

    def __init__(self, html: str, *, host: str, port: int) -> None:
        """Bind the responder and start serving.

        Args:
            html: Document returned for every GET request.
            host: Interface to bind.
            port: TCP port to bind.

        Raises:
            OSError: When the address cannot be bound.
        """

        self.host = host
        self._lock = threading.Lock()
        # Bind here so address errors surface in the caller's thread.
        self._socket = socket.create_server((host, port))
        self.port = self._socket.getsockname()[1]
        server = uvicorn.Server(
            uvicorn.Config(
                _document_app(html),
                log_config=None,
                log_level="warning",
                access_log=False,
                lifespan="off",
            )
        )
        self._thread = threading.Thread(
            target=server.run,
            kwargs={"sockets": [self._socket]},
            name=f"chartforge-serve-{self.port}",
            daemon=True,
        )
        self._thread.start()
        while not server.started and self._thread.is_alive():
            time.sleep(0.01)
        if not server.started:
            self._socket.close()
            raise OSError(f"Chart server on {self.url} exited during startup.")
        self._server: uvicorn.Server | None = server

    @property
    def url(self) -> str:
        """Base URL of the responder."""

        return f"http://{self.host}:{self.port}/"

    @property
    def is_running(self) -> bool:
        """Whether the responder is still accepting requests."""

        return self._server is not None

    def stop(self) -> None:
        """Stop the responder and release its socket. Safe to call repeatedly."""

        with self._lock:
            server, self._server = self._server, None
        if server is None:
            return
        server.should_exit = True
        self._thread.join()
        self._socket.close()
        LOGGER.info("Stopped chart server on %s.", self.url)

    def __enter__(self) -> ChartServer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


def _document_app(html: str) -> FastAPI:
    """Return an app answering every GET path with `html`."""

    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/{path:path}", response_class=HTMLResponse)
    async def document(path: str) -> HTMLResponse:
        return HTMLResponse(content=html)

    return app


def serve_chart(spec: ChartSpec, port: int | None = None, *, host: str | None = None) -> ChartServer:
    """Serve the HTML document for `spec` in the background.

    Args:
        spec: Chart to serve.
        port: TCP port in [1, 65535]. Defaults to ``settings.DEFAULT_PORT``.
        host: Interface to bind. Defaults to ``settings.SERVE_HOST``.

    Returns:
        ChartServer handle; call `ChartServer.stop` to shut it down.

    Raises:
        InvalidArgument: When `port` is not an integer in [1, 65535].
        OSError: When the address cannot be bound.
    """

    if port is None:
        port = settings.DEFAULT_PORT
    validate_port(port)
    server = ChartServer(chart_html(spec), host=host or settings.SERVE_HOST, port=int(port))
    LOGGER.info("Serving %s chart %r at %s.", spec.kind, spec.chart_id, server.url)
    return server


def validate_port(port: object) -> None:
    """Ensure `port` is an integer TCP port.

    Raises:
        InvalidArgument: When `port` is not an integer in [1, 65535].
    """

    if isinstance(port, (bool, np.bool_)) or not isinstance(port, (int, np.integer)):
        raise InvalidArgument(f"port must be a scalar integer value assigning a valid port; got {port!r}.")
    if not MIN_PORT <= int(port) <= MAX_PORT:
        raise InvalidArgument(f"port must be in [{MIN_PORT}, {MAX_PORT}]; got {port!r}.")
