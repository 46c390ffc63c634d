from __future__ import annotations

import json
import urllib.parse
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Dict, Tuple

from config import DEBUG
from variation.errors import UnknownGameError
from variation.generator import generate

from . import __version__

VARIATION_PREFIX = "/api/variation/"


def _json_bytes(obj: Any) -> bytes:
    return (json.dumps(obj, sort_keys=True) + "\n").encode("utf-8")


class VariationServerApp:
    """
    Long-lived app container shared by HTTP handlers.
    """

    def __init__(self, *, generator: Callable = generate):
        self.generator = generator
        self.issued = 0

    def variation(self, game_id: str, seed: str | None = None) -> Dict[str, Any]:
        bundle = self.generator(game_id, seed=seed)
        self.issued += 1
        return bundle.to_dict()


class Handler(BaseHTTPRequestHandler):
    server_version = "VariationServerHTTP/0.1"

    def _app(self) -> VariationServerApp:
        return self.server.app  # type: ignore[attr-defined]

    def _send(self, code: int, body: bytes, *, content_type: str = "application/json; charset=utf-8") -> None:
        self.send_response(code)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(body)

    def _send_json(self, code: int, obj: Any) -> None:
        self._send(code, _json_bytes(obj))

    def _route(self) -> Tuple[str, Dict[str, str]]:
        parsed = urllib.parse.urlparse(self.path)
        path = parsed.path
        q = urllib.parse.parse_qs(parsed.query)
        params = {k: v[-1] for k, v in q.items() if v}
        return path, params

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        if DEBUG:
            print(f"[variation_server] {self.address_string()} {format % args}")

    def do_GET(self) -> None:  # noqa: N802
        path, params = self._route()

        if path == "/ping":
            return self._send_json(200, {"pong": True})

        if path == "/health":
            return self._send_json(200, {"ok": True, "version": __version__, "issued": self._app().issued})

        if path.startswith(VARIATION_PREFIX) or path == VARIATION_PREFIX.rstrip("/"):
            game_id = urllib.parse.unquote(path[len(VARIATION_PREFIX):]).strip("/")
            if not game_id:
                return self._send_json(400, {"error": "Game ID is required"})
            try:
                payload = self._app().variation(game_id, seed=params.get("seed") or None)
            except UnknownGameError as e:
                return self._send_json(404, {"error": str(e)})
            except Exception as e:
                print(f"[variation_server] ERROR: failed to generate variation for {game_id}: {e}")
                return self._send_json(500, {"error": "Failed to generate variation"})
            return self._send_json(200, payload)

        return self._send_json(404, {"error": "not found"})


def make_server(*, host: str, port: int, generator: Callable = generate) -> ThreadingHTTPServer:
    """Bind the daemon without starting it (port 0 picks a free port)."""
    srv = ThreadingHTTPServer((host, int(port)), Handler)
    srv.app = VariationServerApp(generator=generator)  # type: ignore[attr-defined]
    return srv


def serve(*, host: str, port: int) -> None:
    srv = make_server(host=host, port=port)
    bound_host, bound_port = srv.server_address[:2]
    print(f"[variation_server] listening on http://{bound_host}:{bound_port}")
    try:
        srv.serve_forever(poll_interval=0.5)
    except KeyboardInterrupt:
        pass
    finally:
        srv.server_close()
        print("[variation_server] stopped")
