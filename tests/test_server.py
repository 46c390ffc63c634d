import json
import threading

import httpx
import pytest

from variation.errors import UnknownGameError
from variation.generator import generate
from variation.loader import VariationLoader
from variation.providers.http_provider import HttpProvider
from variation_server import __version__
from variation_server.cli import main
from variation_server.daemon import make_server


def boom(game_id, seed=None):
    if game_id not in ("snake", "breakout", "flappy"):
        raise UnknownGameError(game_id)
    raise RuntimeError("generator exploded")


def _start(generator=generate):
    srv = make_server(host="127.0.0.1", port=0, generator=generator)
    t = threading.Thread(target=srv.serve_forever, kwargs={"poll_interval": 0.05}, daemon=True)
    t.start()
    host, port = srv.server_address[:2]
    return srv, t, f"http://{host}:{port}"


@pytest.fixture
def server():
    srv, t, base = _start()
    try:
        yield srv, base
    finally:
        srv.shutdown()
        srv.server_close()
        t.join(timeout=2)


def test_ping_and_health(server):
    srv, base = server
    assert httpx.get(f"{base}/ping").json() == {"pong": True}
    health = httpx.get(f"{base}/health").json()
    assert health == {"ok": True, "version": __version__, "issued": 0}


def test_variation_endpoint(server):
    srv, base = server
    resp = httpx.get(f"{base}/api/variation/snake")
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.json() == generate("snake").to_dict()
    assert srv.app.issued == 1


def test_seed_query_parameter(server):
    _, base = server
    body = httpx.get(f"{base}/api/variation/flappy", params={"seed": "replay-7"}).json()
    assert body["seed"] == "replay-7"
    assert body == generate("flappy", seed="replay-7").to_dict()


def test_unknown_game_is_404(server):
    _, base = server
    resp = httpx.get(f"{base}/api/variation/pong")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Unknown gameId: pong"}


def test_missing_game_id_is_400(server):
    _, base = server
    resp = httpx.get(f"{base}/api/variation/")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Game ID is required"}


def test_unknown_path_is_404(server):
    _, base = server
    assert httpx.get(f"{base}/nope").status_code == 404


def test_generator_failure_is_500(capsys):
    srv, t, base = _start(generator=boom)
    try:
        resp = httpx.get(f"{base}/api/variation/snake")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate variation"}
        assert httpx.get(f"{base}/api/variation/pong").status_code == 404
    finally:
        srv.shutdown()
        srv.server_close()
        t.join(timeout=2)
    assert "generator exploded" in capsys.readouterr().out


def test_http_provider_against_live_server(server):
    _, base = server
    loader = VariationLoader(provider=HttpProvider(base_url=base), background=False)
    try:
        result = loader.load("breakout")
    finally:
        loader.stop()
    assert result.fallback is False
    assert result.bundle == generate("breakout")


def test_cli_generate(capsys):
    assert main(["generate", "snake", "--seed", "snake-test-1"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["seed"] == "snake-test-1"
    assert payload["theme"]["name"] == "forest"


def test_cli_unknown_game(capsys):
    assert main(["generate", "pong"]) == 2
    assert "Unknown gameId: pong" in capsys.readouterr().err


def test_cli_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_cli_without_command_prints_help(capsys):
    assert main([]) == 2
    assert "variation-server" in capsys.readouterr().out
