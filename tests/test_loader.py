import threading
import time
from unittest import mock

import httpx
import pytest

from variation.defaults import default_bundle
from variation.errors import VariationFetchError
from variation.generator import generate
from variation.loader import VariationLoader
from variation.providers import create_provider
from variation.providers.base import BaseVariationProvider
from variation.providers.http_provider import HttpProvider
from variation.providers.local_provider import LocalProvider
from tests.conftest import StaticProvider


def wait_for(loader, token, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        result = loader.poll(token)
        if result is not None:
            return result
        time.sleep(0.01)
    raise AssertionError("loader never delivered a result")


def test_inline_load_parses_the_payload():
    bundle = generate("snake", seed="inline")
    loader = VariationLoader(provider=StaticProvider(bundle.to_dict()), background=False)
    token = loader.request("snake")
    result = loader.poll(token)
    assert result.bundle == bundle
    assert result.fallback is False
    # Delivered exactly once.
    assert loader.poll(token) is None


def test_fetch_failure_falls_back_to_default(capsys):
    loader = VariationLoader(provider=StaticProvider(error=VariationFetchError("connection refused")),
                             background=False)
    result = loader.poll(loader.request("breakout"))
    assert result.fallback is True
    assert result.bundle == default_bundle("breakout")
    assert "connection refused" in result.error
    assert "[variation] Warning" in capsys.readouterr().out


@pytest.mark.parametrize("payload", [{"gameId": "snake"}, "garbage", None, generate("flappy", seed="x").to_dict()])
def test_malformed_or_mismatched_payload_falls_back(payload):
    loader = VariationLoader(provider=StaticProvider(payload), background=False)
    result = loader.poll(loader.request("snake"))
    assert result.fallback is True
    assert result.bundle == default_bundle("snake")


def test_defects_are_not_swallowed():
    loader = VariationLoader(provider=StaticProvider(error=RuntimeError("bug")), background=False)
    token = loader.request("snake")
    with pytest.raises(RuntimeError, match="bug"):
        loader.poll(token)


def test_cancelled_request_never_delivers():
    loader = VariationLoader(provider=StaticProvider(generate("snake").to_dict()), background=False)
    token = loader.request("snake")
    loader.cancel(token)
    assert loader.poll(token) is None
    assert not loader.is_pending(token)
    loader.cancel(None)


class GatedProvider(BaseVariationProvider):
    """First fetch blocks until released; each fetch returns a bundle for its own seed."""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()
        self.count = 0

    @property
    def name(self):
        return "gated"

    def fetch(self, game_id):
        self.count += 1
        if self.count == 1:
            self.entered.set()
            self.release.wait(5.0)
        return generate(game_id, seed=f"fetch-{self.count}").to_dict()


def test_superseded_background_fetch_is_discarded():
    provider = GatedProvider()
    loader = VariationLoader(provider=provider)
    try:
        stale = loader.request("snake")
        assert provider.entered.wait(5.0)
        loader.cancel(stale)
        latest = loader.request("snake")
        provider.release.set()
        result = wait_for(loader, latest)
        assert result.bundle.seed == "fetch-2"
        assert loader.poll(stale) is None
    finally:
        loader.stop()


def make_http(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpProvider(base_url="http://variations.test/", client=client)


def test_http_provider_fetches_json():
    bundle = generate("snake", seed="http")
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json=bundle.to_dict())

    provider = make_http(handler)
    assert provider.fetch("snake") == bundle.to_dict()
    assert seen == ["http://variations.test/api/variation/snake"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "Failed to generate variation"}),
        httpx.Response(404, json={"error": "Unknown gameId: pong"}),
        httpx.Response(200, content=b"<html>not json</html>"),
    ],
)
def test_http_provider_errors_become_fetch_errors(response):
    provider = make_http(lambda request: response)
    with pytest.raises(VariationFetchError):
        provider.fetch("snake")


def test_http_provider_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(VariationFetchError):
        make_http(handler).fetch("snake")


def test_http_outage_ends_in_default_bundle():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    loader = VariationLoader(provider=make_http(handler), background=False)
    result = loader.poll(loader.request("flappy"))
    assert result.fallback is True
    assert result.bundle == default_bundle("flappy")


def test_malformed_base_url_ends_in_default_bundle():
    client = mock.Mock(spec=httpx.Client)
    client.get.side_effect = httpx.InvalidURL("Invalid non-printable ASCII character in URL")
    provider = HttpProvider(base_url="http://variations\x01.test", client=client)
    with pytest.raises(VariationFetchError):
        provider.fetch("snake")

    loader = VariationLoader(provider=provider, background=False)
    result = loader.poll(loader.request("snake"))
    assert result.fallback is True
    assert result.bundle == default_bundle("snake")


def test_create_provider_by_name(capsys):
    assert isinstance(create_provider("local"), LocalProvider)
    assert isinstance(create_provider("http"), HttpProvider)
    assert isinstance(create_provider("carrier-pigeon"), LocalProvider)
    assert "Unknown variation source" in capsys.readouterr().out


def test_local_provider_pins_seed():
    assert LocalProvider(seed="pin").fetch("flappy") == generate("flappy", seed="pin").to_dict()
