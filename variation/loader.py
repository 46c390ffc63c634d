"""
Variation loader - fetches bundles off the game loop.

Requests are queued to a background worker; the game loop polls with the token it was
handed. Cancelled or superseded tokens never deliver a result, so the last fetch a
simulation asked for is the only one it can see.
"""
import itertools
import queue
import threading
from dataclasses import dataclass
from typing import Optional

from variation.defaults import default_bundle
from variation.errors import VariationFetchError, VariationValidationError
from variation.providers import BaseVariationProvider, create_provider
from variation.schema import VariationBundle, parse_bundle


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one fetch. `fallback` is set when the default bundle was substituted."""

    game_id: str
    bundle: VariationBundle
    fallback: bool = False
    error: Optional[str] = None


class _Failed:
    """A defect raised while resolving; re-raised on poll()."""

    def __init__(self, exc: BaseException):
        self.exc = exc


class VariationLoader:
    """
    Manages variation fetch requests and responses.
    Uses a separate thread for provider calls to avoid blocking.
    """

    def __init__(self, provider: BaseVariationProvider = None, background: bool = True):
        self.provider = provider or create_provider()
        self.background = background

        # Request queue: (token, game_id)
        self.request_queue = queue.Queue()

        # token -> game_id for requests still wanted
        self.pending = {}
        # token -> LoadResult | _Failed
        self.results = {}
        self.lock = threading.Lock()
        self._tokens = itertools.count(1)

        self.worker_thread = None
        self.running = False

        if self.background:
            self.start()

    def start(self):
        """Start the background worker thread."""
        if self.running:
            return
        self.running = True
        self.worker_thread = threading.Thread(target=self._worker_loop, daemon=True)
        self.worker_thread.start()

    def stop(self):
        """Stop the background worker and drop everything outstanding."""
        self.running = False
        if self.worker_thread:
            self.worker_thread.join(timeout=2.0)
            self.worker_thread = None
        with self.lock:
            self.pending.clear()
            self.results.clear()
        self.provider.close()

    def _worker_loop(self):
        while self.running:
            try:
                token, game_id = self.request_queue.get(timeout=0.5)
            except queue.Empty:
                continue
            with self.lock:
                wanted = token in self.pending
            if wanted:
                self._complete(token, game_id)

    def _complete(self, token: int, game_id: str):
        try:
            outcome = self.load(game_id)
        except Exception as e:
            print(f"[variation] loader error for {game_id}: {e}")
            outcome = _Failed(e)
        with self.lock:
            # Cancelled while in flight: discard.
            if self.pending.pop(token, None) is not None:
                self.results[token] = outcome

    def load(self, game_id: str) -> LoadResult:
        """Fetch and parse synchronously, substituting the default bundle on failure."""
        try:
            payload = self.provider.fetch(game_id)
            bundle = parse_bundle(payload, expected_game_id=game_id)
        except (VariationFetchError, VariationValidationError) as e:
            print(f"[variation] Warning: {game_id} bundle unavailable via {self.provider.name} ({e}); using default")
            return LoadResult(game_id, default_bundle(game_id), fallback=True, error=str(e))
        return LoadResult(game_id, bundle)

    def request(self, game_id: str) -> int:
        """Queue a fetch for `game_id` and return the token to poll with."""
        token = next(self._tokens)
        with self.lock:
            self.pending[token] = game_id
        if self.background:
            self.request_queue.put((token, game_id))
        else:
            self._complete(token, game_id)
        return token

    def cancel(self, token: Optional[int]):
        """Forget a request; its result (if any arrives) is dropped."""
        if token is None:
            return
        with self.lock:
            self.pending.pop(token, None)
            self.results.pop(token, None)

    def poll(self, token: int) -> Optional[LoadResult]:
        """Return the result for `token` once ready (exactly once), else None."""
        with self.lock:
            outcome = self.results.pop(token, None)
        if isinstance(outcome, _Failed):
            raise outcome.exc
        return outcome

    def is_pending(self, token: int) -> bool:
        with self.lock:
            return token in self.pending
