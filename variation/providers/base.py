"""
Base class for variation providers.
"""
from abc import ABC, abstractmethod
from typing import Any


class BaseVariationProvider(ABC):
    """Abstract base class for variation providers."""

    @abstractmethod
    def fetch(self, game_id: str) -> Any:
        """
        Retrieve the raw bundle payload for a game.

        Args:
            game_id: One of the supported game ids

        Returns:
            The decoded (still untrusted) JSON payload

        Raises:
            VariationFetchError: the payload could not be retrieved
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging/debugging."""
        pass

    def close(self):
        """Release any held connections."""
        return None
