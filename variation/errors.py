"""
Variation error taxonomy.
"""


class VariationError(Exception):
    """Base class for variation failures."""


class VariationFetchError(VariationError):
    """The bundle could not be retrieved (transport, HTTP status, undecodable body)."""


class VariationValidationError(VariationError, ValueError):
    """A bundle (or payload) does not satisfy the schema."""


class UnknownGameError(VariationError, ValueError):
    """The game id has no variation schema."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Unknown gameId: {game_id}")
