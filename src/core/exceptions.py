"""
Errors raised across layers.

NOTE: Rejected moves / selections are NOT errors. Those are ordinary return values of the rules package.
These exceptions cover broken contracts: malformed requests, invalid snapshots, unknown sessions.

None of them subclass ValueError, so raising one inside a pydantic validator surfaces the error itself
(instead of pydantic wrapping it into a ValidationError).
"""


class GameError(Exception):
    """Root of all errors raised on purpose by this application."""


class GameStateError(GameError):
    """Operation is not allowed given the current status of the game."""


class InvalidSnapshotError(GameError):
    """A snapshot does not describe a structurally valid game state."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted."""


class RepositoryError(GameError):
    """Persistence layer could not fulfil the request."""


class SessionNotFoundError(RepositoryError):
    """No game is stored under the requested session identifier."""
