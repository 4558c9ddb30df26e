"""Exceptions raised by the import pipeline and the player services."""

from __future__ import annotations


class BaseballImportError(RuntimeError):
    """Base class for failures of the import command."""


class UpstreamFetchError(BaseballImportError):
    """The remote stats endpoint could not be reached or answered badly."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyPayloadError(BaseballImportError):
    """The remote endpoint returned no player records."""


class ImportTransactionError(BaseballImportError):
    """Processing a batch failed; every write of the batch was rolled back."""


class NotFoundError(LookupError):
    """Requested entity does not exist."""


class PlayerNotFoundError(NotFoundError):
    def __init__(self, player_id: int):
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


class StatisticsNotFoundError(NotFoundError):
    def __init__(self, player_id: int):
        super().__init__("No statistics found for this player.")
        self.player_id = player_id


class PlayerNameConflictError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Another player is already named {name!r}")
        self.name = name
