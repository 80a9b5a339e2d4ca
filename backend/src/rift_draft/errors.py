"""Typed failures raised by the draft engine and its collaborators.

Every error is a precondition violation; nothing here is transient, so
callers should never retry without changing their input. The HTTP layer
maps ``status_code`` onto the response.
"""


class DraftError(Exception):
    """Base class for all rift_draft failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DraftError):
    """Referenced session, match, team or tournament does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} '{entity_id}' not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(DraftError):
    """Operation attempted while the session or match is in the wrong state."""

    status_code = 409


class FearlessBannedError(DraftError):
    """Pick attempted on a champion already played earlier in the series."""

    status_code = 422

    def __init__(self, champion_id: str):
        super().__init__(
            f"Champion '{champion_id}' was picked in an earlier game of this series"
        )
        self.champion_id = champion_id


class ChampionUnavailableError(DraftError):
    """Champion already banned or picked in this draft."""

    status_code = 422

    def __init__(self, champion_id: str):
        super().__init__(f"Champion '{champion_id}' is already banned or picked")
        self.champion_id = champion_id


class InvalidWinnerError(DraftError):
    """Declared game winner is not one of the match's teams."""

    status_code = 422


class InvalidTeamCodeError(DraftError):
    """Team join code is unknown or its side has already joined."""

    status_code = 403


class AuthenticationError(DraftError):
    """Missing, expired or rejected credentials."""

    status_code = 401
