"""
Error types surfaced by the game service and the HTTP layer.
"""


class WordleError(Exception):
    """Base error with a user-presentable message and an HTTP status."""
    status_code = 400
    code = "WordleError"
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class Unauthenticated(WordleError):
    status_code = 401
    code = "Unauthenticated"
    default_message = "Not authenticated"


class InvalidInput(WordleError):
    status_code = 400
    code = "InvalidInput"
    default_message = "Guess must be 5 letters"


class GameAlreadyOver(WordleError):
    status_code = 409
    code = "GameAlreadyOver"
    default_message = "Game is already over"


class MaxGuessesReached(WordleError):
    status_code = 409
    code = "MaxGuessesReached"
    default_message = "Maximum guesses reached"


class UpstreamFetchFailure(WordleError):
    """Puzzle source unreachable or returned a non-success response. Retryable."""
    status_code = 502
    code = "UpstreamFetchFailure"
    default_message = "Failed to fetch puzzle"


class PersistenceFailure(WordleError):
    status_code = 500
    code = "PersistenceFailure"
    default_message = "Database error"


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        Unauthenticated,
        InvalidInput,
        GameAlreadyOver,
        MaxGuessesReached,
        UpstreamFetchFailure,
        PersistenceFailure,
    )
}


def error_from_payload(payload, status_code: int) -> WordleError:
    """Rebuild an error raised by the server from its JSON body."""
    payload = payload or {}
    cls = ERRORS_BY_CODE.get(payload.get("code"), WordleError)
    err = cls(payload.get("error"))
    if cls is WordleError:
        err.status_code = status_code
    return err
