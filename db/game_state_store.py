"""
Per-(user, date) game state storage.
"""
from sqlalchemy.exc import SQLAlchemyError

from db.models import GameState
from errors import PersistenceFailure


def get_game_state(db, user_id: int, date: str) -> GameState | None:
    try:
        return (
            db.query(GameState)
            .filter(GameState.user_id == user_id, GameState.date == date)
            .first()
        )
    except SQLAlchemyError as e:
        raise PersistenceFailure("Failed to load game state") from e


def upsert_game_state(db, user_id: int, date: str, guesses: list, is_game_over: bool) -> GameState:
    """
    Replace the guesses and game-over flag for (user_id, date).

    Creates the row when absent. Callers pass the full history; nothing here
    checks that the history only grows. Does not commit.
    """
    state = get_game_state(db, user_id, date)
    if state is None:
        state = GameState(user_id=user_id, date=date)
        db.add(state)

    # Assign a fresh list so the JSON column is flagged dirty
    state.guesses = [dict(g) for g in guesses]
    state.is_game_over = is_game_over
    return state
