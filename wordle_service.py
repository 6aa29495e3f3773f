"""
Guess submission and state reads for the daily game.

All state transitions go through submit_guess: every precondition is checked
before anything is written, so a rejected or failed submission leaves the
stored game state exactly as it was.
"""
import logging
from dataclasses import dataclass, field
from datetime import date as date_type, datetime, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError

import config
from db.game_state_store import get_game_state as load_game_state, upsert_game_state
from db.puzzle_store import get_puzzle, resolve_puzzle
from errors import GameAlreadyOver, InvalidInput, MaxGuessesReached, PersistenceFailure, Unauthenticated
from game_logic import MAX_GUESSES, evaluate_guess, normalize_guess, share_text
from puzzle_source import fetch_puzzle

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    feedback: list = field(default_factory=list)
    is_correct: bool = False
    is_game_over: bool = False

    def to_dict(self):
        return {
            "feedback": list(self.feedback),
            "isCorrect": self.is_correct,
            "isGameOver": self.is_game_over,
        }


def today(tz_name: str = None) -> date_type:
    """Current puzzle date in the configured timezone."""
    return datetime.now(ZoneInfo(tz_name or config.PUZZLE_TIMEZONE)).date()


def normalize_date(value: str) -> date_type:
    """Parse a YYYY-MM-DD date string; single-digit month and day are accepted."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidInput("Date must be in YYYY-MM-DD format")


def parse_date(value: str, allow_past: bool = None, current: date_type = None) -> str:
    """
    Validate a YYYY-MM-DD puzzle date against the date policy.

    Dates more than a day ahead are never playable. Past dates are playable
    only when allow_past is set; otherwise the window is today plus or minus
    one day, which covers clients in other timezones.
    """
    allow_past = config.ALLOW_PAST_PUZZLES if allow_past is None else allow_past
    current = current or today()
    day = normalize_date(value)

    if day > current + timedelta(days=1):
        raise InvalidInput("Puzzle is not available yet")
    if not allow_past and day < current - timedelta(days=1):
        raise InvalidInput("Only today's puzzle can be played")
    return day.isoformat()


def submit_guess(db, user_id, date: str, raw_guess: str, fetch=fetch_puzzle,
                 allow_past: bool = None, current: date_type = None) -> SubmissionResult:
    """
    Evaluate a guess for (user_id, date) and persist the updated game state.

    Raises, in check order:
        Unauthenticated, InvalidInput, UpstreamFetchFailure,
        MaxGuessesReached, GameAlreadyOver, PersistenceFailure
    """
    if user_id is None:
        raise Unauthenticated()

    guess = normalize_guess(raw_guess)
    date = parse_date(date, allow_past=allow_past, current=current)

    puzzle = resolve_puzzle(db, date, fetch=fetch)
    state = load_game_state(db, user_id, date)

    existing_guesses = list(state.guesses) if state else []
    if len(existing_guesses) >= MAX_GUESSES:
        raise MaxGuessesReached()
    if state and state.is_game_over:
        raise GameAlreadyOver()

    solution = puzzle.solution.upper()
    feedback = evaluate_guess(guess, solution)
    is_correct = guess == solution

    updated_guesses = existing_guesses + [{"word": guess, "feedback": feedback}]
    is_game_over = is_correct or len(updated_guesses) >= MAX_GUESSES

    try:
        upsert_game_state(db, user_id, date, updated_guesses, is_game_over)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to save game state", extra={"user_id": user_id, "date": date})
        raise PersistenceFailure("Failed to save game state") from e

    logger.info(
        "Guess %d/%d submitted (correct=%s, over=%s)",
        len(updated_guesses), MAX_GUESSES, is_correct, is_game_over,
        extra={"user_id": user_id, "date": date},
    )
    return SubmissionResult(feedback=feedback, is_correct=is_correct, is_game_over=is_game_over)


def get_game_state(db, user_id, date: str) -> dict | None:
    """
    Stored state for the user and date, with the puzzle number for sharing.

    Returns an empty in-progress state when only the puzzle is known, and None
    when neither the state nor the puzzle exists.
    """
    if user_id is None:
        raise Unauthenticated()

    date = normalize_date(date).isoformat()
    state = load_game_state(db, user_id, date)
    puzzle = get_puzzle(db, date)
    days_since_launch = puzzle.days_since_launch if puzzle else None

    if state is None:
        if puzzle is None:
            return None
        return {"guesses": [], "isGameOver": False, "daysSinceLaunch": days_since_launch}

    return {
        "date": state.date,
        "guesses": list(state.guesses),
        "isGameOver": state.is_game_over,
        "daysSinceLaunch": days_since_launch,
    }


def get_share_text(db, user_id, date: str, title: str = "Wordle") -> str | None:
    state = get_game_state(db, user_id, date)
    if state is None:
        return None
    return share_text(state["guesses"], state["daysSinceLaunch"], title=title) or None
