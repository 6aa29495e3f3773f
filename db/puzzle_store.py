"""
Date-keyed puzzle storage with fetch-on-miss.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from db.models import Puzzle
from errors import PersistenceFailure
from puzzle_source import PuzzleData, fetch_puzzle

logger = logging.getLogger(__name__)


def get_puzzle(db, date: str) -> Puzzle | None:
    """Stored puzzle for a date, or None."""
    try:
        return db.query(Puzzle).filter(Puzzle.date == date).first()
    except SQLAlchemyError as e:
        raise PersistenceFailure("Failed to load puzzle") from e


def store_puzzle(db, date: str, data: PuzzleData) -> Puzzle:
    """
    Insert a puzzle unless one already exists for the date.

    The existing row always wins: a racing insert that hits the unique
    constraint is rolled back and the stored puzzle is returned instead.
    """
    existing = get_puzzle(db, date)
    if existing:
        return existing

    puzzle = Puzzle(
        date=date,
        solution=data.solution.upper(),
        puzzle_id=data.id,
        print_date=data.print_date,
        days_since_launch=data.days_since_launch,
    )
    db.add(puzzle)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Puzzle for %s stored concurrently, using existing row", date, extra={"date": date})
        existing = get_puzzle(db, date)
        if existing is None:
            raise PersistenceFailure("Failed to store puzzle")
        return existing
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceFailure("Failed to store puzzle") from e

    logger.info("Stored puzzle %s for %s", puzzle.puzzle_id, date, extra={"date": date})
    return puzzle


def resolve_puzzle(db, date: str, fetch=fetch_puzzle) -> Puzzle:
    """Stored puzzle for a date, fetching and storing it on a miss."""
    puzzle = get_puzzle(db, date)
    if puzzle:
        return puzzle

    # Raises UpstreamFetchFailure before anything is written
    data = fetch(date)
    return store_puzzle(db, date, data)
