"""
Client for the external daily puzzle source.
"""
import logging
from dataclasses import dataclass

import requests

import config
from errors import UpstreamFetchFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PuzzleData:
    solution: str
    id: int
    print_date: str
    days_since_launch: int


def fetch_puzzle(date: str, base_url: str = None, timeout: float = None) -> PuzzleData:
    """
    Fetch the puzzle for a date (YYYY-MM-DD) from the puzzle source.

    Raises:
        UpstreamFetchFailure: source unreachable, timed out, non-2xx response
            or a body missing the expected fields
    """
    base_url = (base_url or config.PUZZLE_SOURCE_URL).rstrip("/")
    timeout = timeout if timeout is not None else config.PUZZLE_FETCH_TIMEOUT
    url = f"{base_url}/{date}.json"

    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Puzzle source unreachable for %s: %s", date, e, extra={"date": date})
        raise UpstreamFetchFailure("Failed to fetch puzzle: source unreachable") from e

    if not response.ok:
        logger.warning("Puzzle source returned %s for %s", response.status_code, date, extra={"date": date})
        raise UpstreamFetchFailure(f"Failed to fetch puzzle: {response.reason}")

    try:
        data = response.json()
        solution = str(data["solution"]).strip()
        puzzle = PuzzleData(
            solution=solution,
            id=int(data["id"]),
            print_date=str(data["print_date"]),
            days_since_launch=int(data["days_since_launch"]),
        )
    except (ValueError, KeyError, TypeError) as e:
        logger.warning("Malformed puzzle payload for %s: %s", date, e, extra={"date": date})
        raise UpstreamFetchFailure("Failed to fetch puzzle: malformed response") from e

    if len(puzzle.solution) != 5 or not puzzle.solution.isalpha():
        raise UpstreamFetchFailure("Failed to fetch puzzle: unexpected solution format")

    logger.info("Fetched puzzle %s for %s", puzzle.id, date, extra={"date": date})
    return puzzle
