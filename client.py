"""
Client-side game controller and HTTP client for the game API.

The controller owns an explicit GameView record. It only changes through the
events load(), type_letter(), backspace() and submit(); feedback always comes
from the server and is never computed locally.
"""
import logging
import string
from dataclasses import dataclass, replace

import requests

import config
from errors import WordleError, error_from_payload
from game_logic import MAX_GUESSES, WORD_LENGTH, absent_letters, is_winning_feedback, share_text

logger = logging.getLogger(__name__)

NOT_STARTED = "NotStarted"
IN_PROGRESS = "InProgress"
WON = "Won"
LOST = "Lost"


class ApiClient:
    """Thin requests-based client for the game's JSON API."""

    def __init__(self, base_url: str, timeout: float = None, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else config.API_TIMEOUT
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs):
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise WordleError("Could not reach the game server") from e

        try:
            payload = response.json()
        except ValueError:
            if response.ok:
                raise WordleError("Unexpected response from the game server")
            payload = None

        if not response.ok:
            raise error_from_payload(payload if isinstance(payload, dict) else None, response.status_code)
        return payload

    def login(self, username: str, password: str):
        return self._request("POST", "/login", json={"username": username, "password": password})

    def today(self) -> str:
        return self._request("GET", "/api/today")["date"]

    def get_state(self, date: str):
        return self._request("GET", "/api/state", params={"date": date})

    def submit_guess(self, date: str, guess: str):
        result = self._request("POST", "/api/guess", json={"date": date, "guess": guess})
        if not isinstance(result, dict) or "feedback" not in result or "isGameOver" not in result:
            raise WordleError("Unexpected response from the game server")
        return result


@dataclass(frozen=True)
class GameView:
    guesses: tuple = ()
    current_guess: str = ""
    is_game_over: bool = False
    days_since_launch: int | None = None
    in_flight: bool = False
    error: str | None = None


class GameController:
    def __init__(self, api, date: str):
        self.api = api
        self.date = date
        self.view = GameView()

    @property
    def guesses(self):
        return list(self.view.guesses)

    @property
    def current_guess(self) -> str:
        return self.view.current_guess

    @property
    def is_game_over(self) -> bool:
        return self.view.is_game_over

    @property
    def status(self) -> str:
        if any(is_winning_feedback(g["feedback"]) for g in self.view.guesses):
            return WON
        if self.view.is_game_over or len(self.view.guesses) >= MAX_GUESSES:
            return LOST
        if self.view.guesses:
            return IN_PROGRESS
        return NOT_STARTED

    def load(self):
        """Replace confirmed history with whatever the server has stored."""
        stored = self.api.get_state(self.date)
        if stored is None:
            return self.view
        # current_guess is local input and is never restored
        self.view = replace(
            self.view,
            guesses=tuple(stored.get("guesses") or ()),
            is_game_over=bool(stored.get("isGameOver")),
            days_since_launch=stored.get("daysSinceLaunch"),
        )
        return self.view

    def _accepting_input(self) -> bool:
        return not (self.view.is_game_over or self.view.in_flight)

    def type_letter(self, letter: str):
        if not self._accepting_input():
            return self.view
        if len(letter) != 1 or letter not in string.ascii_letters:
            return self.view
        if len(self.view.current_guess) >= WORD_LENGTH:
            return self.view
        self.view = replace(self.view, current_guess=self.view.current_guess + letter.upper())
        return self.view

    def backspace(self):
        if not self._accepting_input():
            return self.view
        self.view = replace(self.view, current_guess=self.view.current_guess[:-1])
        return self.view

    def submit(self):
        """
        Send the current input to the server.

        On success the returned feedback is appended and the input cleared. On
        failure the error is recorded and the input is left for the user to
        correct or retry. Ignored while a submission is in flight.
        """
        if not self._accepting_input() or len(self.view.current_guess) != WORD_LENGTH:
            return self.view

        guess = self.view.current_guess
        self.view = replace(self.view, in_flight=True, error=None)
        try:
            result = self.api.submit_guess(self.date, guess)
            new_guess = {"word": guess.upper(), "feedback": list(result["feedback"])}
            self.view = replace(
                self.view,
                guesses=self.view.guesses + (new_guess,),
                current_guess="",
                is_game_over=bool(result["isGameOver"]),
            )
        except WordleError as e:
            logger.info("Guess rejected: %s", e.message)
            self.view = replace(self.view, error=e.message)
        finally:
            self.view = replace(self.view, in_flight=False)
        return self.view

    def is_letter_absent(self, letter: str) -> bool:
        return letter.upper() in absent_letters(self.view.guesses)

    def keyboard_status(self) -> dict:
        """Map of every letter A-Z to True when it is known absent."""
        absent = absent_letters(self.view.guesses)
        return {letter: letter in absent for letter in string.ascii_uppercase}

    def share_text(self, title: str = "Wordle") -> str:
        return share_text(self.view.guesses, self.view.days_since_launch, title=title)
