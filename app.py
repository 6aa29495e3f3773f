import logging
import os

from flask import Flask, g, jsonify, request
from flask_login import LoginManager, login_required, login_user, logout_user
from flask_session import Session
from sqlalchemy.exc import SQLAlchemyError
import redis

import config
import wordle_service
from auth import current_user_id, hash_password, verify_password
from db.database import SessionLocal, configure_database, init_database
from db.models import User
from errors import InvalidInput, WordleError
from logging_config import setup_logging
from puzzle_source import fetch_puzzle

logger = logging.getLogger(__name__)


# Flask app setup
def create_app(overrides: dict = None):
    """Factory function to create and configure Flask app."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["DATABASE_URL"] = config.DATABASE_URL
    app.config["SESSION_TYPE"] = config.SESSION_TYPE
    app.config["SESSION_PERMANENT"] = False
    app.config["SESSION_USE_SIGNER"] = True
    app.config["ALLOW_PAST_PUZZLES"] = config.ALLOW_PAST_PUZZLES
    app.config["PUZZLE_FETCHER"] = fetch_puzzle
    app.config.update(overrides or {})

    if app.config["DATABASE_URL"] != config.DATABASE_URL:
        configure_database(app.config["DATABASE_URL"])
    init_database()

    # Redis-backed server-side sessions; without a session type Flask's
    # signed cookie sessions are used
    if app.config["SESSION_TYPE"] == "redis":
        app.config["SESSION_REDIS"] = redis.from_url(config.REDIS_URL)
    if app.config["SESSION_TYPE"]:
        Session(app)

    login_manager = LoginManager()
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        """Load user by ID for Flask-Login."""
        return get_session().get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Not authenticated", "code": "Unauthenticated"}), 401

    app.teardown_appcontext(close_session)
    app.register_error_handler(WordleError, handle_wordle_error)
    register_routes(app)
    return app


def get_session():
    """Request-scoped database session."""
    if "db" not in g:
        g.db = SessionLocal()
    return g.db


def close_session(exc=None):
    db = g.pop("db", None)
    if db is not None:
        db.close()


def handle_wordle_error(error: WordleError):
    logger.warning("%s: %s", error.code, error.message, extra={"code": error.code})
    return jsonify(error.to_dict()), error.status_code


def register_routes(app):
    # --------------------
    # Account routes
    # --------------------
    @app.route("/register", methods=["POST"])
    def register():
        """Create new user account."""
        data = request.get_json(silent=True) or {}
        username = (data.get("username") or "").strip()
        password = data.get("password") or ""

        if not username or not password:
            return jsonify({"error": "Username and password required"}), 400

        if len(username) < 3:
            return jsonify({"error": "Username must be at least 3 characters"}), 400

        if len(password) < 6:
            return jsonify({"error": "Password must be at least 6 characters"}), 400

        db = get_session()
        if db.query(User).filter_by(username=username).first():
            return jsonify({"error": "Username already taken"}), 400

        user = User(username=username, password_hash=hash_password(password))
        db.add(user)

        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create user %s", username)
            return jsonify({"error": "Database error"}), 500
        return jsonify({"success": True, "message": "Account created successfully"})

    @app.route("/login", methods=["POST"])
    def login():
        """Authenticate user and create session."""
        data = request.get_json(silent=True) or {}
        username = (data.get("username") or "").strip()
        password = data.get("password") or ""

        user = get_session().query(User).filter_by(username=username).first()

        if user and verify_password(user.password_hash, password):
            login_user(user)
            logger.info("User logged in", extra={"user_id": user.id})
            return jsonify({
                "success": True,
                "user_id": user.id,
                "username": user.username
            })

        return jsonify({"error": "Invalid username or password"}), 401

    @app.route("/logout")
    @login_required
    def logout():
        """End user session."""
        logout_user()
        return jsonify({"success": True})

    # --------------------
    # Game API
    # --------------------
    @app.route("/api/today")
    def get_today():
        return jsonify({"date": wordle_service.today().isoformat()})

    @app.route("/api/guess", methods=["POST"])
    def submit_guess():
        """Check a guess against the day's solution and save the game state."""
        user_id = current_user_id()
        data = request.get_json(silent=True) or {}
        result = wordle_service.submit_guess(
            get_session(),
            user_id,
            data.get("date"),
            data.get("guess"),
            fetch=app.config["PUZZLE_FETCHER"],
            allow_past=app.config["ALLOW_PAST_PUZZLES"],
        )
        return jsonify(result.to_dict())

    @app.route("/api/state")
    def get_state():
        """Saved game state for the current user, including puzzle info for sharing."""
        user_id = current_user_id()
        date = _date_arg()
        return jsonify(wordle_service.get_game_state(get_session(), user_id, date))

    @app.route("/api/share")
    def get_share():
        user_id = current_user_id()
        date = _date_arg()
        text = wordle_service.get_share_text(get_session(), user_id, date)
        if text is None:
            return jsonify({"error": "Nothing to share yet"}), 404
        return jsonify({"text": text})


def _date_arg() -> str:
    date = request.args.get("date")
    if not date:
        raise InvalidInput("Date is required")
    return date


if __name__ == "__main__":
    setup_logging(config.LOG_FORMAT, config.LOG_LEVEL)
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port, debug=True)
