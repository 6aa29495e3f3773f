"""
Authentication utilities for password hashing and identity resolution.
"""
from flask_login import current_user
from werkzeug.security import generate_password_hash, check_password_hash

from errors import Unauthenticated


def hash_password(password: str) -> str:
    """
    Hash a password using werkzeug's security functions.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        password_hash: Stored password hash
        password: Plain text password to verify

    Returns:
        True if password matches, False otherwise
    """
    return check_password_hash(password_hash, password)


def current_user_id():
    """
    Stable identifier of the logged-in user for the current request.

    Raises:
        Unauthenticated: no user is logged in
    """
    if current_user and current_user.is_authenticated:
        return current_user.id
    raise Unauthenticated()
