import re

from flask import current_app
from passlib.hash import bcrypt


EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50


def _truncate_password(plain_password: str) -> str:
    """Helper to consistently truncate password to its first 72 UTF-8 bytes."""
    # bcrypt only looks at 72 bytes; drop any multi-byte character cut in half
    password_bytes = plain_password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(plain_password: str) -> str:
    """
    Hash password using bcrypt with the configured work factor. It is
    truncated to the first 72 bytes of its UTF-8 encoding before hashing.
    """
    truncated = _truncate_password(plain_password)
    rounds = current_app.config["BCRYPT_ROUNDS"]
    return bcrypt.using(rounds=rounds).hash(truncated)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a password against a hash, using the same truncation as hash_password."""
    truncated = _truncate_password(plain_password)
    return bcrypt.verify(truncated, password_hash)


def normalize_email(email) -> str:
    return (email or "").strip().lower() if isinstance(email, str) else ""


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_REGEX.match(email))


def validate_username(username: str) -> tuple[bool, str | None]:
    if len(username) < USERNAME_MIN_LENGTH or len(username) > USERNAME_MAX_LENGTH:
        return False, (
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters long"
        )
    return True, None


def validate_password(password: str) -> tuple[bool, str | None]:
    """
    Basic server-side password validation.
    Returns (is_valid, error_message).
    """
    min_length = current_app.config["MIN_PASSWORD_LENGTH"]
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters long"
    return True, None
