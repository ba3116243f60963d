"""Password hashing utilities (argon2id)."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password for storage.

    Args:
        password: Plain-text password

    Returns:
        Encoded argon2 hash including its parameters and salt
    """
    return _hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Check a password against a stored hash.

    Args:
        password_hash: Encoded argon2 hash
        password: Plain-text password

    Returns:
        True if the password matches, False otherwise (including malformed hashes)
    """
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
