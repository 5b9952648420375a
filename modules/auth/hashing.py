"""
Password hashing.

One-way salted bcrypt hashes for stored principal passwords.
"""

import logging

import bcrypt

from .exceptions import CredentialMismatchError, HashError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12

# bcrypt only reads the first 72 bytes; longer inputs are refused rather than truncated
MAX_PASSWORD_BYTES = 72


def hash_password(plaintext: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash a plaintext password with a fresh salt.

    Raises:
        HashError: If bcrypt rejects the input or fails internally.
    """
    encoded = plaintext.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        logger.error("Password hashing refused: input exceeds %d bytes", MAX_PASSWORD_BYTES)
        raise HashError("Password exceeds the bcrypt input limit")

    try:
        salt = bcrypt.gensalt(rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")
    except (ValueError, TypeError) as e:
        logger.error("Password hashing failed: %s", type(e).__name__)
        raise HashError() from e


def verify_password(hashed: str, plaintext: str) -> None:
    """
    Check a plaintext password against a stored hash.

    A malformed stored hash counts as a mismatch.

    Raises:
        CredentialMismatchError: If the plaintext does not reproduce the hash.
    """
    try:
        ok = bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        ok = False

    if not ok:
        raise CredentialMismatchError()
