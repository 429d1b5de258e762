"""Password Hashing — SHA-256 hex digests for stored credentials.

Invariants:
    - hash_password is deterministic: same input, same 64-char lowercase hex output
    - hash_password raises ValueError on empty or None input
    - verify_password never raises; empty inputs verify as False
"""

import hashlib
import hmac

DIGEST_LENGTH = 64


def hash_password(password: str | None) -> str:
    """Return the SHA-256 digest of the UTF-8 encoded password as lowercase hex."""
    if not password:
        raise ValueError("Password cannot be null or empty")
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str | None, stored_hash: str | None) -> bool:
    """Check a plain-text password against a stored digest, ignoring hex case."""
    if not password or not stored_hash or not stored_hash.isascii():
        return False
    return hmac.compare_digest(hash_password(password), stored_hash.lower())
