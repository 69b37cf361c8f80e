"""One-way commitment of the authentication token.

The configured token is replaced by its bcrypt hash as soon as the
configuration is validated; the plaintext is not kept anywhere else.
"""

from __future__ import annotations

import bcrypt

from ..errors import TokenCommitError

TOKEN_HASH_COST = 14


def commit_token(plaintext: str, cost: int = TOKEN_HASH_COST) -> str:
    """Hash ``plaintext`` with bcrypt using a fresh random salt.

    Args:
        plaintext: The token as configured.
        cost: bcrypt work factor (log2 rounds).

    Returns:
        The encoded hash, e.g. ``$2b$14$...``, which embeds salt and cost.

    Raises:
        TokenCommitError: If bcrypt rejects the input, e.g. a token longer
            than 72 bytes.
    """
    try:
        hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=cost))
    except ValueError as exc:
        raise TokenCommitError(details={"reason": str(exc)}) from exc
    return hashed.decode("ascii")


def verify_token(plaintext: str, hashed: str) -> bool:
    """Check a presented token against a committed hash."""
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("ascii"))
    except ValueError:
        return False
