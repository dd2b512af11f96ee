"""
Password Hashing
================

bcrypt helpers. Hashing is CPU-bound, so both calls run in a worker thread.
"""

from __future__ import annotations

import asyncio

import bcrypt

from recipe_hub.domain.errors import ValidationFailure

BCRYPT_ROUNDS = 10


def _hash(password: str, rounds: int) -> str:
    try:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    except ValueError as e:
        # bcrypt>=5 refuses secrets longer than 72 bytes
        raise ValidationFailure("Password is too long", detail=str(e)) from e
    return hashed.decode("utf-8")


def _verify(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


async def hash_password(password: str, *, rounds: int = BCRYPT_ROUNDS) -> str:
    """Return a salted bcrypt hash of ``password``."""
    return await asyncio.to_thread(_hash, password, rounds)


async def verify_password(password: str, hashed: str | None) -> bool:
    """Check ``password`` against a stored hash. A missing hash never matches."""
    if not hashed:
        return False
    return await asyncio.to_thread(_verify, password, hashed)
