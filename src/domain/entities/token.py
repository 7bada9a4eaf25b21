"""
Token Entity

Opaque bearer tokens. Only the SHA-256 hash of the plaintext is persisted.
"""

import base64
import hashlib
import re
import secrets
from datetime import datetime, timedelta
from typing import Tuple
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import TokenScope

TOKEN_PLAINTEXT_LENGTH = 26
_TOKEN_PLAINTEXT_PATTERN = re.compile(r"^[A-Z2-7]{26}$")


class Token(SQLModel, table=True):
    """
    Token entity - hashed, scoped, expiring credential.

    Business Rules:
    - Plaintext is 16 random bytes, base32 encoded without padding (26 chars)
    - Only the SHA-256 hex digest is stored
    - Valid only while hash exists, scope matches and now < expiry
    - Never mutated; consumed tokens are deleted by scope
    """

    __tablename__ = "tokens"

    hash: str = Field(primary_key=True, max_length=64)  # SHA-256 hex output
    user_id: UUID = Field(foreign_key="users.id", index=True)
    scope: TokenScope
    expiry: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_token_user_scope", "user_id", "scope"),)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expiry


def hash_token(plaintext: str) -> str:
    return hashlib.sha256(plaintext.encode()).hexdigest()


def is_valid_token_plaintext(plaintext: str) -> bool:
    """Structural check only: length and base32 alphabet"""
    return bool(_TOKEN_PLAINTEXT_PATTERN.match(plaintext or ""))


def generate_token(user_id: UUID, ttl: timedelta, scope: TokenScope) -> Tuple[str, Token]:
    """
    Create a new token for a user.

    Returns:
        Tuple of (plaintext sent to the client, Token row to persist)
    """
    plaintext = base64.b32encode(secrets.token_bytes(16)).decode().rstrip("=")
    token = Token(
        hash=hash_token(plaintext),
        user_id=user_id,
        scope=scope,
        expiry=utc_now() + ttl,
    )
    return plaintext, token
