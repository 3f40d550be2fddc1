# Overview: Service-layer operations for sessions; encapsulates token issuance, lookup and revocation.

"""
Session Token Management Service

WHY: Every ledger request must be attributable to exactly one user, and the
user id must come from the server side, never from the request body.

SECURITY FEATURES:
- Cryptographically secure random tokens (16 bytes = 128 bits)
- Tokens hashed with SHA-256 before storage (fast, one-way)
- Revocable on sign-out

There is no expiry: a session lives until it is destroyed. A user may hold
any number of concurrent sessions.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from typing import Callable, Optional

from ..models import SessionToken, User


logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

TokenFactory = Callable[[], str]


class MissingCredential(Exception):
    """No bearer token was presented (absent header or empty token)."""


class InvalidCredential(Exception):
    """A bearer token was presented but matches no live session."""


def generate_token() -> str:
    """
    Generate cryptographically secure random token.

    Returns 32-character hex string (16 bytes of entropy).
    This is the plaintext token sent to client (never stored).
    """
    return secrets.token_hex(16)


def hash_token(token: str) -> str:
    """
    Hash token for database storage using SHA-256.

    Tokens are already high-entropy, so a fast digest is sufficient.
    """
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


def extract_bearer_token(header_value: Optional[str]) -> str:
    """
    Pull the token out of an Authorization header value.

    The "Bearer " prefix is removed when present; a bare token is accepted
    as-is. Raises MissingCredential when nothing usable remains.
    """
    if not header_value:
        raise MissingCredential("Authorization token required")

    token = header_value
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):]
    token = token.strip()

    if not token:
        raise MissingCredential("Authorization token required")
    return token


class SessionRegistry:
    """
    Owns the sessions table.

    Constructed with the SQLAlchemy session used for every read and write
    and with the callable that mints plaintext tokens.
    """

    def __init__(self, store, token_factory: TokenFactory | None = None):
        self.store = store
        self.token_factory = token_factory or generate_token

    def create(self, user_id: int) -> str:
        """
        Create a new session for user_id and return its plaintext token.

        Existing sessions of the same user are left untouched.
        Raises ValueError if the user does not exist.
        """
        user = self.store.query(User).filter_by(id=user_id).first()
        if not user:
            raise ValueError("User not found")

        token = self.token_factory()
        session = SessionToken(user_id=user_id, token_hash=hash_token(token))

        self.store.add(session)
        self.store.commit()

        logger.info("Session %s created for user %s", session.id, user_id)
        return token

    def destroy(self, token: str) -> None:
        """Delete the session matching token. Unknown tokens are a no-op."""
        deleted = self.store.query(SessionToken).filter_by(
            token_hash=hash_token(token)
        ).delete(synchronize_session=False)
        self.store.commit()

        if deleted:
            logger.info("Session destroyed")

    def lookup(self, token: str) -> int | None:
        session = self.store.query(SessionToken).filter_by(
            token_hash=hash_token(token)
        ).first()
        if not session:
            return None
        return session.user_id

    def destroy_all_for_user(self, user_id: int) -> int:
        """
        Delete every session of a user.

        Returns count of sessions deleted.
        """
        deleted = self.store.query(SessionToken).filter_by(
            user_id=user_id
        ).delete(synchronize_session=False)
        self.store.commit()

        logger.info("Destroyed %s session(s) for user %s", deleted, user_id)
        return deleted


class Authenticator:
    """Resolves a presented bearer token to the owning user id."""

    def __init__(self, registry: SessionRegistry):
        self.registry = registry

    def resolve(self, presented_token: Optional[str]) -> int:
        """
        Return the user id behind presented_token.

        presented_token is the raw Authorization header value.
        Raises MissingCredential for an absent/empty token and
        InvalidCredential for a token with no live session.
        """
        return self.resolve_token(extract_bearer_token(presented_token))

    def resolve_token(self, token: str) -> int:
        """
        Same as resolve() for a token already taken out of its header.

        The token is looked up verbatim; no prefix is removed.
        """
        user_id = self.registry.lookup(token)
        if user_id is None:
            raise InvalidCredential("Invalid token")
        return user_id
