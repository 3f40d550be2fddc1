# Overview: Service-layer operations for accounts; sign-up, sign-in and password hashing.

"""
Account Service

Uses bcrypt for salted password hashing. Email matching is
case-insensitive for both sign-up and sign-in.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor 12 by default)
- Plaintext passwords are never stored or logged
- Unknown email and wrong password fail with the same InvalidCredentials
- Session tokens managed separately (see session_service.py)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import bcrypt
from sqlalchemy.exc import IntegrityError

from ..models import User
from ..validation import ConflictError
from .session_service import SessionRegistry


logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12


class DuplicateAccount(ConflictError):
    """An account with this email already exists."""


class InvalidCredentials(Exception):
    """Email/password pair did not match an account."""


def normalize_email(email: str) -> str:
    """Canonical form used for uniqueness and lookup (full Unicode casefold)."""
    return email.strip().casefold()


@dataclass
class SignInResult:
    user: User
    token: str

    def to_dict(self) -> dict:
        return {**self.user.to_dict(), "token": self.token}


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash password using bcrypt with the given cost factor."""
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    bcrypt.checkpw compares in constant time. A malformed stored hash
    counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


class AccountService:
    """Sign-up and sign-in on top of the users table and a SessionRegistry."""

    def __init__(self, store, registry: SessionRegistry, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.store = store
        self.registry = registry
        self.bcrypt_rounds = bcrypt_rounds

    def find_by_email(self, email: str) -> User | None:
        return self.store.query(User).filter_by(
            email_normalized=normalize_email(email)
        ).first()

    def sign_up(self, name: str, email: str, password: str) -> User:
        """
        Create a new account.

        Raises DuplicateAccount if the email is taken (any case). The
        pre-check gives the common case a clean error; a concurrent sign-up
        that slips past it is caught by the unique constraint on email_normalized.
        """
        if self.find_by_email(email):
            raise DuplicateAccount("Email already registered")

        user = User(
            name=name,
            email=email,
            email_normalized=normalize_email(email),
            password_hash=hash_password(password, self.bcrypt_rounds),
        )

        self.store.add(user)
        try:
            self.store.commit()
        except IntegrityError:
            self.store.rollback()
            raise DuplicateAccount("Email already registered")

        logger.info("Account %s created", user.id)
        return user

    def sign_in(self, email: str, password: str) -> SignInResult:
        """
        Verify credentials and open a new session.

        Every successful call creates a fresh session; earlier sessions stay
        valid.
        """
        user = self.find_by_email(email)

        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed sign-in attempt")
            raise InvalidCredentials("Invalid email or password")

        token = self.registry.create(user.id)
        return SignInResult(user=user, token=token)
