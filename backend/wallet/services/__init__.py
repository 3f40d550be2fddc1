# Overview: Service container wired by the application factory.

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from .auth_service import AccountService, DEFAULT_BCRYPT_ROUNDS
from .ledger_service import Ledger
from .session_service import Authenticator, SessionRegistry, TokenFactory


EXTENSION_KEY = "wallet"


@dataclass
class WalletServices:
    registry: SessionRegistry
    authenticator: Authenticator
    accounts: AccountService
    ledger: Ledger


def build_services(
    store,
    token_factory: TokenFactory | None = None,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> WalletServices:
    """Construct every component around one store handle."""
    registry = SessionRegistry(store, token_factory=token_factory)
    return WalletServices(
        registry=registry,
        authenticator=Authenticator(registry),
        accounts=AccountService(store, registry, bcrypt_rounds=bcrypt_rounds),
        ledger=Ledger(store),
    )


def get_services() -> WalletServices:
    return current_app.extensions[EXTENSION_KEY]
