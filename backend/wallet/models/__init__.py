from .auth import User, SessionToken
from .ledger import Transaction, TRANSACTION_TYPES

__all__ = [
    'User', 'SessionToken',
    'Transaction', 'TRANSACTION_TYPES',
]
