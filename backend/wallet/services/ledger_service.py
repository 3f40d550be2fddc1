# Overview: Service-layer operations for the ledger; encapsulates business logic and database work.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..models import Transaction
from ..validation import TRANSACTION_SCHEMA, ValidationError
from wallet.time_utils import utc_today
"""
Wallet Ledger Invariants (authoritative)

- Append-only: entries are never updated or deleted.
- user_id always comes from a resolved session, never from the request body.
- value is a positive integer in minor units; the sign comes from type.
- date is the UTC calendar day at the moment of recording.
- Listing returns entries in insertion order (ascending id).
"""


logger = logging.getLogger(__name__)


class InvalidEntry(ValidationError):
    """Entry failed validation; nothing was persisted."""


@dataclass
class LedgerSummary:
    total: int = 0
    transactions: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"total": self.total, "transactions": self.transactions}


def signed_total(entries) -> int:
    """Fold entries into a balance: +value for "in", -value for "out"."""
    total = 0
    for entry in entries:
        total += entry.signed_value
    return total


class Ledger:
    def __init__(self, store):
        self.store = store

    def record(self, user_id: int, description: Any, value: Any, type: Any) -> int:
        """
        Persist one entry dated today (UTC) and return its id.

        The whole entry is validated before anything touches the store;
        any violation raises InvalidEntry.
        """
        try:
            cleaned = TRANSACTION_SCHEMA.validate({
                "description": description,
                "value": value,
                "type": type,
            })
        except ValidationError as e:
            raise InvalidEntry(str(e), field=e.field) from e

        entry = Transaction(
            user_id=user_id,
            description=cleaned["description"],
            value=cleaned["value"],
            type=cleaned["type"],
            date=utc_today(),
        )
        self.store.add(entry)
        self.store.commit()

        logger.info("Recorded %s entry %s for user %s", entry.type, entry.id, user_id)
        return entry.id

    def list_and_summarize(self, user_id: int) -> LedgerSummary:
        """
        Every entry of user_id in insertion order plus their signed total.

        An empty ledger yields total 0 and no entries.
        """
        rows = (
            self.store.query(Transaction)
            .filter(Transaction.user_id == user_id)
            .order_by(Transaction.id.asc())
            .all()
        )

        return LedgerSummary(
            total=signed_total(rows),
            transactions=[r.to_dict() for r in rows],
        )

