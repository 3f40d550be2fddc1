from __future__ import annotations

from ..extensions import db
from wallet.time_utils import to_day_string


TRANSACTION_TYPES = ("in", "out")


class Transaction(db.Model):
    """
    One monetary movement of a user.

    value is a positive amount in minor units; the sign comes from type
    ("in" credits, "out" debits). Rows are append-only.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        db.CheckConstraint("value > 0", name="ck_transactions_value_positive"),
        db.CheckConstraint("type IN ('in', 'out')", name="ck_transactions_type"),
        db.Index("ix_transactions_user_id", "user_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    description = db.Column(db.Text, nullable=False)
    value = db.Column(db.Integer, nullable=False)
    date = db.Column(db.Date, nullable=False)
    type = db.Column(db.String(3), nullable=False)

    user = db.relationship("User", backref=db.backref("transactions", lazy=True))

    @property
    def signed_value(self) -> int:
        return self.value if self.type == "in" else -self.value

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "description": self.description,
            "value": self.value,
            "date": to_day_string(self.date),
            "type": self.type,
        }
