from __future__ import annotations

from ..extensions import db


class User(db.Model):
    """
    Account holder for authentication and ledger ownership.

    Email is unique regardless of case: email_normalized holds the casefolded
    address and carries the unique constraint. The service-layer pre-check only
    exists to produce a friendlier conflict.
    """
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(120), nullable=False)
    # As typed at sign-up; returned in the profile
    email = db.Column(db.String(255), nullable=False)
    # Casefolded in Python; every lookup compares against this column
    email_normalized = db.Column(db.String(255), nullable=False, unique=True, index=True)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
        }


class SessionToken(db.Model):
    """
    Bearer session granted at sign-in.

    Only the SHA-256 hash of the token is stored. Sessions have no expiry;
    they live until sign-out deletes them. A user may hold any number of
    concurrent sessions.
    """
    __tablename__ = "sessions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    # Token hash (never store plaintext tokens!)
    token_hash = db.Column(db.String(64), nullable=False, unique=True, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    user = db.relationship("User", backref=db.backref("sessions", lazy=True))
