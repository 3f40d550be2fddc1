# Overview: Flask API routes for ledger entries; parses input and returns JSON responses.

from flask import Blueprint, jsonify, g, current_app

from ..services import get_services
from ..services.ledger_service import InvalidEntry
from ..decorators import (
    require_auth,
    require_session,
    require_token,
    validate_body,
    validation_error_response,
)
from ..validation import TRANSACTION_SCHEMA

"""
Order of checks on POST: token present (400) -> body valid (400) ->
token known (401). Entries are dated by the server (UTC day).
"""

transactions_bp = Blueprint("transactions", __name__, url_prefix="/transactions")


@transactions_bp.post("")
@require_token
@validate_body(TRANSACTION_SCHEMA)
@require_session
def create_transaction_route():
    try:
        entry_id = get_services().ledger.record(
            user_id=g.user_id,
            description=g.payload["description"],
            value=g.payload["value"],
            type=g.payload["type"],
        )
        return jsonify({"id": entry_id}), 201

    except InvalidEntry as e:
        return validation_error_response(e)
    except Exception:
        current_app.logger.exception("Failed to record transaction")
        return jsonify({"error": "Internal server error"}), 500


@transactions_bp.get("")
@require_auth
def list_transactions_route():
    try:
        summary = get_services().ledger.list_and_summarize(g.user_id)
        return jsonify(summary.to_dict()), 200

    except Exception:
        current_app.logger.exception("Failed to list transactions")
        return jsonify({"error": "Internal server error"}), 500
