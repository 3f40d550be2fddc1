# Overview: Flask API routes for account operations; parses input and returns JSON responses.

# backend/wallet/routes/auth.py
"""
Account API routes

- POST /sign-up   create an account
- POST /sign-in   verify credentials, open a session, return the bearer token
- POST /sign-out  delete the session behind the presented token
"""

from flask import Blueprint, jsonify, current_app, g

from ..services import get_services
from ..services.auth_service import DuplicateAccount, InvalidCredentials
from ..decorators import require_token, validate_body
from ..validation import SIGN_IN_SCHEMA, SIGN_UP_SCHEMA


auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/sign-up")
@validate_body(SIGN_UP_SCHEMA)
def sign_up_route():
    """
    Create an account.

    Returns 201 on success, 409 if the email (any case) is already taken.
    """
    try:
        get_services().accounts.sign_up(
            name=g.payload["name"],
            email=g.payload["email"],
            password=g.payload["password"],
        )
        return jsonify({"message": "Account created"}), 201

    except DuplicateAccount as e:
        return jsonify({"error": str(e)}), 409
    except Exception:
        current_app.logger.exception("Failed to sign up user")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/sign-in")
@validate_body(SIGN_IN_SCHEMA)
def sign_in_route():
    """
    Authenticate user and create session token.

    Returns {id, name, email, token}. The token goes in the Authorization
    header (Bearer <token>) for protected routes.

    Unknown email and wrong password return the same 400 response.
    """
    try:
        result = get_services().accounts.sign_in(
            email=g.payload["email"],
            password=g.payload["password"],
        )
        return jsonify(result.to_dict()), 200

    except InvalidCredentials as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to sign in user")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/sign-out")
@require_token
def sign_out_route():
    """
    Delete the session behind the presented token.

    Expects Authorization header: Bearer <token>
    Signing out with an unknown token is not an error.
    """
    try:
        get_services().registry.destroy(g.token)
        return jsonify({"message": "Signed out"}), 200

    except Exception:
        current_app.logger.exception("Failed to sign out user")
        return jsonify({"error": "Internal server error"}), 500
