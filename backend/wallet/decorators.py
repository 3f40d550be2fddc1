# Overview: Request decorators for authentication and body validation on API routes.

from functools import wraps
from flask import request, jsonify, g

from .services import get_services
from .services.session_service import (
    InvalidCredential,
    MissingCredential,
    extract_bearer_token,
)
from .validation import Schema, ValidationError


def validation_error_response(e: ValidationError):
    body = {"error": str(e)}
    if e.field:
        body["field"] = e.field
    return jsonify(body), 400


def require_token(f):
    """
    Require a bearer token to be present.

    Sets g.token to the token with the "Bearer " prefix removed.
    Returns 400 if the Authorization header is absent or empty.
    Does NOT check the token against the session registry.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            g.token = extract_bearer_token(request.headers.get("Authorization"))
        except MissingCredential as e:
            return jsonify({"error": str(e)}), 400

        return f(*args, **kwargs)

    return decorated_function


def require_session(f):
    """
    Resolve g.token to a user id.

    Must be stacked under @require_token. Sets g.user_id.
    Returns 401 if no live session matches the token.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            g.user_id = get_services().authenticator.resolve_token(g.token)
        except InvalidCredential as e:
            return jsonify({"error": str(e)}), 401

        return f(*args, **kwargs)

    return decorated_function


def require_auth(f):
    """Token present (400 otherwise) and valid (401 otherwise)."""
    return require_token(require_session(f))


def validate_body(schema: Schema):
    """
    Validate the JSON body against schema before the view runs.

    Sets g.payload to the cleaned fields.
    Returns 400 naming the first violated field.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                g.payload = schema.validate(request.get_json(silent=True))
            except ValidationError as e:
                return validation_error_response(e)

            return f(*args, **kwargs)

        return decorated_function
    return decorator
