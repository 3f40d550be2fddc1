from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .models.ledger import TRANSACTION_TYPES


class ValidationError(ValueError):
    """400-level input problem. `field` names the first offending key."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., duplicate email)."""


STRING = "string"
EMAIL = "email"
INTEGER = "integer"

# Largest whole number a JSON client can represent exactly (2**53 - 1);
# also well inside the 64-bit INTEGER range of the store
MAX_ENTRY_VALUE = 9_007_199_254_740_991


@dataclass(frozen=True)
class FieldRule:
    """
    Declarative rule for one request field.

    - kind: STRING, EMAIL or INTEGER; values are never coerced across kinds
    - strip: trim surrounding whitespace from strings before checking blankness
    - positive: integers must be > 0
    - max_value: inclusive upper bound for integers
    - choices: closed set of accepted string values
    """
    name: str
    kind: str = STRING
    required: bool = True
    strip: bool = True
    positive: bool = False
    choices: tuple[str, ...] | None = None
    max_length: int | None = None
    max_value: int | None = None


@dataclass(frozen=True)
class Schema:
    """
    Request-body schema for one operation.

    validate() returns a cleaned dict with only the declared fields, or raises
    ValidationError for the first violated field in declaration order.
    Unknown keys are rejected after all declared fields pass.
    """
    name: str
    fields: tuple[FieldRule, ...]

    def validate(self, payload: Any) -> dict:
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")

        cleaned: dict = {}
        for rule in self.fields:
            if rule.name not in payload or payload[rule.name] is None:
                if rule.required:
                    raise ValidationError(f"{rule.name} is required", field=rule.name)
                continue
            cleaned[rule.name] = _check_value(rule, payload[rule.name])

        declared = {rule.name for rule in self.fields}
        for key in payload.keys():
            if key not in declared:
                raise ValidationError(f"Field not allowed: {key}", field=key)

        return cleaned


def _check_value(rule: FieldRule, value: Any):
    if rule.kind == INTEGER:
        return _check_integer(rule, value)

    if not isinstance(value, str):
        raise ValidationError(f"{rule.name} must be a string", field=rule.name)

    text = value.strip() if rule.strip else value
    if text.strip() == "":
        raise ValidationError(f"{rule.name} cannot be blank", field=rule.name)

    if rule.max_length is not None and len(text) > rule.max_length:
        raise ValidationError(f"{rule.name} exceeds max length {rule.max_length}", field=rule.name)

    if rule.kind == EMAIL:
        try:
            validate_email(text, check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError(f"{rule.name} must be a valid email", field=rule.name)

    if rule.choices is not None and text not in rule.choices:
        raise ValidationError(
            f"{rule.name} must be one of: {', '.join(rule.choices)}", field=rule.name
        )

    return text


def _check_integer(rule: FieldRule, value: Any) -> int:
    # bool is a subclass of int; floats and numeric strings are not whole numbers here
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{rule.name} must be an integer", field=rule.name)

    if rule.positive and value <= 0:
        raise ValidationError(f"{rule.name} must be a positive integer", field=rule.name)

    if rule.max_value is not None and value > rule.max_value:
        raise ValidationError(f"{rule.name} cannot exceed {rule.max_value}", field=rule.name)

    return value


SIGN_UP_SCHEMA = Schema(
    name="sign-up",
    fields=(
        FieldRule("name", max_length=120),
        FieldRule("email", kind=EMAIL, max_length=255),
        FieldRule("password", strip=False),
    ),
)

SIGN_IN_SCHEMA = Schema(
    name="sign-in",
    fields=(
        FieldRule("email", kind=EMAIL, max_length=255),
        FieldRule("password", strip=False),
    ),
)

TRANSACTION_SCHEMA = Schema(
    name="transaction",
    fields=(
        FieldRule("description"),
        FieldRule("value", kind=INTEGER, positive=True, max_value=MAX_ENTRY_VALUE),
        FieldRule("type", choices=TRANSACTION_TYPES),
    ),
)
