# src/propeval/services/validation.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from propeval.domain.errors import PropertyValidationError
from propeval.domain.property import NUMERIC_FIELDS, PropertyInput

# Fields that must be present before we can reason about a property
REQUIRED_FIELDS = [
    "address",
    "price",
    "monthlyRent",
    "monthlyExpenses",
    "downPayment",
]


def _wire_name(attr: str) -> str:
    field = PropertyInput.model_fields[attr]
    return field.alias or attr


# wire name -> attribute name, e.g. "monthlyRent" -> "monthly_rent"
_WIRE_TO_ATTR = {_wire_name(name): name for name in PropertyInput.model_fields}
_NUMERIC_WIRE_NAMES = {_wire_name(name) for name in NUMERIC_FIELDS}


def _lookup(raw: Mapping[str, Any], wire: str) -> Any:
    if wire in raw:
        return raw[wire]
    return raw.get(_WIRE_TO_ATTR.get(wire, wire))


def _is_blank(val: Any) -> bool:
    if val is None:
        return True
    return isinstance(val, str) and not val.strip()


def _clean_numeric(val: Any) -> Any:
    """
    Strip presentation noise from numeric strings:
      - "350,000"
      - "$2,800"
      - " 1200 "
    Anything else is left for pydantic to accept or reject.
    """
    if not isinstance(val, str):
        return val
    s = val.strip().replace(",", "")
    if s.startswith("$"):
        s = s[1:]
    return s


def _format_errors(err: ValidationError) -> tuple[str, list[str]]:
    fields: list[str] = []
    parts: list[str] = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "payload"
        msg = str(e.get("msg", "invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        if loc not in fields:
            fields.append(loc)
        parts.append(f"{loc}: {msg}")
    return "; ".join(parts), fields


def validate_and_prepare_payload(raw: Any) -> PropertyInput:
    """
    Turn an incoming payload into a validated PropertyInput.

    Responsibilities:
      - Ensure required fields exist (all missing ones are reported together).
      - Normalize numeric strings.
      - Enforce the numeric sanity rules declared on PropertyInput.
    Raises PropertyValidationError; nothing downstream runs on bad input.
    """
    if not isinstance(raw, Mapping):
        raise PropertyValidationError("Property payload must be a JSON object")

    # 1. Required fields
    missing = [f for f in REQUIRED_FIELDS if _is_blank(_lookup(raw, f))]
    if missing:
        raise PropertyValidationError(
            f"Missing required fields: {', '.join(missing)}",
            fields=missing,
        )

    # 2. Numeric clean-up
    cleaned: dict[str, Any] = {}
    for key, val in raw.items():
        if key in _NUMERIC_WIRE_NAMES or key in NUMERIC_FIELDS:
            if _is_blank(val):
                # blank optional number == not supplied
                continue
            val = _clean_numeric(val)
        cleaned[key] = val

    # 3. Type / range validation
    try:
        return PropertyInput.model_validate(cleaned)
    except ValidationError as err:
        message, fields = _format_errors(err)
        raise PropertyValidationError(message, fields=fields) from err
