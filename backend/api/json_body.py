"""Request body decoding for validated endpoints."""
import json
import math
from typing import Any

from fastapi import Request

from core.errors import invalid_json, raise_error


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not a valid JSON number")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range")
    return value


async def read_json_object(request: Request) -> dict[str, Any]:
    """Decode the request body and require a JSON object.

    Raises AppErrorException (400, E2021_INVALID_JSON) for malformed JSON,
    for NaN/Infinity and overflowing numbers (a JSON column cannot store
    them), and for bodies that decode to anything other than an object.
    """
    raw = await request.body()
    try:
        payload = (
            json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_finite_float)
            if raw else None
        )
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors
        raise_error(invalid_json(str(e), origin="request_body").error)

    if not isinstance(payload, dict):
        kind = "empty body" if payload is None else type(payload).__name__
        raise_error(invalid_json(f"expected an object, got {kind}", origin="request_body").error)
    return payload
