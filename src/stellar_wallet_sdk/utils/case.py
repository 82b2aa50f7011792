"""Key conversion helpers for anchor query strings and bodies."""

from __future__ import annotations

import re
from typing import Any, Mapping

_UPPER = re.compile(r"[A-Z]")


def camel_to_snake_key(key: str) -> str:
    """Return key with every upper-case letter replaced by `_` + its lower-case form.

    `stellarTransactionId` -> `stellar_transaction_id`. Keys already in
    snake_case are returned unchanged.
    """
    return _UPPER.sub(lambda m: f"_{m.group(0).lower()}", key)


def camel_to_snake_dict(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of obj with every top-level key converted to snake_case."""
    return {camel_to_snake_key(k): v for k, v in obj.items()}


def compact_params(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Drop None values and snake_case the keys, ready for a query string.

    aiohttp/yarl only accept str, int and float in query params, so booleans
    are lowered to "true"/"false".
    """
    params: dict[str, Any] = {}
    for k, v in camel_to_snake_dict(obj).items():
        if v is None:
            continue
        params[k] = str(v).lower() if isinstance(v, bool) else v
    return params
