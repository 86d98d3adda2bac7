"""Conversion between JSON-style records and DynamoDB attribute values.

DynamoDB rejects Python floats and hands numbers back as ``Decimal``.
"""

import json
from decimal import Decimal
from typing import Any


def to_dynamo(value: Any) -> Any:
    """Floats become Decimals (via their JSON text, so 0.1 stays 0.1)."""
    return json.loads(json.dumps(value), parse_float=Decimal)


def from_dynamo(value: Any) -> Any:
    """Decimals become int or float; sets become lists."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [from_dynamo(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return [from_dynamo(v) for v in sorted(value, key=str)]
    return value
