"""
Core utility functions.

Shared by the order codec, the catalog models and the upload services.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, Any, Iterable


def generate_record_id() -> str:
    """
    Generate a new RowKey for a record.

    Returns:
        Random UUID4 string (36 chars, hyphenated)
    """
    return str(uuid.uuid4())


def unique_object_name(original_name: str) -> str:
    """
    Prefix an uploaded file name with a UUID so uploads never collide.

    Args:
        original_name: Client-supplied file name

    Returns:
        "{uuid}_{original_name}"

    Example:
        >>> unique_object_name("contract.pdf")
        '0f8fad5b-d9cb-469f-a165-70867728950e_contract.pdf'
    """
    return f"{uuid.uuid4()}_{original_name}"


def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def canonicalize_keys(payload: Dict[str, Any], field_names: Iterable[str]) -> Dict[str, Any]:
    """
    Map keys of a JSON object onto canonical field names, ignoring case.

    Unknown keys are dropped. When two keys differ only by case, the later
    one wins (same as a case-insensitive JSON deserializer).

    Args:
        payload: Decoded JSON object
        field_names: Canonical names, e.g. ["action", "orderId"]

    Returns:
        Dict keyed by canonical names

    Example:
        >>> canonicalize_keys({"ORDERID": "O1", "extra": 1}, ["orderId"])
        {'orderId': 'O1'}
    """
    lookup = {name.lower(): name for name in field_names}
    result = {}
    for key, value in payload.items():
        canonical = lookup.get(str(key).lower())
        if canonical is not None:
            result[canonical] = value
    return result
