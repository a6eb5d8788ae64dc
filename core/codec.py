"""
Order Queue Codec - decode queue text into OrderMessage.

Producers may put either base64-wrapped JSON or raw JSON on the order queue.
Decoding is two explicit steps:

    1. Strict base64 decode, then strict UTF-8 decode. If that succeeds and
       the text parses as a JSON object, it is the payload.
    2. Otherwise the raw message text is the payload.

Requiring a JSON object in step 1 keeps raw text that happens to be valid
base64 (e.g. "1234") from being mis-decoded into garbage bytes.

Keys are then matched case-insensitively onto OrderMessage fields.

Exports:
    decode_order_message: queue text -> DecodeResult
    encode_queue_payload: message text -> queue text
    DecodeResult, DecodeError, DecodeErrorKind
"""

import base64
import binascii
import json
from dataclasses import dataclass
from datetime import timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from core.models.order import OrderMessage
from core.utils import canonicalize_keys


class DecodeErrorKind(Enum):
    """Why a queue message could not be decoded."""

    MALFORMED = "malformed"


@dataclass(frozen=True)
class DecodeError:
    kind: DecodeErrorKind
    detail: str


@dataclass(frozen=True)
class DecodeResult:
    """
    Either ok(message) or err(error), never both.

    Use DecodeResult.ok() / DecodeResult.err() to construct.
    """

    message: Optional[OrderMessage] = None
    error: Optional[DecodeError] = None
    was_base64: bool = False

    @property
    def is_ok(self) -> bool:
        return self.message is not None

    @classmethod
    def ok(cls, message: OrderMessage, was_base64: bool = False) -> 'DecodeResult':
        return cls(message=message, was_base64=was_base64)

    @classmethod
    def err(cls, detail: str, kind: DecodeErrorKind = DecodeErrorKind.MALFORMED) -> 'DecodeResult':
        return cls(error=DecodeError(kind=kind, detail=detail))


def _try_base64_object(text: str) -> Optional[Dict[str, Any]]:
    """Step 1: strict base64 + UTF-8 + JSON object, or None."""
    try:
        decoded = base64.b64decode(text.strip(), validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        # UnicodeDecodeError is a ValueError
        return None
    try:
        payload = json.loads(decoded)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def decode_order_message(raw: Union[str, bytes]) -> DecodeResult:
    """
    Decode one queue message into an OrderMessage.

    Args:
        raw: Message text as delivered (str, or bytes decoded as UTF-8)

    Returns:
        DecodeResult.ok(message) or DecodeResult.err(detail). Never raises
        for bad input.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return DecodeResult.err("message body is not UTF-8")

    if raw is None or not raw.strip():
        return DecodeResult.err("empty message")

    payload = _try_base64_object(raw)
    was_base64 = payload is not None
    if payload is None:
        try:
            payload = json.loads(raw)
        except ValueError as e:
            return DecodeResult.err(f"invalid JSON: {e}")

    if not isinstance(payload, dict):
        return DecodeResult.err(f"expected JSON object, got {type(payload).__name__}")

    fields = canonicalize_keys(payload, OrderMessage.WIRE_FIELDS)

    action = fields.get("action")
    if not isinstance(action, str) or not action.strip():
        return DecodeResult.err("missing action")

    order_id = fields.get("orderId")
    if not isinstance(order_id, str) or not order_id.strip():
        return DecodeResult.err("missing orderId")

    # Producers sometimes send the item list itself instead of its JSON text
    items = fields.get("itemsJson")
    if isinstance(items, (list, dict)):
        fields["itemsJson"] = json.dumps(items)

    try:
        message = OrderMessage(**fields)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        return DecodeResult.err(f"invalid field {location}: {first.get('msg')}")

    if message.order_date is not None and message.order_date.tzinfo is None:
        message = message.model_copy(update={"order_date": message.order_date.replace(tzinfo=timezone.utc)})

    return DecodeResult.ok(message, was_base64=was_base64)


def encode_queue_payload(text: str, base64_wrap: bool = True) -> str:
    """
    Prepare message text for the queue.

    Args:
        text: JSON message text
        base64_wrap: Wrap in base64 (what the consumer's first decode step expects)

    Returns:
        Text to pass to QueueClient.send_message
    """
    if not base64_wrap:
        return text
    return base64.b64encode(text.encode("utf-8")).decode("ascii")
