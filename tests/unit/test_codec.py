"""
Order queue codec tests.

Base64-or-raw decode, case-insensitive keys, and rejection of payloads
that are not order messages.
"""

import base64
import json
from datetime import timezone

import pytest

from core.codec import decode_order_message, encode_queue_payload


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class TestDecodeAcceptsBothEncodings:

    def test_raw_json(self, order_message_data):
        result = decode_order_message(json.dumps(order_message_data))
        assert result.is_ok
        assert result.was_base64 is False
        assert result.message.order_id == order_message_data["orderId"]

    def test_base64_json(self, order_message_data):
        result = decode_order_message(_b64(json.dumps(order_message_data)))
        assert result.is_ok
        assert result.was_base64 is True
        assert result.message.order_id == order_message_data["orderId"]

    def test_both_encodings_decode_to_same_message(self, order_message_data):
        text = json.dumps(order_message_data)
        assert decode_order_message(text).message == decode_order_message(_b64(text)).message

    def test_bytes_input(self, order_message_data):
        result = decode_order_message(json.dumps(order_message_data).encode("utf-8"))
        assert result.is_ok

    def test_base64_text_that_is_not_json_object_falls_back_to_raw(self):
        # "1234" is valid base64 but not an order; raw parse yields a number
        result = decode_order_message("1234")
        assert not result.is_ok


class TestDecodeKeyCasing:

    def test_keys_are_case_insensitive(self):
        payload = {"ACTION": "Delete", "orderid": "O-1"}
        result = decode_order_message(json.dumps(payload))
        assert result.is_ok
        assert result.message.order_id == "O-1"
        assert result.message.action == "Delete"

    def test_unknown_keys_ignored(self, order_message_data):
        order_message_data["somethingElse"] = {"nested": True}
        assert decode_order_message(json.dumps(order_message_data)).is_ok

    def test_action_value_kept_verbatim(self):
        result = decode_order_message(json.dumps({"action": "Archive", "orderId": "O-1"}))
        assert result.is_ok
        assert result.message.parsed_action is None


class TestDecodeRejects:

    @pytest.mark.parametrize("raw", ["", "   ", "not json", "[1, 2]", '"text"', "null"])
    def test_not_a_json_object(self, raw):
        result = decode_order_message(raw)
        assert not result.is_ok
        assert result.error.detail

    def test_missing_action(self):
        result = decode_order_message(json.dumps({"orderId": "O-1"}))
        assert not result.is_ok
        assert "action" in result.error.detail

    def test_missing_order_id(self):
        result = decode_order_message(json.dumps({"action": "CreateOrUpdate"}))
        assert not result.is_ok
        assert "orderId" in result.error.detail

    def test_blank_order_id(self):
        result = decode_order_message(json.dumps({"action": "Delete", "orderId": "  "}))
        assert not result.is_ok

    def test_non_numeric_total(self):
        payload = {"action": "CreateOrUpdate", "orderId": "O-1", "totalAmount": "lots"}
        result = decode_order_message(json.dumps(payload))
        assert not result.is_ok
        assert "totalAmount" in result.error.detail

    def test_invalid_utf8_bytes(self):
        assert not decode_order_message(b"\xff\xfe\x00").is_ok


class TestDecodeFieldNormalization:

    def test_items_list_serialized_to_text(self):
        items = [{"productId": "P1", "quantity": 2, "price": 3.5}]
        payload = {"action": "CreateOrUpdate", "orderId": "O-1", "itemsJson": items}
        result = decode_order_message(json.dumps(payload))
        assert result.is_ok
        assert json.loads(result.message.items_json) == items

    def test_naive_order_date_is_utc(self):
        payload = {"action": "CreateOrUpdate", "orderId": "O-1", "orderDate": "2025-01-02T03:04:05"}
        result = decode_order_message(json.dumps(payload))
        assert result.message.order_date.tzinfo == timezone.utc
        assert result.message.order_date.hour == 3

    def test_absent_fields_stay_none(self):
        result = decode_order_message(json.dumps({"action": "CreateOrUpdate", "orderId": "O-1"}))
        message = result.message
        assert message.customer_id is None
        assert message.status is None
        assert message.total_amount is None
        assert message.order_date is None
        assert message.items_json is None


class TestEncodeQueuePayload:

    def test_base64_wrap_decodes_back(self, order_message_data):
        text = json.dumps(order_message_data)
        wrapped = encode_queue_payload(text)
        assert wrapped != text
        assert base64.b64decode(wrapped).decode("utf-8") == text

    def test_raw_passthrough(self):
        assert encode_queue_payload('{"a": 1}', base64_wrap=False) == '{"a": 1}'
