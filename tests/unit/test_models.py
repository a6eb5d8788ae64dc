"""
Catalog and order model tests.

Payload mapping for customers and products, itemsJson parsing, and the
order record defaults.
"""

import json

import pytest

from core.models import (
    CustomerRecord,
    OrderAction,
    OrderMessage,
    OrderRecord,
    ProductRecord,
    parse_items,
    items_total,
)
from core.utils import canonicalize_keys, unique_object_name
from exceptions import ValidationError


class TestCustomerRecord:

    def test_from_payload(self, customer_data):
        customer = CustomerRecord.from_payload(customer_data)
        assert customer.row_key == customer_data["rowKey"]
        assert customer.full_name == customer_data["fullName"]
        assert customer.email == customer_data["email"]

    def test_keys_case_insensitive(self):
        customer = CustomerRecord.from_payload({"ROWKEY": "C1", "fullname": "Ann"})
        assert customer.row_key == "C1"
        assert customer.full_name == "Ann"

    def test_optional_fields_default_empty(self):
        customer = CustomerRecord.from_payload({"rowKey": "C1", "fullName": "Ann"})
        assert customer.email == ""
        assert customer.phone == ""

    @pytest.mark.parametrize("payload", [
        {"fullName": "Ann"},
        {"rowKey": "C1"},
        {"rowKey": "  ", "fullName": "Ann"},
        {"rowKey": "C1", "fullName": ""},
        ["not", "an", "object"],
        None,
    ])
    def test_invalid_payload(self, payload):
        with pytest.raises(ValidationError):
            CustomerRecord.from_payload(payload)

    def test_to_dict_uses_wire_names(self, customer_data):
        data = CustomerRecord.from_payload(customer_data).to_dict()
        assert set(data) == {"rowKey", "fullName", "email", "phone"}


class TestProductRecord:

    def test_from_payload(self, product_data):
        product = ProductRecord.from_payload(product_data)
        assert product.row_key == product_data["rowKey"]
        assert product.price == pytest.approx(product_data["price"])

    def test_numeric_string_price_accepted(self):
        product = ProductRecord.from_payload({"rowKey": "P1", "name": "Hat", "price": "12.50"})
        assert product.price == pytest.approx(12.5)

    @pytest.mark.parametrize("price", [None, "cheap", -1, True])
    def test_bad_price_rejected(self, price):
        payload = {"rowKey": "P1", "name": "Hat"}
        if price is not None:
            payload["price"] = price
        with pytest.raises(ValidationError):
            ProductRecord.from_payload(payload)

    def test_missing_name_rejected(self):
        with pytest.raises(ValidationError):
            ProductRecord.from_payload({"rowKey": "P1", "price": 1})


class TestItems:

    def test_parse_and_total(self):
        items = parse_items(json.dumps([
            {"productId": "P1", "quantity": 2, "price": 2.5},
            {"PRODUCTID": "P2", "Quantity": 1, "Price": 10},
        ]))
        assert [i.product_id for i in items] == ["P1", "P2"]
        assert items_total(items) == pytest.approx(15.0)

    @pytest.mark.parametrize("text", [None, "", "not json", "{}", "[1, 2]", '[{"quantity": "many"}]'])
    def test_invalid_items_yield_empty_list(self, text):
        assert parse_items(text) == []

    def test_item_dict_includes_display_fields(self):
        item = parse_items('[{"productId": "P1", "quantity": 3, "price": 2}]')[0]
        item.product_name = "Hat"
        data = item.to_dict()
        assert data["productName"] == "Hat"
        assert data["totalPrice"] == pytest.approx(6)


class TestOrderRecord:

    def test_from_message_keeps_supplied_fields(self, fixed_now):
        message = OrderMessage(action="CreateOrUpdate", orderId="O1", status="Shipped", totalAmount=9.5)
        record = OrderRecord.from_message(message, now=fixed_now)
        assert record.status == "Shipped"
        assert record.total_amount == 9.5
        assert record.order_date == fixed_now

    def test_to_dict_round_trips_through_constructor(self, order_record_data):
        record = OrderRecord(**order_record_data)
        assert OrderRecord(**record.to_dict()).order_id == record.order_id

    def test_message_wire_omits_absent_fields(self):
        wire = json.loads(OrderMessage(action="Delete", orderId="O1").to_wire())
        assert wire == {"action": "Delete", "orderId": "O1"}


class TestHelpers:

    @pytest.mark.parametrize("value,expected", [
        ("CreateOrUpdate", OrderAction.CREATE_OR_UPDATE),
        ("DELETE", OrderAction.DELETE),
        (" delete ", OrderAction.DELETE),
        ("Archive", None),
        (None, None),
    ])
    def test_action_parse(self, value, expected):
        assert OrderAction.parse(value) is expected

    def test_canonicalize_keys_later_duplicate_wins(self):
        result = canonicalize_keys({"orderId": "a", "ORDERID": "b", "x": 1}, ["orderId"])
        assert result == {"orderId": "b"}

    def test_unique_object_name_prefix(self):
        name = unique_object_name("contract.pdf")
        prefix, original = name.split("_", 1)
        assert original == "contract.pdf"
        assert len(prefix) == 36
        assert unique_object_name("contract.pdf") != name
