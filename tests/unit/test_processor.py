"""
OrderProcessor tests.

Replace-by-key upserts, idempotent deletes, defaults for absent fields,
and the discard paths that must never raise.
"""

import base64
import json

import pytest

from core.models import ProcessOutcome
from exceptions import StoreUnavailableError
from tests.factories.model_factories import make_order_message


class TestCreateOrUpdate:

    def test_upsert_writes_every_field(self, processor, order_repo, order_message_data):
        outcome = processor.process(json.dumps(order_message_data))

        assert outcome is ProcessOutcome.UPSERTED
        stored = order_repo.get_order(order_message_data["orderId"])
        assert stored.customer_id == order_message_data["customerId"]
        assert stored.status == order_message_data["status"]
        assert stored.total_amount == pytest.approx(order_message_data["totalAmount"])
        assert stored.items_json == order_message_data["itemsJson"]
        assert stored.order_date.isoformat().replace("+00:00", "Z") == order_message_data["orderDate"]

    def test_minimal_message_gets_defaults(self, processor, order_repo, fixed_now):
        raw = json.dumps({"action": "CreateOrUpdate", "orderId": "O1", "customerId": "C1"})

        processor.process(raw)

        stored = order_repo.get_order("O1")
        assert stored.customer_id == "C1"
        assert stored.status == "Pending"
        assert stored.total_amount == 0
        assert stored.items_json == "[]"
        assert stored.order_date == fixed_now

    def test_missing_customer_defaults_to_empty(self, processor, order_repo):
        processor.process(json.dumps({"action": "CreateOrUpdate", "orderId": "O2"}))
        assert order_repo.get_order("O2").customer_id == ""

    def test_applying_twice_equals_applying_once(self, processor, order_repo, order_message_data):
        raw = json.dumps(order_message_data)

        processor.process(raw)
        first = order_repo.get_order(order_message_data["orderId"])
        processor.process(raw)
        second = order_repo.get_order(order_message_data["orderId"])

        assert first == second
        assert len(order_repo.list_orders()) == 1

    def test_later_message_replaces_every_field(self, processor, order_repo):
        processor.process(json.dumps(make_order_message(order_id="O3")))
        processor.process(json.dumps({"action": "CreateOrUpdate", "orderId": "O3", "status": "Shipped"}))

        stored = order_repo.get_order("O3")
        assert stored.status == "Shipped"
        # No merge with the previous row
        assert stored.customer_id == ""
        assert stored.items_json == "[]"
        assert stored.total_amount == 0

    def test_action_is_case_insensitive(self, processor, order_repo):
        outcome = processor.process(json.dumps({"action": "createorupdate", "orderId": "O4"}))
        assert outcome is ProcessOutcome.UPSERTED
        assert order_repo.get_order("O4") is not None

    def test_base64_and_raw_produce_same_row(self, processor, order_repo, order_message_data):
        text = json.dumps(order_message_data)

        processor.process(base64.b64encode(text.encode("utf-8")).decode("ascii"))
        from_base64 = order_repo.get_order(order_message_data["orderId"])
        processor.process(text)
        from_raw = order_repo.get_order(order_message_data["orderId"])

        assert from_base64 == from_raw


class TestDelete:

    def test_delete_removes_row(self, processor, order_repo, order_message_data):
        processor.process(json.dumps(order_message_data))

        outcome = processor.process(json.dumps({"action": "Delete", "orderId": order_message_data["orderId"]}))

        assert outcome is ProcessOutcome.DELETED
        assert order_repo.get_order(order_message_data["orderId"]) is None

    def test_delete_absent_id_is_noop(self, processor, order_repo):
        outcome = processor.process(json.dumps({"action": "Delete", "orderId": "never-created"}))
        assert outcome is ProcessOutcome.DELETED
        assert order_repo.list_orders() == []

    def test_delete_then_create_recreates(self, processor, order_repo):
        processor.process(json.dumps({"action": "Delete", "orderId": "O5"}))
        processor.process(json.dumps({"action": "CreateOrUpdate", "orderId": "O5"}))
        assert order_repo.get_order("O5") is not None


class TestDiscardPaths:

    def test_unknown_action_touches_nothing(self, processor, order_repo):
        outcome = processor.process(json.dumps({"action": "Archive", "orderId": "O6"}))

        assert outcome is ProcessOutcome.DISCARDED_UNKNOWN_ACTION
        assert order_repo.write_count == 0

    @pytest.mark.parametrize("raw", ["", "{not json", "[]", '{"orderId": "O7"}', '{"action": "Delete"}'])
    def test_malformed_is_discarded(self, processor, order_repo, raw):
        assert processor.process(raw) is ProcessOutcome.DISCARDED_MALFORMED
        assert order_repo.write_count == 0


class TestStorageFailure:

    def test_store_error_propagates(self, processor, order_repo, order_message_data):
        order_repo.fail_writes = True
        with pytest.raises(StoreUnavailableError):
            processor.process(json.dumps(order_message_data))

    def test_delete_store_error_propagates(self, processor, order_repo):
        order_repo.fail_writes = True
        with pytest.raises(StoreUnavailableError):
            processor.process(json.dumps({"action": "Delete", "orderId": "O8"}))
