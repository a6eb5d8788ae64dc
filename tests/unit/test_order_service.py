"""
OrderService and OrderQueueDrainer tests.

The write path is exercised end to end: enqueue onto the fake queue, drain
through the real processor, read back from the fake orders table.
"""

import base64
import json

import pytest

from config import QueueConfig
from core.codec import decode_order_message
from core.models import OrderRecord
from exceptions import ResourceNotFoundError, StoreUnavailableError, ValidationError
from services import create_services
from tests.factories.model_factories import make_customer, make_product, make_order_record


QUEUE = "orderqueue"


@pytest.fixture
def queue_repo(fake_repos):
    return fake_repos['queue_repo']


class TestEnqueueRaw:

    def test_enqueue_returns_ack(self, services, queue_repo, order_message_data):
        ack = services.orders.enqueue_raw(json.dumps(order_message_data))

        assert ack["status"] == "queued"
        assert ack["queue"] == QUEUE
        assert ack["message_id"]
        assert queue_repo.get_queue_length(QUEUE) == 1

    def test_enqueue_base64_wraps_by_default(self, services, queue_repo):
        body = '{"action": "Delete", "orderId": "O1"}'
        services.orders.enqueue_raw(body)
        assert base64.b64decode(queue_repo.contents(QUEUE)[0]).decode("utf-8") == body

    def test_enqueue_raw_when_base64_disabled(self, fake_repos, app_config):
        config = app_config.model_copy(update={"queues": QueueConfig(encode_base64=False)})
        services = create_services(fake_repos, config)
        body = '{"action": "Delete", "orderId": "O1"}'

        services.orders.enqueue_raw(body)

        assert fake_repos['queue_repo'].contents(QUEUE) == [body]

    @pytest.mark.parametrize("body", ["", "   ", "\n\t"])
    def test_empty_body_rejected(self, services, queue_repo, body):
        with pytest.raises(ValidationError):
            services.orders.enqueue_raw(body)
        assert queue_repo.get_queue_length(QUEUE) == 0

    def test_body_is_not_validated_at_enqueue(self, services, queue_repo):
        services.orders.enqueue_raw("not an order at all")
        assert queue_repo.get_queue_length(QUEUE) == 1

    def test_publish_failure_propagates(self, services, queue_repo):
        queue_repo.fail_writes = True
        with pytest.raises(StoreUnavailableError):
            services.orders.enqueue_raw('{"action": "Delete", "orderId": "O1"}')


class TestEnqueueThenConsume:

    def test_processing_status_survives_the_pipeline(self, services, fake_repos):
        services.orders.enqueue_raw(
            '{"action":"CreateOrUpdate","orderId":"O9","customerId":"C9","status":"Processing"}'
        )

        summary = services.drainer.drain()

        assert summary["received"] == 1
        assert summary["outcomes"] == {"upserted": 1}
        assert fake_repos['order_repo'].get_order("O9").status == "Processing"
        assert fake_repos['queue_repo'].get_queue_length(QUEUE) == 0

    def test_drain_counts_each_outcome(self, services, fake_repos):
        services.orders.enqueue_raw('{"action":"CreateOrUpdate","orderId":"A"}')
        services.orders.enqueue_raw('{"action":"Archive","orderId":"A"}')
        services.orders.enqueue_raw('not json')
        services.orders.enqueue_raw('{"action":"Delete","orderId":"A"}')

        summary = services.drainer.drain()

        assert summary["received"] == 4
        assert summary["outcomes"] == {
            "upserted": 1,
            "discarded_unknown_action": 1,
            "discarded_malformed": 1,
            "deleted": 1,
        }
        assert fake_repos['order_repo'].get_order("A") is None

    def test_drain_respects_max(self, services, fake_repos):
        for n in range(5):
            services.orders.enqueue_raw(json.dumps({"action": "CreateOrUpdate", "orderId": f"O{n}"}))

        summary = services.drainer.drain(max_messages=2)

        assert summary["received"] == 2
        assert fake_repos['queue_repo'].get_queue_length(QUEUE) == 3

    def test_failed_message_stays_for_redelivery(self, services, fake_repos):
        services.orders.enqueue_raw('{"action":"CreateOrUpdate","orderId":"O1"}')
        fake_repos['order_repo'].fail_writes = True

        summary = services.drainer.drain()

        assert len(summary["failed"]) == 1
        assert fake_repos['queue_repo'].get_queue_length(QUEUE) == 1

        # Visibility timeout expires, storage recovers, redelivery succeeds
        fake_repos['queue_repo'].release_inflight(QUEUE)
        fake_repos['order_repo'].fail_writes = False
        retry = services.drainer.drain()

        assert retry["outcomes"] == {"upserted": 1}
        assert fake_repos['order_repo'].get_order("O1") is not None

    def test_failed_ack_is_reported(self, services, fake_repos, monkeypatch):
        services.orders.enqueue_raw('{"action":"CreateOrUpdate","orderId":"O1"}')
        monkeypatch.setattr(fake_repos['queue_repo'], "delete_message", lambda *args: False)

        summary = services.drainer.drain()

        assert summary["outcomes"] == {"upserted": 1}
        assert len(summary["unacked"]) == 1
        assert summary["failed"] == []

    def test_drain_empty_queue(self, services):
        assert services.drainer.drain()["received"] == 0


class TestCreateAndDeleteOrder:

    def test_create_order_enqueues_processing_message(self, services, queue_repo):
        items = json.dumps([{"productId": "P1", "quantity": 2, "price": 4.25}])

        result = services.orders.create_order("C1", items)

        message = decode_order_message(queue_repo.contents(QUEUE)[0]).message
        assert message.order_id == result["order_id"]
        assert message.customer_id == "C1"
        assert message.status == "Processing"
        assert message.total_amount == pytest.approx(8.5)
        assert message.items_json == items
        assert message.order_date is not None

    @pytest.mark.parametrize("customer_id,items", [
        ("", "[]"),
        ("C1", ""),
        ("C1", "not json"),
        ("C1", '{"productId": "P1"}'),
        ("C1", {"productId": "P1"}),
        ("C1", 5),
    ])
    def test_create_order_validation(self, services, customer_id, items):
        with pytest.raises(ValidationError):
            services.orders.create_order(customer_id, items)

    def test_create_order_ids_are_unique(self, services):
        a = services.orders.create_order("C1", "[]")
        b = services.orders.create_order("C1", "[]")
        assert a["order_id"] != b["order_id"]

    def test_delete_order_is_queued_not_immediate(self, services, fake_repos):
        fake_repos['order_repo'].upsert_order(OrderRecord(**make_order_record(order_id="O1")))

        services.orders.delete_order("O1")

        assert fake_repos['order_repo'].get_order("O1") is not None
        services.drainer.drain()
        assert fake_repos['order_repo'].get_order("O1") is None


class TestReadPaths:

    def test_list_orders_newest_first(self, services, fake_repos):
        for n in range(4):
            fake_repos['order_repo'].upsert_order(OrderRecord(**make_order_record(order_id=f"O{n}")))

        dates = [o.order_date for o in services.orders.list_orders()]

        assert dates == sorted(dates, reverse=True)

    def test_get_unknown_order(self, services):
        with pytest.raises(ResourceNotFoundError):
            services.orders.get_order("missing")

    def test_details_join_customer_and_products(self, services, fake_repos):
        customer = make_customer(row_key="C1")
        product = make_product(row_key="P1")
        services.customers.upsert_customer(customer)
        services.products.upsert_product(product)
        fake_repos['order_repo'].upsert_order(OrderRecord(**make_order_record(
            order_id="O1",
            customer_id="C1",
            items_json=json.dumps([
                {"productId": "P1", "quantity": 2, "price": 3},
                {"productId": "gone", "quantity": 1, "price": 4},
            ]),
        )))

        details = services.orders.get_order_details("O1")

        assert details.customer.full_name == customer["fullName"]
        assert [i.product_name for i in details.items] == [product["name"], "Product not found"]
        assert details.total_price == pytest.approx(10)

    def test_details_placeholders(self, services, fake_repos):
        fake_repos['order_repo'].upsert_order(OrderRecord(**make_order_record(
            order_id="O1", customer_id="nobody", items_json="{broken"
        )))

        details = services.orders.get_order_details("O1")

        assert details.customer.full_name == "Customer not found"
        assert details.items == []
        assert details.to_dict()["totalPrice"] == 0


class TestUpdateStatus:

    def test_only_status_changes(self, services, fake_repos):
        original = OrderRecord(**make_order_record(order_id="O1", status="Pending"))
        fake_repos['order_repo'].upsert_order(original)

        updated = services.orders.update_status("O1", "Shipped")

        stored = fake_repos['order_repo'].get_order("O1")
        assert updated.status == "Shipped"
        assert stored.status == "Shipped"
        assert stored.model_copy(update={"status": original.status}) == original

    def test_unknown_order(self, services):
        with pytest.raises(ResourceNotFoundError):
            services.orders.update_status("missing", "Shipped")

    def test_blank_status(self, services, fake_repos):
        fake_repos['order_repo'].upsert_order(OrderRecord(**make_order_record(order_id="O1")))
        with pytest.raises(ValidationError):
            services.orders.update_status("O1", " ")
