"""
Randomized order, customer and product payload factories.

Every factory call generates randomized non-identity fields
(names, prices, quantities, timestamps) so tests cannot rely on
specific default values.
"""

import json
import random
import string
import uuid
from datetime import datetime, timezone, timedelta


def _random_suffix(length: int = 6) -> str:
    """Generate random alphanumeric suffix."""
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


def _random_timestamp() -> datetime:
    """Generate random timestamp within last 30 days (whole seconds, UTC)."""
    offset = random.randint(0, 30 * 24 * 3600)
    moment = datetime.now(timezone.utc) - timedelta(seconds=offset)
    return moment.replace(microsecond=0)


def _random_price() -> float:
    return round(random.uniform(1, 500), 2)


def make_items(count: int = None, product_ids=None):
    """
    Build a list of order line dicts (wire casing).

    Returns:
        list of {"productId", "quantity", "price"}
    """
    if product_ids is None:
        product_ids = [f"P-{_random_suffix()}" for _ in range(count or random.randint(1, 4))]
    return [
        {
            "productId": product_id,
            "quantity": random.randint(1, 5),
            "price": _random_price(),
        }
        for product_id in product_ids
    ]


def make_order_message(order_id: str = None, action: str = "CreateOrUpdate", **overrides):
    """
    Build an order queue message dict with every field populated.

    Args:
        order_id: Optional fixed orderId
        action: Wire action value
        **overrides: Any wire field override

    Returns:
        dict suitable for json.dumps onto the order queue
    """
    suffix = _random_suffix()
    items = make_items()
    base = {
        "action": action,
        "orderId": order_id or f"O-{suffix}-{uuid.uuid4().hex[:8]}",
        "customerId": f"C-{suffix}",
        "status": random.choice(["Pending", "Processing", "Shipped"]),
        "totalAmount": round(sum(i["quantity"] * i["price"] for i in items), 2),
        "orderDate": _random_timestamp().isoformat().replace("+00:00", "Z"),
        "itemsJson": json.dumps(items),
    }
    base.update(overrides)
    return base


def make_customer(row_key: str = None, **overrides):
    """
    Build a customer payload dict (API casing).
    """
    suffix = _random_suffix()
    base = {
        "rowKey": row_key or f"C-{suffix}",
        "fullName": f"Customer {suffix.title()}",
        "email": f"{suffix}@example.com",
        "phone": f"555-{random.randint(1000, 9999)}",
    }
    base.update(overrides)
    return base


def make_product(row_key: str = None, **overrides):
    """
    Build a product payload dict (API casing).
    """
    suffix = _random_suffix()
    base = {
        "rowKey": row_key or f"P-{suffix}",
        "name": f"Product {suffix}",
        "description": f"Description {_random_suffix(12)}",
        "price": _random_price(),
        "imageUrl": "",
    }
    base.update(overrides)
    return base


def make_order_record(order_id: str = None, **overrides):
    """
    Build an OrderRecord constructor dict (field names).
    """
    suffix = _random_suffix()
    items = make_items()
    base = {
        "order_id": order_id or f"O-{suffix}",
        "customer_id": f"C-{suffix}",
        "status": random.choice(["Pending", "Processing", "Shipped", "Delivered"]),
        "total_amount": round(sum(i["quantity"] * i["price"] for i in items), 2),
        "order_date": _random_timestamp(),
        "items_json": json.dumps(items),
    }
    base.update(overrides)
    return base
