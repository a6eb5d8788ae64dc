"""
Order Detail Interface

One order with its customer, line items (product names resolved) and total.
A deleted customer or product shows as "... not found" rather than failing
the page.

Route: /api/interface/order?id={order_id}
"""

import azure.functions as func
from exceptions import ResourceNotFoundError
from web_interfaces.base import BaseInterface, esc
from web_interfaces import InterfaceRegistry


@InterfaceRegistry.register('order')
class OrderDetailInterface(BaseInterface):
    """Order detail page."""

    def render(self, request: func.HttpRequest) -> str:
        order_id = (self.get_query_params(request).get('id') or "").strip()
        if not order_id:
            return self._not_found("No order id given. Open an order from the orders page.")

        try:
            details = self.services.orders.get_order_details(order_id)
        except ResourceNotFoundError:
            return self._not_found(f"Order {order_id} does not exist (it may still be queued).")

        order = details.order
        customer = details.customer

        rows = [
            [
                esc(item.product_name),
                str(item.quantity),
                self.format_money(item.price),
                self.format_money(item.total_price),
            ]
            for item in details.items
        ]

        content = f"""
            {self.render_header(f"Order {order.order_id}", order.order_date.strftime("%Y-%m-%d %H:%M UTC"), "📦")}
            <div class="panel">
                <h2>Customer</h2>
                <p><strong>{esc(customer.full_name)}</strong></p>
                <p class="subtitle">{esc(customer.email)} {esc(customer.phone)}</p>
                <p style="margin-top: 10px;">Status: {self.render_status_badge(order.status)}</p>
            </div>
            <div class="panel">
                <h2>Items</h2>
                {self.render_table(["Product", "Quantity", "Price", "Line total"], rows, "No items on this order.")}
                <p style="margin-top: 12px; font-size: 16px;">
                    <strong>Total: {self.format_money(details.total_price)}</strong>
                </p>
            </div>
            <a class="btn" href="/api/interface/orders">← All orders</a>
        """
        return self.wrap_html(f"Order {order.order_id}", content)

    def _not_found(self, message: str) -> str:
        content = f"""
            {self.render_header("Order", "", "📦")}
            <div class="panel">{self.render_empty_state("🔍", "Order not found", message)}</div>
            <a class="btn" href="/api/interface/orders">← All orders</a>
        """
        return self.wrap_html("Order not found", content)
