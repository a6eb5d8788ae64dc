# ============================================================================
# ORDERS INTERFACE
# ============================================================================
# STATUS: Web Interface - Order list, create form, status edit
# EXPORTS: OrdersInterface
# ENTRY_POINTS: Registered as 'orders' in InterfaceRegistry
# ============================================================================
"""
Orders Interface

Lists orders newest first with customer names, and offers:
    - New order form (customer + products with quantities). The page builds
      itemsJson from the current product prices and posts it to /api/orders;
      the order shows up once the queue processor has consumed it.
    - Inline status change (PUT /api/orders/{id}/status)
    - Delete (queued)
    - "Process queue" button (POST /api/orders/drain) for local runs without
      the queue trigger

Route: /api/interface/orders
"""

from urllib.parse import quote

import azure.functions as func
from core.models import OrderStatus
from web_interfaces.base import BaseInterface, esc
from web_interfaces import InterfaceRegistry


@InterfaceRegistry.register('orders')
class OrdersInterface(BaseInterface):
    """Order admin page."""

    def render(self, request: func.HttpRequest) -> str:
        orders = self.services.orders.list_orders()
        customers = self.services.customers.list_customers()
        products = self.services.products.list_products()
        names = {c.row_key: c.full_name for c in customers}

        rows = []
        for o in orders:
            rows.append([
                f'<a href="/api/interface/order?id={esc(quote(o.order_id, safe=""))}"><code>{esc(o.order_id[:8])}</code></a>',
                esc(names.get(o.customer_id, o.customer_id or "-")),
                esc(o.order_date.strftime("%Y-%m-%d %H:%M")),
                self.format_money(o.total_amount),
                self.render_status_badge(o.status),
                self._status_select(o.order_id, o.status),
                f'<button class="btn btn-danger" onclick="deleteOrder(\'{esc(o.order_id)}\')">Delete</button>',
            ])

        customer_options = "".join(
            f'<option value="{esc(c.row_key)}">{esc(c.full_name)}</option>' for c in customers
        )
        product_inputs = "".join(
            f"""
            <label class="product-line">
                <input type="number" min="0" value="0" class="qty"
                       data-product-id="{esc(p.row_key)}" data-price="{p.price}">
                {esc(p.name)} ({self.format_money(p.price)})
            </label>
            """
            for p in products
        )

        actions = '<button class="btn" onclick="drainQueue()">Process queue</button>'
        content = f"""
            {self.render_header("Orders", f"{len(orders)} order(s)", "📦", actions)}
            <div class="panel">
                <h2>New order</h2>
                <form id="order-form" onsubmit="createOrder(event)">
                    <div class="form-row">
                        <select name="customerId" required>
                            <option value="">Select customer</option>
                            {customer_options}
                        </select>
                    </div>
                    <div class="form-row">{product_inputs or '<span class="subtitle">No products yet.</span>'}</div>
                    <button type="submit" class="btn btn-primary">Place order</button>
                </form>
            </div>
            <div class="panel">
                {self.render_table(["Order", "Customer", "Date", "Total", "Status", "Change", ""], rows, "No orders yet.")}
            </div>
        """
        return self.wrap_html("Orders", content, custom_css=".product-line { margin-right: 16px; }",
                              custom_js=self._js())

    def _status_select(self, order_id: str, current: str) -> str:
        options = "".join(
            f'<option value="{s.value}"{" selected" if s.value == current else ""}>{s.value}</option>'
            for s in OrderStatus
        )
        return f'<select onchange="updateStatus(\'{esc(order_id)}\', this.value)">{options}</select>'

    def _js(self) -> str:
        return """
        async function createOrder(event) {
            event.preventDefault();
            const items = [];
            document.querySelectorAll('.qty').forEach(function (input) {
                const quantity = parseInt(input.value, 10);
                if (quantity > 0) {
                    items.push({
                        productId: input.dataset.productId,
                        quantity: quantity,
                        price: parseFloat(input.dataset.price)
                    });
                }
            });
            if (!items.length) { alert('Pick at least one product.'); return; }
            const customerId = event.target.customerId.value;
            await apiCall('POST', '/api/orders', {customerId: customerId, itemsJson: JSON.stringify(items)});
            alert('Order queued. It appears once the queue has been processed.');
            location.reload();
        }
        async function updateStatus(id, status) {
            await apiCall('PUT', '/api/orders/' + encodeURIComponent(id) + '/status', {status: status});
            location.reload();
        }
        async function deleteOrder(id) {
            if (!confirm('Delete order ' + id + '?')) return;
            await apiCall('DELETE', '/api/orders/' + encodeURIComponent(id));
            alert('Delete queued.');
            location.reload();
        }
        async function drainQueue() {
            const result = await apiCall('POST', '/api/orders/drain');
            alert('Processed ' + result.received + ' message(s): ' + JSON.stringify(result.outcomes));
            location.reload();
        }
        """
