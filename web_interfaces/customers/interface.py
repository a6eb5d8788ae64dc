"""
Customers Interface

Customer list with an add/replace form and delete buttons. The form posts
to /api/customers (upsert), so editing is "submit the same rowKey again".

Route: /api/interface/customers
"""

import azure.functions as func
from web_interfaces.base import BaseInterface, esc
from web_interfaces import InterfaceRegistry


@InterfaceRegistry.register('customers')
class CustomersInterface(BaseInterface):
    """Customer admin page."""

    def render(self, request: func.HttpRequest) -> str:
        customers = self.services.customers.list_customers()

        rows = [
            [
                esc(c.row_key),
                esc(c.full_name),
                esc(c.email),
                esc(c.phone),
                f'<button class="btn btn-danger" onclick="deleteCustomer(\'{esc(c.row_key)}\')">Delete</button>',
            ]
            for c in customers
        ]

        content = f"""
            {self.render_header("Customers", f"{len(customers)} customer(s)", "👤")}
            <div class="panel">
                <h2>Add or replace customer</h2>
                <form id="customer-form" class="form-row" onsubmit="saveCustomer(event)">
                    <input name="rowKey" placeholder="Id (blank for new)">
                    <input name="fullName" placeholder="Full name" required>
                    <input name="email" type="email" placeholder="Email">
                    <input name="phone" placeholder="Phone">
                    <button type="submit" class="btn btn-primary">Save</button>
                </form>
            </div>
            <div class="panel">
                {self.render_table(["Id", "Name", "Email", "Phone", ""], rows, "No customers yet.")}
            </div>
        """
        return self.wrap_html("Customers", content, custom_js=self._js())

    def _js(self) -> str:
        return """
        async function saveCustomer(event) {
            event.preventDefault();
            const data = Object.fromEntries(new FormData(event.target));
            if (!data.rowKey) { data.rowKey = crypto.randomUUID(); }
            await apiCall('POST', '/api/customers', data);
            location.reload();
        }
        async function deleteCustomer(id) {
            if (!confirm('Delete customer ' + id + '?')) return;
            await apiCall('DELETE', '/api/customers/' + encodeURIComponent(id));
            location.reload();
        }
        """
