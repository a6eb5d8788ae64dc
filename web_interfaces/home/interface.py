# ============================================================================
# HOME INTERFACE
# ============================================================================
# STATUS: Web Interface - Landing page for the retail admin app
# EXPORTS: HomeInterface
# DEPENDENCIES: web_interfaces.base.BaseInterface, InterfaceRegistry
# ENTRY_POINTS: Registered as 'home' in InterfaceRegistry
# ============================================================================
"""
Home Interface

Landing page. Shows record counts and links to every admin page.

Route: /api/interface/home
"""

import azure.functions as func
from web_interfaces.base import BaseInterface
from web_interfaces import InterfaceRegistry


@InterfaceRegistry.register('home')
class HomeInterface(BaseInterface):
    """Landing page with navigation cards."""

    CARDS = (
        ("customers", "👤", "Customers", "Add, edit and remove customers"),
        ("products", "🛍️", "Products", "Catalog with images in blob storage"),
        ("orders", "📦", "Orders", "Queued order pipeline and status edits"),
        ("contracts", "📄", "Contracts", "Contract documents on the file share"),
    )

    def render(self, request: func.HttpRequest) -> str:
        counts = {
            "customers": len(self.services.customers.list_customers()),
            "products": len(self.services.products.list_products()),
            "orders": len(self.services.orders.list_orders()),
            "contracts": len(self.services.contracts.list_contracts()),
        }

        cards = "".join(
            f"""
            <a href="/api/interface/{name}" class="panel card">
                <div class="card-icon">{icon}</div>
                <h2>{title}</h2>
                <p class="subtitle">{description}</p>
                <p class="card-count">{counts[name]}</p>
            </a>
            """
            for name, icon, title, description in self.CARDS
        )

        content = f"""
            {self.render_header("Retail Hub", "Customers, products, orders and contracts on Azure Storage", "🏬")}
            <div class="cards-grid">{cards}</div>
        """
        return self.wrap_html("Retail Hub", content, custom_css=self._css())

    def _css(self) -> str:
        return """
        .cards-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(240px, 1fr)); gap: 20px; }
        .card { display: block; text-decoration: none; color: inherit; }
        .card:hover { box-shadow: 0 4px 10px rgba(0,0,0,0.15); }
        .card-icon { font-size: 28px; }
        .card-count { font-size: 28px; font-weight: 700; color: var(--ds-blue-primary); }
        """
