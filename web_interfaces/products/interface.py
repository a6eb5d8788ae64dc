"""
Products Interface

Product catalog with name search (?q=), an add/replace form with optional
image upload, and delete buttons. The image is uploaded first through
/api/products/image; the returned blob URL becomes the product's imageUrl.

Route: /api/interface/products?q=term
"""

import azure.functions as func
from web_interfaces.base import BaseInterface, esc
from web_interfaces import InterfaceRegistry


@InterfaceRegistry.register('products')
class ProductsInterface(BaseInterface):
    """Product admin page."""

    def render(self, request: func.HttpRequest) -> str:
        q = (self.get_query_params(request).get('q') or "").strip()
        products = self.services.products.list_products(q or None)

        rows = []
        for p in products:
            image = f'<img class="thumb" src="{esc(p.image_url)}" alt="">' if p.image_url else ""
            rows.append([
                image,
                esc(p.name),
                esc(p.description),
                self.format_money(p.price),
                f'<code>{esc(p.row_key)}</code>',
                f'<button class="btn btn-danger" onclick="deleteProduct(\'{esc(p.row_key)}\')">Delete</button>',
            ])

        subtitle = f"{len(products)} product(s)" + (f' matching "{q}"' if q else "")
        clear_link = '<a class="btn" href="/api/interface/products">Clear</a>' if q else ""

        content = f"""
            {self.render_header("Products", subtitle, "🛍️")}
            <div class="panel">
                <form class="form-row" method="get" action="/api/interface/products">
                    <input name="q" value="{esc(q)}" placeholder="Search by name">
                    <button type="submit" class="btn">Search</button>
                    {clear_link}
                </form>
            </div>
            <div class="panel">
                <h2>Add or replace product</h2>
                <form id="product-form" class="form-row" onsubmit="saveProduct(event)">
                    <input name="rowKey" placeholder="Id (blank for new)">
                    <input name="name" placeholder="Name" required>
                    <input name="description" placeholder="Description">
                    <input name="price" type="number" step="0.01" min="0" placeholder="Price" required>
                    <input name="image" type="file" accept="image/*">
                    <button type="submit" class="btn btn-primary">Save</button>
                </form>
            </div>
            <div class="panel">
                {self.render_table(["", "Name", "Description", "Price", "Id", ""], rows, "No products found.")}
            </div>
        """
        return self.wrap_html("Products", content, custom_js=self._js())

    def _js(self) -> str:
        return """
        async function saveProduct(event) {
            event.preventDefault();
            const form = event.target;
            const product = {
                rowKey: form.rowKey.value || crypto.randomUUID(),
                name: form.name.value,
                description: form.description.value,
                price: parseFloat(form.price.value),
                imageUrl: ''
            };
            if (form.image.files.length) {
                const upload = new FormData();
                upload.append('file', form.image.files[0]);
                const result = await apiCall('POST', '/api/products/image', upload, true);
                product.imageUrl = result.url;
            }
            await apiCall('POST', '/api/products', product);
            location.reload();
        }
        async function deleteProduct(id) {
            if (!confirm('Delete product ' + id + '?')) return;
            await apiCall('DELETE', '/api/products/' + encodeURIComponent(id));
            location.reload();
        }
        """
