"""
Contracts Interface

Files in the contracts share with download/delete links and a multi-file
upload form (POST /api/contracts, multipart/form-data).

Route: /api/interface/contracts
"""

from urllib.parse import quote

import azure.functions as func
from web_interfaces.base import BaseInterface, esc
from web_interfaces import InterfaceRegistry


@InterfaceRegistry.register('contracts')
class ContractsInterface(BaseInterface):
    """Contract file admin page."""

    def render(self, request: func.HttpRequest) -> str:
        contracts = self.services.contracts.list_contracts()

        rows = []
        for f in contracts:
            url = f"/api/contracts/{quote(f.name)}"
            rows.append([
                f'<a href="{esc(url)}">{esc(f.name)}</a>',
                f"{f.size / 1024:,.1f} KB",
                esc(f.uploaded_on.strftime("%Y-%m-%d %H:%M")) if f.uploaded_on else "-",
                f'<button class="btn btn-danger" onclick="deleteContract(\'{esc(quote(f.name))}\')">Delete</button>',
            ])

        content = f"""
            {self.render_header("Contracts", f"{len(contracts)} file(s)", "📄")}
            <div class="panel">
                <h2>Upload</h2>
                <form class="form-row" onsubmit="uploadContracts(event)">
                    <input name="files" type="file" multiple required>
                    <button type="submit" class="btn btn-primary">Upload</button>
                </form>
            </div>
            <div class="panel">
                {self.render_table(["File", "Size", "Uploaded", ""], rows, "No contracts uploaded yet.")}
            </div>
        """
        return self.wrap_html("Contracts", content, custom_js=self._js())

    def _js(self) -> str:
        return """
        async function uploadContracts(event) {
            event.preventDefault();
            const data = new FormData();
            for (const file of event.target.files.files) { data.append('file', file); }
            await apiCall('POST', '/api/contracts', data, true);
            location.reload();
        }
        async function deleteContract(encodedName) {
            if (!confirm('Delete ' + decodeURIComponent(encodedName) + '?')) return;
            await apiCall('DELETE', '/api/contracts/' + encodedName);
            location.reload();
        }
        """
