"""
Web interfaces base module.

Abstract base class and common utilities for all admin web pages.

Exports:
    BaseInterface: Abstract base class with common HTML utilities and navigation

Dependencies:
    azure.functions: HTTP request handling
"""

import html
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

import azure.functions as func

from config import __version__


def esc(value: Any) -> str:
    """HTML-escape a value for text or attribute context."""
    return html.escape("" if value is None else str(value), quote=True)


class BaseInterface(ABC):
    """
    Abstract base class for all web interfaces.

    Provides:
        - Common CSS
        - HTML document structure (wrap_html)
        - Navigation bar across all pages
        - Query parameter helpers and small component helpers

    Each interface receives the service container and must implement:
        - render(request) -> str

    Pages are server-rendered. Forms post straight to the /api JSON
    endpoints through a small fetch() helper, then reload.
    """

    COMMON_CSS = """
        :root {
            --ds-blue-primary: #0071BC;
            --ds-navy: #053657;
            --ds-gray: #626F86;
            --ds-gray-light: #e9ecef;
            --ds-bg: #f8f9fa;
            --ds-status-pending-bg: #fef3c7;
            --ds-status-pending-fg: #d97706;
            --ds-status-processing-bg: #dbeafe;
            --ds-status-processing-fg: #0071BC;
            --ds-status-shipped-bg: #ede9fe;
            --ds-status-shipped-fg: #6d28d9;
            --ds-status-delivered-bg: #d1fae5;
            --ds-status-delivered-fg: #059669;
            --ds-status-cancelled-bg: #fee2e2;
            --ds-status-cancelled-fg: #dc2626;
        }

        * { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            font-family: "Open Sans", Arial, sans-serif;
            background: var(--ds-bg);
            min-height: 100vh;
            padding: 20px;
            color: var(--ds-navy);
            font-size: 14px;
            line-height: 1.6;
        }

        .container { max-width: 1200px; margin: 0 auto; }

        .dashboard-header {
            background: white;
            padding: 25px 30px;
            border-radius: 3px;
            box-shadow: 0 1px 3px rgba(0,0,0,0.1);
            margin-bottom: 20px;
            border-left: 4px solid var(--ds-blue-primary);
        }
        .dashboard-header h1 { font-size: 24px; margin-bottom: 8px; font-weight: 700; }
        .subtitle { color: var(--ds-gray); font-size: 14px; }

        .panel {
            background: white;
            padding: 20px;
            border-radius: 3px;
            box-shadow: 0 1px 3px rgba(0,0,0,0.1);
            margin-bottom: 20px;
        }
        .panel h2 { font-size: 16px; margin-bottom: 12px; }

        .btn {
            display: inline-flex;
            align-items: center;
            padding: 6px 14px;
            border-radius: 3px;
            border: 1px solid var(--ds-blue-primary);
            background: white;
            color: var(--ds-blue-primary);
            cursor: pointer;
            font-weight: 600;
            text-decoration: none;
        }
        .btn-primary { background: var(--ds-blue-primary); color: white; }
        .btn-danger { border-color: #dc2626; color: #dc2626; }

        .data-table { width: 100%; border-collapse: collapse; background: white; }
        .data-table th, .data-table td {
            text-align: left;
            padding: 8px 10px;
            border-bottom: 1px solid var(--ds-gray-light);
        }
        .data-table th { font-size: 12px; text-transform: uppercase; color: var(--ds-gray); }

        .form-row { display: flex; gap: 10px; flex-wrap: wrap; align-items: center; margin-bottom: 10px; }
        .form-row input, .form-row select, .form-row textarea {
            padding: 6px 8px;
            border: 1px solid var(--ds-gray-light);
            border-radius: 3px;
        }

        .status-badge {
            display: inline-block;
            padding: 2px 10px;
            border-radius: 10px;
            font-size: 12px;
            font-weight: 600;
            background: var(--ds-gray-light);
        }
        .status-pending { background: var(--ds-status-pending-bg); color: var(--ds-status-pending-fg); }
        .status-processing { background: var(--ds-status-processing-bg); color: var(--ds-status-processing-fg); }
        .status-shipped { background: var(--ds-status-shipped-bg); color: var(--ds-status-shipped-fg); }
        .status-delivered { background: var(--ds-status-delivered-bg); color: var(--ds-status-delivered-fg); }
        .status-cancelled { background: var(--ds-status-cancelled-bg); color: var(--ds-status-cancelled-fg); }

        .empty-state { text-align: center; padding: 40px; color: var(--ds-gray); }
        .empty-state .icon { font-size: 32px; }
        .thumb { max-width: 80px; max-height: 60px; border-radius: 3px; }
    """

    COMMON_JS = """
        async function apiCall(method, url, body, isForm) {
            const options = { method: method, headers: {} };
            if (body !== undefined) {
                if (isForm) {
                    options.body = body;
                } else {
                    options.headers['Content-Type'] = 'application/json';
                    options.body = JSON.stringify(body);
                }
            }
            const response = await fetch(url, options);
            const text = await response.text();
            if (!response.ok) {
                let message = text;
                try { message = JSON.parse(text).message || text; } catch (e) {}
                alert('Error ' + response.status + ': ' + message);
                throw new Error(message);
            }
            return text ? JSON.parse(text) : {};
        }
    """

    NAV_LINKS = (
        ("customers", "Customers"),
        ("products", "Products"),
        ("orders", "Orders"),
        ("contracts", "Contracts"),
    )

    def __init__(self, services):
        self.services = services

    @abstractmethod
    def render(self, request: func.HttpRequest) -> str:
        """
        Generate HTML for this interface.

        Args:
            request: Azure Functions HttpRequest object

        Returns:
            Complete HTML string (full document)
        """
        pass

    def get_query_params(self, request: func.HttpRequest) -> Dict[str, Any]:
        """
        Extract query parameters from request.

        Example:
            # Request: /api/interface/products?q=boots
            params = self.get_query_params(request)
            # params = {'q': 'boots'}
        """
        return {key: request.params.get(key) for key in request.params}

    def wrap_html(
        self,
        title: str,
        content: str,
        custom_css: str = "",
        custom_js: str = "",
        include_navbar: bool = True
    ) -> str:
        """
        Wrap content in complete HTML document.

        Args:
            title: Page title (appears in browser tab)
            content: HTML content for page body
            custom_css: Additional CSS specific to this interface
            custom_js: Additional JavaScript specific to this interface
            include_navbar: Whether to include navigation bar (default: True)

        Returns:
            Complete HTML document string
        """
        navbar_html = self._render_navbar() if include_navbar else ""

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{esc(title)}</title>
    <style>
        {self.COMMON_CSS}
        {custom_css}
    </style>
</head>
<body>
    {navbar_html}
    <div class="container">
    {content}
    </div>
    <script>
        {self.COMMON_JS}
        {custom_js}
    </script>
</body>
</html>"""

    def _render_navbar(self) -> str:
        links = "".join(
            f'<a href="/api/interface/{name}" style="color: #0071BC; text-decoration: none; '
            f'font-weight: 600;">{label}</a>'
            for name, label in self.NAV_LINKS
        )
        return f"""
        <nav style="background: white; padding: 15px 30px; border-radius: 3px;
                    box-shadow: 0 1px 3px rgba(0,0,0,0.1); margin-bottom: 20px;
                    display: flex; justify-content: space-between; align-items: center;
                    border-bottom: 3px solid #0071BC;">
            <a href="/api/interface/home"
               style="font-size: 20px; font-weight: 700; color: #053657; text-decoration: none;">
                Retail Hub v{__version__}
            </a>
            <div style="display: flex; gap: 20px;">{links}</div>
        </nav>
        """

    # ========================================================================
    # COMPONENT HELPERS
    # ========================================================================

    def render_header(self, title: str, subtitle: str = "", icon: str = "", actions: str = "") -> str:
        """
        Render a dashboard header with title, subtitle, and optional actions.

        Args:
            title: Main heading text
            subtitle: Optional description text
            icon: Optional emoji prefix for title
            actions: Optional HTML for action buttons (right side)
        """
        title_text = f"{icon} {esc(title)}" if icon else esc(title)
        subtitle_html = f'<p class="subtitle">{esc(subtitle)}</p>' if subtitle else ""
        actions_html = f'<div class="header-actions">{actions}</div>' if actions else ""

        return f"""
        <header class="dashboard-header">
            <div style="display: flex; justify-content: space-between; align-items: center;">
                <div>
                    <h1>{title_text}</h1>
                    {subtitle_html}
                </div>
                {actions_html}
            </div>
        </header>
        """

    def render_status_badge(self, status: str) -> str:
        """
        Render an order status badge.

        Example:
            badge = self.render_status_badge("Shipped")
            # <span class="status-badge status-shipped">Shipped</span>
        """
        css = "".join(c for c in (status or "unknown").lower() if c.isalnum())
        return f'<span class="status-badge status-{css}">{esc(status or "unknown")}</span>'

    def render_empty_state(self, icon: str = "📦", title: str = "No Data Found",
                           message: str = "There's nothing to display here yet.") -> str:
        return f"""
        <div class="empty-state">
            <div class="icon">{icon}</div>
            <h3>{esc(title)}</h3>
            <p>{esc(message)}</p>
        </div>
        """

    def render_table(self, columns: List[str], rows: Iterable[List[str]], empty_message: str = "") -> str:
        """
        Render a server-side table.

        Args:
            columns: Column header strings
            rows: Row cells; each cell is already-rendered HTML
            empty_message: Shown instead of the table when there are no rows
        """
        body = "".join("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows)
        if not body and empty_message:
            return self.render_empty_state(icon="🔍", title="Nothing here", message=empty_message)

        headers = "".join(f"<th>{esc(col)}</th>" for col in columns)
        return f"""
        <table class="data-table">
            <thead><tr>{headers}</tr></thead>
            <tbody>{body}</tbody>
        </table>
        """

    def format_money(self, amount: float) -> str:
        return f"{amount or 0:,.2f}"
