"""
Admin web pages (customers, products, orders, contracts).

Pages register under a name with @InterfaceRegistry.register(name) and are
served from a single route, GET /api/interface/{name}.

Exports:
    InterfaceRegistry: name -> page class
    BaseInterface: Shared layout, navbar and table helpers
    unified_interface_handler: Resolves {name}, renders the page, maps errors
"""

from typing import Dict, Type, Optional, List
import azure.functions as func

from util_logger import LoggerFactory, ComponentType
from .base import BaseInterface, esc

logger = LoggerFactory.create_logger(ComponentType.INTERFACE, "InterfaceRegistry")


class InterfaceRegistry:
    """
    Page classes by name.

    Example:
        @InterfaceRegistry.register('customers')
        class CustomersInterface(BaseInterface):
            def render(self, request):
                return self.wrap_html("Customers", "<h1>Customers</h1>")

        # Now /api/interface/customers works automatically.
    """

    _interfaces: Dict[str, Type[BaseInterface]] = {}

    @classmethod
    def register(cls, name: str):
        """
        Class decorator adding a page under name.

        Args:
            name: Interface name (used in URL: /api/interface/{name})
        """
        def decorator(interface_class: Type[BaseInterface]):
            if name in cls._interfaces:
                existing = cls._interfaces[name]
                logger.warning(
                    f"Interface '{name}' already registered "
                    f"({existing.__name__}), overwriting with {interface_class.__name__}"
                )

            cls._interfaces[name] = interface_class
            logger.debug(f"✅ Registered interface: '{name}' -> {interface_class.__name__}")
            return interface_class

        return decorator

    @classmethod
    def get(cls, name: str) -> Optional[Type[BaseInterface]]:
        return cls._interfaces.get(name)

    @classmethod
    def list_all(cls) -> List[str]:
        return list(cls._interfaces.keys())


def unified_interface_handler(req: func.HttpRequest, services) -> func.HttpResponse:
    """
    Render one admin page.

    Route: /api/interface/{name}

    Args:
        req: Request with route param "name"
        services: ServiceContainer handed to the page

    Returns:
        text/html page, or a text/plain message for 400/404

    Error Responses:
        400: Missing interface name
        404: Interface not found
        500: Error rendering interface
    """
    interface_name = req.route_params.get('name')

    if not interface_name:
        available = ", ".join(InterfaceRegistry.list_all())
        return func.HttpResponse(
            f"❌ No page name given.\n\n"
            f"Pages: {available}\n\n"
            f"Usage: /api/interface/{{name}}\n"
            f"Example: /api/interface/orders",
            status_code=400,
            mimetype="text/plain"
        )

    interface_class = InterfaceRegistry.get(interface_name)

    if not interface_class:
        return func.HttpResponse(
            f"❌ No page named '{interface_name}'.\n\n"
            f"Pages:\n" +
            "\n".join(f"  • /api/interface/{name}" for name in InterfaceRegistry.list_all()),
            status_code=404,
            mimetype="text/plain"
        )

    try:
        logger.info(f"🌐 Page {interface_name}")
        page = interface_class(services).render(req)
        return func.HttpResponse(page, mimetype="text/html", status_code=200)

    except Exception as e:
        logger.error(f"❌ Error rendering interface '{interface_name}': {e}", exc_info=True)

        error_html = f"""
        <!DOCTYPE html>
        <html>
        <head>
            <title>Error - {esc(interface_name)}</title>
            <style>
                body {{ font-family: sans-serif; background: #fee; padding: 40px; text-align: center; }}
                .error-box {{
                    background: white; border: 2px solid #c33; border-radius: 8px;
                    padding: 30px; max-width: 600px; margin: 0 auto;
                }}
                h1 {{ color: #c33; }}
                pre {{ background: #f5f5f5; padding: 15px; border-radius: 4px; text-align: left; }}
            </style>
        </head>
        <body>
            <div class="error-box">
                <h1>❌ Page failed to render</h1>
                <p><strong>Page:</strong> {esc(interface_name)}</p>
                <pre>{esc(e)}</pre>
                <p><a href="/api/interface/home">← Back to home</a></p>
            </div>
        </body>
        </html>
        """

        return func.HttpResponse(error_html, mimetype="text/html", status_code=500)


# Import page modules so their @InterfaceRegistry.register() decorators run
from .home import interface as _home  # noqa: E402,F401
from .customers import interface as _customers  # noqa: E402,F401
from .products import interface as _products  # noqa: E402,F401
from .orders import interface as _orders  # noqa: E402,F401
from .order import interface as _order  # noqa: E402,F401
from .contracts import interface as _contracts  # noqa: E402,F401

__all__ = [
    'InterfaceRegistry',
    'BaseInterface',
    'unified_interface_handler',
]
