"""
Contract routes Blueprint.

Routes:
    GET/POST    contracts
    GET/DELETE  contracts/{file_name}
"""

import azure.functions as func

from triggers.contracts import ContractsTrigger, ContractItemTrigger


def create_blueprint(services) -> func.Blueprint:
    """Build the contracts Blueprint bound to a service container."""
    bp = func.Blueprint()

    contracts_trigger = ContractsTrigger(services)
    contract_item_trigger = ContractItemTrigger(services)

    @bp.route(route="contracts", methods=["GET", "POST"])
    def contracts_collection(req: func.HttpRequest) -> func.HttpResponse:
        """List contracts, or upload one or more files (multipart/form-data)."""
        return contracts_trigger.handle_request(req)

    @bp.route(route="contracts/{file_name}", methods=["GET", "DELETE"])
    def contract_item(req: func.HttpRequest) -> func.HttpResponse:
        """Download or delete a contract file."""
        return contract_item_trigger.handle_request(req)

    return bp
