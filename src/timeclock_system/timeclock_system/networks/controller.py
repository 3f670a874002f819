from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import token_required
from ..common.http import json_api, json_body, parse_bool
from ..common.validators import require_non_empty
from ..core.enums import TokenKind
from ..core.exceptions import ValidationError
from ..container import Container
from .model import NetworkRule


def network_json(n: NetworkRule) -> dict:
    return {"id": n.network_id, "name": n.name, "ipAddress": n.ip_address, "isActive": n.is_active, "notes": n.notes}


def register(app: Flask, container: Container) -> None:
    admin_required = token_required(container.session_gate, TokenKind.ADMIN)

    @app.route("/api/admin/networks", methods=["GET"], endpoint="admin_list_networks")
    @json_api
    @admin_required
    def admin_list_networks():
        return jsonify({"networks": [network_json(n) for n in container.network_service.list_all()]})

    @app.route("/api/admin/networks", methods=["POST"], endpoint="admin_add_network")
    @json_api
    @admin_required
    def admin_add_network():
        body = json_body()
        rule = container.network_service.add(name=str(body.get("name") or ""), ip_address=str(body.get("ipAddress") or ""))
        return jsonify(
            {"success": True, "message": "Network added successfully", "networkId": rule.network_id, "name": rule.name}
        )

    @app.route("/api/admin/networks", methods=["PUT"], endpoint="admin_update_network")
    @json_api
    @admin_required
    def admin_update_network():
        body = json_body()
        network_id = require_non_empty(str(body.get("networkId") or ""), "Network ID")
        is_active = parse_bool(body.get("isActive"))
        if is_active is None:
            raise ValidationError("isActive is required")
        rule = container.network_service.set_active(network_id=network_id, is_active=is_active)
        return jsonify({"success": True, "message": "Network updated successfully", "network": network_json(rule)})
