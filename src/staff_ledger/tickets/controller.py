from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_user,
    date_range_args,
    domain_error_response,
    int_arg,
    json_body,
    login_required,
    unexpected_error_response,
)
from ..container import Container
from ..core.exceptions import DomainError
from .schema import TicketEntryInput, TicketEntryPatch


def register(app: Flask, container: Container) -> None:
    service = container.ticket_service

    @app.route("/api/tickets", methods=["POST"], endpoint="ticket_create")
    @login_required
    def ticket_create():
        try:
            entry = service.create(current_user(), TicketEntryInput.from_payload(json_body()))
            return jsonify(entry.to_api()), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "adding ticket entry")

    @app.route("/api/tickets", methods=["GET"], endpoint="ticket_list")
    @login_required
    def ticket_list():
        try:
            entries = service.list(current_user(), user_id=int_arg("userId"), **date_range_args())
            return jsonify([e.to_api() for e in entries])
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "listing ticket entries")

    @app.route("/api/tickets/mine", methods=["GET"], endpoint="ticket_mine")
    @login_required
    def ticket_mine():
        try:
            entries = service.list_mine(current_user(), **date_range_args())
            return jsonify([e.to_api() for e in entries])
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "listing ticket entries")

    @app.route("/api/tickets/all", methods=["GET"], endpoint="ticket_all")
    @admin_required
    def ticket_all():
        try:
            entries = service.list_all(current_user(), **date_range_args())
            return jsonify([e.to_api() for e in entries])
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "listing ticket entries")

    @app.route("/api/tickets/<int:entry_id>", methods=["GET"], endpoint="ticket_get")
    @login_required
    def ticket_get(entry_id: int):
        try:
            return jsonify(service.get(current_user(), entry_id).to_api())
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "loading ticket entry")

    @app.route("/api/tickets/<int:entry_id>", methods=["PATCH", "PUT"], endpoint="ticket_update")
    @login_required
    def ticket_update(entry_id: int):
        try:
            entry = service.update(current_user(), entry_id, TicketEntryPatch.from_payload(json_body()))
            return jsonify(entry.to_api())
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "updating ticket entry")

    @app.route("/api/tickets/<int:entry_id>", methods=["DELETE"], endpoint="ticket_delete")
    @login_required
    def ticket_delete(entry_id: int):
        try:
            service.delete(current_user(), entry_id)
            return jsonify({"success": True})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "deleting ticket entry")

    @app.route("/api/tickets/<int:entry_id>/copy", methods=["POST"], endpoint="ticket_attach_copy")
    @login_required
    def ticket_attach_copy(entry_id: int):
        data = json_body()
        try:
            actor = current_user()
            # ownership first, so a foreign id never leaves a stray file behind
            service.get(actor, entry_id)
            stored = container.storage.store_base64(file_name=data.get("fileName", ""), data=data.get("data", ""))
            entry = service.attach_copy(actor, entry_id, url=stored.url, file_name=stored.file_name)
            return jsonify(entry.to_api())
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "attaching ticket copy")
