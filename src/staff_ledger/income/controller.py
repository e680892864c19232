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
from .schema import IncomeEntryInput, IncomeEntryPatch


def register(app: Flask, container: Container) -> None:
    service = container.income_service

    @app.route("/api/income", methods=["POST"], endpoint="income_create")
    @login_required
    def income_create():
        try:
            entry = service.create(current_user(), IncomeEntryInput.from_payload(json_body()))
            return jsonify(entry.to_api()), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "adding income entry")

    @app.route("/api/income", methods=["GET"], endpoint="income_list")
    @login_required
    def income_list():
        try:
            entries = service.list(current_user(), user_id=int_arg("userId"), **date_range_args())
            return jsonify([e.to_api() for e in entries])
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "listing income entries")

    @app.route("/api/income/mine", methods=["GET"], endpoint="income_mine")
    @login_required
    def income_mine():
        try:
            entries = service.list_mine(current_user(), **date_range_args())
            return jsonify([e.to_api() for e in entries])
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "listing income entries")

    @app.route("/api/income/all", methods=["GET"], endpoint="income_all")
    @admin_required
    def income_all():
        try:
            entries = service.list_all(current_user(), **date_range_args())
            return jsonify([e.to_api() for e in entries])
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "listing income entries")

    @app.route("/api/income/<int:entry_id>", methods=["GET"], endpoint="income_get")
    @login_required
    def income_get(entry_id: int):
        try:
            return jsonify(service.get(current_user(), entry_id).to_api())
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "loading income entry")

    @app.route("/api/income/<int:entry_id>", methods=["PATCH", "PUT"], endpoint="income_update")
    @login_required
    def income_update(entry_id: int):
        try:
            entry = service.update(current_user(), entry_id, IncomeEntryPatch.from_payload(json_body()))
            return jsonify(entry.to_api())
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "updating income entry")

    @app.route("/api/income/<int:entry_id>", methods=["DELETE"], endpoint="income_delete")
    @login_required
    def income_delete(entry_id: int):
        try:
            service.delete(current_user(), entry_id)
            return jsonify({"success": True})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "deleting income entry")
