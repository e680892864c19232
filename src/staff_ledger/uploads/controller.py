from __future__ import annotations

from flask import Flask, abort, jsonify, send_from_directory
from werkzeug.utils import secure_filename

from ..common.web import domain_error_response, json_body, login_required, unexpected_error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/uploads/ticket-copy", methods=["POST"], endpoint="upload_ticket_copy")
    @login_required
    def upload_ticket_copy():
        data = json_body()
        try:
            stored = container.storage.store_base64(file_name=data.get("fileName", ""), data=data.get("data", ""))
            return jsonify(stored.to_api()), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "uploading ticket copy")

    url_prefix = app.config.get("UPLOAD_URL_PREFIX", "/uploads").rstrip("/")

    @app.route(f"{url_prefix}/<path:name>", methods=["GET"], endpoint="uploaded_file")
    @login_required
    def uploaded_file(name: str):
        root = getattr(container.storage, "root", None)
        if root is None or secure_filename(name) != name:
            abort(404)
        return send_from_directory(root, name)
