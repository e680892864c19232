from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import (
    admin_required,
    current_user,
    domain_error_response,
    json_body,
    login_required,
    unexpected_error_response,
)
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        try:
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "logging in")

        session.clear()
        session.permanent = True
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return jsonify({"success": True, "user": s_user.to_public()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    def me():
        user = current_user()
        return jsonify(user.to_public() if user else None)

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        try:
            container.auth_service.change_password(
                current_user(),
                current_password=data.get("currentPassword", ""),
                new_password=data.get("newPassword", ""),
            )
            return jsonify({"success": True})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "changing password")

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        try:
            users = container.user_service.list_users(current_user())
            return jsonify([u.to_public() for u in users])
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "listing users")

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    def create_user():
        data = json_body()
        try:
            user = container.user_service.create_staff(
                current_user(),
                full_name=data.get("name", ""),
                username=data.get("username", ""),
                password=data.get("password", ""),
            )
            return jsonify(user.to_public()), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "creating user")
