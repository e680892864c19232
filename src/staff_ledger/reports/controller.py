from __future__ import annotations

import io

from flask import Flask, jsonify, send_file

from ..common.web import (
    admin_required,
    current_user,
    date_range_args,
    domain_error_response,
    int_arg,
    login_required,
    query_arg,
    unexpected_error_response,
)
from ..container import Container
from ..core.exceptions import DomainError
from .spreadsheet import XLSX_MIMETYPE


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    @app.route("/api/summary", methods=["GET"], endpoint="summary")
    @login_required
    def summary():
        try:
            data = service.dashboard_summary(
                current_user(),
                user_id=int_arg("userId"),
                year=int_arg("year"),
                month=int_arg("month"),
                search=query_arg("search"),
            )
            return jsonify(data)
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "computing summary")

    @app.route("/api/reports/pdf", methods=["GET"], endpoint="report_pdf")
    @login_required
    def report_pdf():
        try:
            export = service.staff_report_pdf(current_user(), user_id=int_arg("userId"), **date_range_args())
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "generating PDF report")
        return send_file(
            io.BytesIO(export.content),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=export.file_name,
        )

    @app.route("/api/reports/xlsx", methods=["GET"], endpoint="report_xlsx")
    @admin_required
    def report_xlsx():
        try:
            export = service.entries_workbook(current_user(), user_id=int_arg("userId"), **date_range_args())
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, "exporting entries")
        return send_file(
            io.BytesIO(export.content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=export.file_name,
        )
