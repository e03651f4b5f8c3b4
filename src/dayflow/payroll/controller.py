from __future__ import annotations

import logging

from flask import Flask, Response, g, jsonify

from ..common.web import login_required, show_page
from ..container import Container
from ..core.exceptions import AuthorizationError, DataAccessError, ValidationError
from ..pages.payroll import PayrollPage

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    auth_required = login_required(container)

    @app.route("/payroll", endpoint="payroll")
    @auth_required
    def payroll():
        return show_page(PayrollPage(container, g.user))

    @app.route("/payroll/<int:payroll_id>/slip", endpoint="salary_slip")
    @auth_required
    def salary_slip(payroll_id: int):
        try:
            filename, text = PayrollPage(container, g.user).salary_slip(payroll_id)
        except ValidationError as e:
            return jsonify({"message": str(e)}), 404
        except AuthorizationError as e:
            return jsonify({"message": str(e)}), 403
        except DataAccessError:
            logger.exception("Salary slip %s failed", payroll_id)
            return jsonify({"message": "Could not load data. Please try again."}), 503

        return Response(
            text,
            mimetype="text/plain",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
