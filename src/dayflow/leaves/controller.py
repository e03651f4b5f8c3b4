from __future__ import annotations

from flask import Flask, g

from ..common.web import date_field, login_required, payload, run_mutation, show_page
from ..container import Container
from ..pages.leaves import LeavesPage


def register(app: Flask, container: Container) -> None:
    auth_required = login_required(container)

    @app.route("/leaves", endpoint="leaves")
    @auth_required
    def leaves():
        return show_page(LeavesPage(container, g.user))

    @app.route("/leaves", methods=["POST"], endpoint="leave_submit")
    @auth_required
    def leave_submit():
        page = LeavesPage(container, g.user)
        data = payload()
        return run_mutation(
            page,
            lambda: page.submit(
                leave_type=data.get("leave_type", ""),
                start_date=date_field(data, "start_date"),
                end_date=date_field(data, "end_date"),
                reason=data.get("reason"),
            ),
        )

    @app.route("/leaves/<int:request_id>/approve", methods=["POST"], endpoint="leave_approve")
    @auth_required
    def leave_approve(request_id: int):
        page = LeavesPage(container, g.user)
        comment = payload().get("comment", "")
        return run_mutation(page, lambda: page.approve(request_id, comment))

    @app.route("/leaves/<int:request_id>/reject", methods=["POST"], endpoint="leave_reject")
    @auth_required
    def leave_reject(request_id: int):
        page = LeavesPage(container, g.user)
        comment = payload().get("comment", "")
        return run_mutation(page, lambda: page.reject(request_id, comment))
