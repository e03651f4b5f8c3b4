from __future__ import annotations

from flask import Flask, g

from ..common.web import login_required, run_mutation, show_page
from ..container import Container
from ..pages.attendance import AttendancePage


def register(app: Flask, container: Container) -> None:
    auth_required = login_required(container)

    @app.route("/attendance", endpoint="attendance")
    @auth_required
    def attendance():
        return show_page(AttendancePage(container, g.user))

    @app.route("/attendance/check-in", methods=["POST"], endpoint="check_in")
    @auth_required
    def check_in():
        page = AttendancePage(container, g.user)
        return run_mutation(page, page.check_in)

    @app.route("/attendance/check-out", methods=["POST"], endpoint="check_out")
    @auth_required
    def check_out():
        page = AttendancePage(container, g.user)
        return run_mutation(page, page.check_out)
