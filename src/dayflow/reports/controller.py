from __future__ import annotations

from flask import Flask, g

from ..common.web import login_required, run_mutation, show_page
from ..container import Container
from ..pages.dashboard import DashboardPage
from ..pages.reports import ReportsPage


def register(app: Flask, container: Container) -> None:
    auth_required = login_required(container)

    @app.route("/dashboard", endpoint="dashboard")
    @auth_required
    def dashboard():
        return show_page(DashboardPage(container, g.user))

    @app.route("/dashboard/check-in", methods=["POST"], endpoint="dashboard_check_in")
    @auth_required
    def dashboard_check_in():
        page = DashboardPage(container, g.user)
        return run_mutation(page, page.check_in)

    @app.route("/dashboard/check-out", methods=["POST"], endpoint="dashboard_check_out")
    @auth_required
    def dashboard_check_out():
        page = DashboardPage(container, g.user)
        return run_mutation(page, page.check_out)

    @app.route("/reports", endpoint="reports")
    @auth_required
    def reports():
        return show_page(ReportsPage(container, g.user))
