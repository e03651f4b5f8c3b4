from __future__ import annotations

import logging

from flask import Flask, g, jsonify, redirect, request, session, url_for

from ..common.web import date_field, login_required, mutation_response, payload, run_mutation, show_page
from ..container import Container
from ..core.exceptions import AuthenticationError, DataAccessError, ValidationError
from ..database.bootstrap import DEMO_ACCOUNTS
from ..pages.base import KIND_VALIDATION, KIND_WRITE_FAILED, MutationResult
from ..pages.employees import EmployeesPage
from ..pages.profile import ProfilePage
from ..users.model import SessionContext

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    auth_required = login_required(container)

    def start_session(ctx: SessionContext):
        session.clear()
        session.permanent = True
        session["user_id"] = ctx.user_id
        return jsonify({"ok": True, "redirect": url_for("dashboard"), "role": ctx.role.value})

    @app.route("/", endpoint="index")
    def index():
        if session.get("user_id"):
            return redirect(url_for("dashboard"))
        return redirect(url_for("auth"))

    @app.route("/auth", endpoint="auth")
    def auth():
        body = {"modes": ["sign_in", "sign_up"], "roles": ["employee", "hr"]}
        # Demo accounts only exist where the seed runs.
        if app.config.get("SHOW_DEMO_ACCOUNTS"):
            body["demo_accounts"] = [{"email": a[3], "role": a[5]} for a in DEMO_ACCOUNTS]
        return jsonify(body)

    @app.route("/auth/sign-in", methods=["POST"], endpoint="sign_in")
    def sign_in():
        data = payload()
        try:
            ctx = container.auth_service.sign_in(data.get("email", ""), data.get("password", ""))
        except ValidationError as e:
            return mutation_response(MutationResult(False, str(e), field=e.field, kind=KIND_VALIDATION))
        except AuthenticationError as e:
            return jsonify({"ok": False, "message": str(e), "field": None}), 401
        except DataAccessError:
            logger.exception("Sign-in failed")
            return mutation_response(MutationResult(False, "Sign in is unavailable right now", kind=KIND_WRITE_FAILED))
        return start_session(ctx)

    @app.route("/auth/sign-up", methods=["POST"], endpoint="sign_up")
    def sign_up():
        data = payload()
        try:
            ctx = container.auth_service.sign_up(
                employee_id=data.get("employee_id", ""),
                first_name=data.get("first_name", ""),
                last_name=data.get("last_name", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                role=data.get("role") or "employee",
            )
        except ValidationError as e:
            return mutation_response(MutationResult(False, str(e), field=e.field, kind=KIND_VALIDATION))
        except DataAccessError:
            logger.exception("Sign-up failed")
            return mutation_response(MutationResult(False, "Could not create your account. Please try again.", kind=KIND_WRITE_FAILED))
        return start_session(ctx)

    @app.route("/auth/sign-out", methods=["POST"], endpoint="sign_out")
    def sign_out():
        session.clear()
        if request.is_json:
            return jsonify({"ok": True, "redirect": url_for("auth")})
        return redirect(url_for("auth"))

    @app.route("/profile", endpoint="profile")
    @auth_required
    def profile():
        return show_page(ProfilePage(container, g.user))

    @app.route("/profile", methods=["POST"], endpoint="profile_update")
    @auth_required
    def profile_update():
        page = ProfilePage(container, g.user)
        data = payload()
        return run_mutation(page, lambda: page.save_contact_info(phone=data.get("phone"), address=data.get("address")))

    @app.route("/employees", endpoint="employees")
    @auth_required
    def employees():
        page = EmployeesPage(
            container,
            g.user,
            query=request.args.get("q", ""),
            department=request.args.get("department", "all"),
        )
        return show_page(page)

    @app.route("/employees/<int:profile_id>", methods=["POST"], endpoint="employee_update")
    @auth_required
    def employee_update(profile_id: int):
        page = EmployeesPage(container, g.user)
        data = payload()
        return run_mutation(
            page,
            lambda: page.update_job_fields(
                profile_id,
                department=data.get("department"),
                designation=data.get("designation"),
                date_of_joining=date_field(data, "date_of_joining"),
            ),
        )
