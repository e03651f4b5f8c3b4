"""Request plumbing shared by every feature controller."""
from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Callable, Mapping, Optional

from flask import g, jsonify, redirect, request, session, url_for

from ..core.exceptions import AuthenticationError, DataAccessError, ValidationError
from ..pages.base import KIND_BUSY, KIND_FORBIDDEN, KIND_VALIDATION, KIND_WRITE_FAILED, MutationResult, Page, to_dict
from .datetime_utils import parse_iso_date
from .validators import as_text

logger = logging.getLogger(__name__)

MUTATION_STATUS = {
    KIND_VALIDATION: 400,
    KIND_FORBIDDEN: 403,
    KIND_BUSY: 409,
    KIND_WRITE_FAILED: 503,
}


def wants_json() -> bool:
    if request.path.startswith("/api/") or request.is_json:
        return True
    best = request.accept_mimetypes.best_match(["text/html", "application/json"])
    return best == "application/json"


def login_required(container) -> Callable:
    """Resolve ``session["user_id"]`` into ``g.user`` or send the visitor to sign in."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.user = container.session_provider.resolve(session.get("user_id"))
            except AuthenticationError as e:
                session.pop("user_id", None)
                if wants_json():
                    return jsonify({"message": str(e)}), 401
                return redirect(url_for("auth"))
            except DataAccessError:
                logger.exception("Could not resolve session for %s", request.path)
                return jsonify({"message": "Service is temporarily unavailable. Please try again."}), 503
            return view(*args, **kwargs)

        return wrapper

    return decorator


def payload() -> Mapping[str, Any]:
    """JSON body or form fields, whichever the client sent."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


def date_field(data: Mapping[str, Any], name: str) -> Optional[date]:
    value = as_text(data.get(name), name).strip()
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Please enter a date as YYYY-MM-DD", field=name)


def show_page(page: Page):
    """Activate, load and render one page for the current request."""
    target = page.activate()
    if target:
        return redirect(url_for(target))
    try:
        view = page.load()
    finally:
        page.deactivate()
    return jsonify(to_dict(view))


def mutation_response(result: MutationResult, view: Any = None):
    body = {"ok": result.ok, "message": result.message, "field": result.field}
    if result.ok:
        if view is not None:
            body["view"] = to_dict(view)
        return jsonify(body), 200
    return jsonify(body), MUTATION_STATUS.get(result.kind, 400)


def run_mutation(page: Page, action: Callable[[], MutationResult]):
    """Run a page mutation; gated pages redirect before anything is written."""
    target = page.activate()
    if target:
        return redirect(url_for(target))
    try:
        result = action()
        return mutation_response(result, page.view if result.ok else None)
    except ValidationError as e:
        # Raised while parsing request fields, before the page is involved.
        return mutation_response(MutationResult(False, str(e), field=e.field, kind=KIND_VALIDATION))
    finally:
        page.deactivate()
