"""
Recruiter authentication: login, logout and the page gate.

Tokens issued by POST /api/token/ live in the session cookie; holding an
access token is all the gate checks. The API re-checks every call.
"""

import logging
from functools import wraps

from flask import (
    Blueprint,
    Response,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from pydantic import ValidationError

from ..api import get_auth_api
from ..http_client import ApiError
from ..models import LoginForm, field_errors
from ..tokens import SessionTokenStore
from . import htmx_redirect, is_htmx, safe_next_url

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)

LOGIN_FALLBACK_MESSAGE = "Invalid credentials. Please try again."


def recruiter_required(f):
    """
    Decorator to require a stored access token for recruiter pages.

    For HTMX partials: 401 plus HX-Redirect to the login page
    For page routes: Redirects to login page, remembering the target
    Only GET targets are remembered; form posts have no page to return to.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not SessionTokenStore().is_authenticated():
            if request.method == "GET":
                login_url = url_for("auth.login", next=request.full_path.rstrip("?"))
            else:
                login_url = url_for("auth.login")
            if is_htmx():
                response = Response(status=401)
                response.headers["HX-Redirect"] = login_url
                return response
            return redirect(login_url)
        return f(*args, **kwargs)
    return decorated_function


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    """Handle login page and token exchange."""
    next_url = safe_next_url(request.values.get("next"))

    if request.method == "GET":
        return render_template("login.html", errors={}, values={}, next_url=next_url)

    values = {"username": request.form.get("username", "")}
    try:
        form = LoginForm.model_validate({
            "username": request.form.get("username", ""),
            "password": request.form.get("password", ""),
        })
    except ValidationError as e:
        return render_template(
            "login.html", errors=field_errors(e), values=values, next_url=next_url
        ), 400

    try:
        tokens = get_auth_api().login(form.username, form.password)
    except ApiError as e:
        logger.info(f"Login failed for '{form.username}': {e}")
        flash(e.user_message(LOGIN_FALLBACK_MESSAGE), "error")
        return render_template(
            "login.html", errors={}, values=values, next_url=next_url
        ), e.status_code if e.status_code in (400, 401) else 502

    SessionTokenStore().set(tokens.access, tokens.refresh)
    logger.info(f"Recruiter '{form.username}' logged in")
    flash("You have successfully logged in.", "success")
    return redirect(next_url or url_for("dashboard.dashboard"))


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Forget both tokens."""
    SessionTokenStore().clear()
    flash("You have been logged out.", "success")
    return htmx_redirect(url_for("auth.login"))
