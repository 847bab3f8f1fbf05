"""
Flask blueprints for the job board pages and their HTMX partials.

- jobs: public listing, job detail, apply form
- auth: login/logout and the recruiter_required gate
- dashboard: recruiter application review
- manage: recruiter job create/edit/delete
"""

from typing import Optional
from urllib.parse import urlparse

from flask import Flask, Response, redirect, request


def is_htmx() -> bool:
    """True when the current request was issued by HTMX."""
    return request.headers.get("HX-Request") == "true"


def htmx_redirect(location: str, status: int = 302) -> Response:
    """
    Redirect that also works for HTMX requests.

    HTMX follows a plain 302 inside the swap target; HX-Redirect makes it
    navigate the whole page instead.
    """
    if is_htmx():
        response = Response(status=204)
        response.headers["HX-Redirect"] = location
        return response
    return redirect(location, code=status)


def safe_next_url(candidate: Optional[str]) -> Optional[str]:
    """Only same-site relative paths are accepted as post-login targets."""
    if not candidate:
        return None
    parsed = urlparse(candidate)
    if parsed.scheme or parsed.netloc or not candidate.startswith("/") or candidate.startswith("//"):
        return None
    return candidate


def register_blueprints(app: Flask) -> None:
    from .auth import auth_bp
    from .dashboard import dashboard_bp
    from .jobs import jobs_bp
    from .manage import manage_bp

    app.register_blueprint(jobs_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(manage_bp)
