"""
Flask application for the Job Board web client.

Server-rendered pages over the remote job board REST API:
- Public job listing with live search, job detail and application form
- Recruiter login (JWT pair kept in the session cookie)
- Recruiter dashboard with search, status filter and status updates
- Recruiter job management (create/edit/delete)

Stack: Flask + HTMX + Tailwind CSS (CDN), requests for the API
"""

import logging
import os
from datetime import timedelta
from typing import Optional

from flask import Flask, flash, jsonify, render_template, request, url_for
from werkzeug.exceptions import RequestEntityTooLarge

from .config import Settings, get_settings, validate_config_on_startup
from .http_client import SessionExpiredError
from .logger import setup_logging
from .models import format_size
from .tokens import SessionTokenStore
from .version import __version__ as APP_VERSION
from .views import htmx_redirect, register_blueprints

logger = logging.getLogger(__name__)

# Room for the non-file form fields around the largest accepted resume
UPLOAD_OVERHEAD_BYTES = 1024 * 1024


def create_app(settings: Optional[Settings] = None) -> Flask:
    """
    Build the Flask app.

    Args:
        settings: explicit configuration (tests); defaults to get_settings()
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    validate_config_on_startup(settings)

    app = Flask(__name__)
    app.config["JOBBOARD_SETTINGS"] = settings

    # Session configuration
    secret_key = settings.flask_secret_key
    if not secret_key:
        # Local development: Generate random key with warning
        logger.warning(
            "FLASK_SECRET_KEY not set. Generating random key "
            "(recruiters will be logged out on every restart)"
        )
        secret_key = os.urandom(24).hex()
    app.secret_key = secret_key

    # Cookie security settings; the cookie carries the API tokens
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SECURE"] = settings.is_production
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=settings.session_lifetime_days)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_resume_bytes + UPLOAD_OVERHEAD_BYTES

    register_blueprints(app)
    _register_handlers(app)

    # Context processor to inject version and auth state into all templates
    @app.context_processor
    def inject_globals():
        return {
            "version": APP_VERSION,
            "authenticated": SessionTokenStore().is_authenticated(),
        }

    @app.route("/health", methods=["GET"])
    def health_check():
        """Liveness check; never calls the API."""
        return jsonify({
            "status": "healthy",
            "version": APP_VERSION,
            "api_url": settings.api_url,
        }), 200

    return app


def _register_handlers(app: Flask) -> None:

    @app.errorhandler(SessionExpiredError)
    def handle_session_expired(error):
        """Refresh failed: tokens are already cleared, send the user to log in."""
        logger.info(f"Session expired on {request.method} {request.path}")
        flash("Your session has expired. Please log in again.", "error")
        return htmx_redirect(url_for("auth.login"))

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        limit = format_size(app.config["JOBBOARD_SETTINGS"].max_resume_bytes)
        flash(f"Resume must be smaller than {limit}", "error")
        return htmx_redirect(request.referrer or url_for("jobs.index"))

    @app.errorhandler(404)
    def handle_not_found(error):
        logger.info(f"404 for non-existent route: {request.path}")
        return render_template("not_found.html", path=request.path), 404


# ============================================================================
# Application Entry Point
# ============================================================================

def main() -> None:
    """Run the development server."""
    port = int(os.getenv("FLASK_PORT", 5000))
    debug = os.getenv("FLASK_DEBUG", "true").lower() == "true"

    app = create_app()
    logger.info(f"Starting Job Board UI on http://localhost:{port}")
    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()
