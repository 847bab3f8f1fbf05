"""
Recruiter dashboard: application list, detail, status change and delete.
"""

import logging
from typing import List, Optional

from flask import Blueprint, flash, render_template, request, url_for

from ..api import get_applications_api
from ..filters import filter_applications, find_by_id, parse_status_filter, status_counts
from ..http_client import ApiError
from ..models import Application, ApplicationStatus
from . import htmx_redirect, is_htmx
from .auth import recruiter_required

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__)


def _dashboard_context(
    applications: List[Application], search: str, status: Optional[ApplicationStatus]
) -> dict:
    visible = filter_applications(applications, search, status)
    return {
        "applications": visible,
        "counts": status_counts(applications),
        "statuses": list(ApplicationStatus),
        "search": search,
        "current_status": status.value if status else "all",
        "error": None,
    }


def _load_dashboard(template: str):
    search = request.args.get("q", "")
    status = parse_status_filter(request.args.get("status"))
    try:
        applications = get_applications_api().list()
    except ApiError as e:
        logger.error(f"Error fetching applications: {e}")
        context = _dashboard_context([], search, status)
        context["error"] = "Failed to load applications. Please try again later."
        return render_template(template, **context)
    return render_template(template, **_dashboard_context(applications, search, status))


@dashboard_bp.route("/dashboard")
@recruiter_required
def dashboard():
    """Render the recruiter dashboard with search and status filters."""
    return _load_dashboard("dashboard.html")


@dashboard_bp.route("/partials/applications", methods=["GET"])
@recruiter_required
def applications_partial():
    """HTMX partial: status buckets and the filtered application cards."""
    return _load_dashboard("partials/dashboard_body.html")


@dashboard_bp.route("/applications/<int:application_id>")
@recruiter_required
def application_detail(application_id: int):
    """
    Render one application.

    Found by scanning the full list; the API's single-item endpoint is not
    used here.
    """
    try:
        application = find_by_id(get_applications_api().list(), application_id)
    except ApiError as e:
        logger.error(f"Error fetching application {application_id}: {e}")
        return render_template(
            "error.html",
            error="Failed to load application details.",
            back_url=url_for("dashboard.dashboard"),
            back_label="Back to Dashboard",
        ), 502

    if application is None:
        return render_template(
            "error.html",
            error="Application not found.",
            back_url=url_for("dashboard.dashboard"),
            back_label="Back to Dashboard",
        ), 404

    return render_template(
        "application_detail.html",
        application=application,
        statuses=list(ApplicationStatus),
    )


@dashboard_bp.route("/applications/<int:application_id>/status", methods=["POST"])
@recruiter_required
def update_application_status(application_id: int):
    """
    Persist a new status.

    The panel shows the new status only after the API accepted it; on
    failure it keeps the previous one. Choosing the current status is a no-op.
    """
    current = parse_status_filter(request.form.get("current_status"))
    new_status = parse_status_filter(request.form.get("status"))
    if current is None or new_status is None:
        flash("Please select a valid status.", "error")
        return _status_panel(application_id, current)

    if new_status != current:
        try:
            get_applications_api().update_status(application_id, new_status)
        except ApiError as e:
            logger.error(f"Status update for application {application_id} failed: {e}")
            flash(e.user_message("Failed to update status. Please try again."), "error")
            return _status_panel(application_id, current)

        logger.info(f"Application {application_id} status -> {new_status.value}")
        flash(f"Application status changed to {new_status.value}.", "success")
        current = new_status

    return _status_panel(application_id, current)


def _status_panel(application_id: int, status: Optional[ApplicationStatus]):
    if not is_htmx():
        return htmx_redirect(url_for("dashboard.application_detail", application_id=application_id))
    return render_template(
        "partials/status_panel.html",
        application_id=application_id,
        status=status,
        statuses=list(ApplicationStatus),
    )


@dashboard_bp.route("/applications/<int:application_id>/delete", methods=["POST"])
@recruiter_required
def delete_application(application_id: int):
    """Delete after the confirm step; anything but confirm=yes is a cancel."""
    detail_url = url_for("dashboard.application_detail", application_id=application_id)

    if request.form.get("confirm") != "yes":
        return htmx_redirect(detail_url)

    try:
        get_applications_api().delete(application_id)
    except ApiError as e:
        logger.error(f"Deleting application {application_id} failed: {e}")
        flash(e.user_message("Failed to delete application."), "error")
        return htmx_redirect(detail_url)

    flash("Application deleted.", "success")
    return htmx_redirect(url_for("dashboard.dashboard"))
