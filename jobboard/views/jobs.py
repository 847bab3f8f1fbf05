"""
Public pages: job listing, job detail and the application form.
"""

import logging
from typing import List, Optional, Tuple

from flask import Blueprint, flash, render_template, request
from pydantic import ValidationError

from ..api import get_applications_api, get_jobs_api
from ..config import current_settings
from ..filters import filter_jobs
from ..http_client import ApiError
from ..models import ApplicationForm, Job, field_errors, format_size

logger = logging.getLogger(__name__)

jobs_bp = Blueprint("jobs", __name__)

SUBMIT_FALLBACK_MESSAGE = "Failed to submit application. Please try again."


def _load_jobs() -> Tuple[List[Job], Optional[str]]:
    """All jobs, or an empty list and the error banner text."""
    try:
        return get_jobs_api().list(), None
    except ApiError as e:
        logger.error(f"Error fetching jobs: {e}")
        return [], "Failed to load jobs. Please try again later."


def _load_job(job_id: int) -> Optional[Job]:
    try:
        return get_jobs_api().get(job_id)
    except ApiError as e:
        logger.error(f"Error fetching job {job_id}: {e}")
        return None


def _listing_context(jobs: List[Job], query: str, error: Optional[str]) -> dict:
    visible = filter_jobs(jobs, query)
    return {
        "jobs": visible,
        "visible_count": len(visible),
        "total_count": len(jobs),
        "query": query,
        "error": error,
    }


@jobs_bp.route("/")
def index():
    """Render the job listing with the current search applied."""
    query = request.args.get("q", "")
    jobs, error = _load_jobs()
    return render_template("index.html", **_listing_context(jobs, query, error))


@jobs_bp.route("/partials/jobs", methods=["GET"])
def job_cards_partial():
    """
    HTMX partial: job cards and the result count for the search box.

    Triggered on every keystroke; filtering is the pure filter_jobs().
    """
    query = request.args.get("q", "")
    jobs, error = _load_jobs()
    return render_template("partials/job_cards.html", **_listing_context(jobs, query, error))


@jobs_bp.route("/jobs/<int:job_id>")
def job_detail(job_id: int):
    """Render the job detail page."""
    job = _load_job(job_id)
    if job is None:
        return render_template(
            "error.html",
            error="Failed to load job details. Please try again later.",
            back_url="/",
            back_label="Back to Jobs",
        ), 404
    return render_template("job_detail.html", job=job)


def _posted_job(job_id: int) -> Optional[Job]:
    """Job summary echoed back by the form, so a POST needs no job fetch."""
    title = request.form.get("job_title", "").strip()
    if not title:
        return None
    return Job.model_construct(
        id=job_id, title=title, company=request.form.get("job_company", "").strip()
    )


def _render_apply(job: Optional[Job], job_id: int, errors: dict, values: dict):
    return render_template(
        "apply.html",
        job=job,
        job_id=job_id,
        errors=errors,
        values=values,
        max_resume_size=format_size(current_settings().max_resume_bytes),
    )


@jobs_bp.route("/apply/<int:job_id>", methods=["GET", "POST"])
def apply(job_id: int):
    """
    Application form for one job.

    Validation failures re-render the form with field errors and never
    reach the API. An API failure keeps the typed values and flashes the
    server message (or a generic one).
    """
    if request.method == "GET":
        return _render_apply(_load_job(job_id), job_id, {}, {})

    job = _posted_job(job_id)
    values = {
        key: request.form.get(key, "")
        for key in ("full_name", "email", "phone", "resume_url", "cover_letter")
    }
    payload = {**values, "job_id": job_id}

    upload = request.files.get("resume_file")
    if upload is not None and upload.filename:
        payload["resume_file"] = {
            "filename": upload.filename,
            "content": upload.read(),
            "content_type": upload.mimetype or "application/octet-stream",
        }

    try:
        form = ApplicationForm.model_validate(
            payload, context={"max_resume_bytes": current_settings().max_resume_bytes}
        )
    except ValidationError as e:
        return _render_apply(job, job_id, field_errors(e), values), 400

    try:
        get_applications_api().submit(form)
    except ApiError as e:
        logger.error(f"Application submission for job {job_id} failed: {e}")
        flash(e.user_message(SUBMIT_FALLBACK_MESSAGE), "error")
        status = 502 if e.status_code is None or e.status_code >= 500 else e.status_code
        return _render_apply(job, job_id, {}, values), status

    logger.info(f"Application submitted for job {job_id}")
    flash("Your application has been successfully submitted.", "success")
    return render_template("apply_success.html", job=job)
