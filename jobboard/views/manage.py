"""
Recruiter job management: create, edit and delete postings.

Forms open in a modal (HTMX swaps the modal markup into #modal); without
HTMX the same markup renders inside the full management page.
"""

import logging
from typing import Optional

from flask import Blueprint, flash, render_template, request, url_for
from pydantic import ValidationError

from ..api import get_jobs_api
from ..http_client import ApiError
from ..models import JOB_TYPES, Job, JobForm, field_errors
from . import htmx_redirect, is_htmx
from .auth import recruiter_required

logger = logging.getLogger(__name__)

manage_bp = Blueprint("manage", __name__, url_prefix="/manage")


def _render(modal: Optional[str] = None, status: int = 200, **modal_context):
    """
    Modal markup for HTMX, otherwise the whole page with the modal open.

    HTMX only swaps 2xx bodies, so validation errors go back as 200 there.
    """
    modal_context.setdefault("job_types", JOB_TYPES)
    if modal and is_htmx():
        return render_template(modal, **modal_context)

    try:
        jobs = get_jobs_api().list()
        error = None
    except ApiError as e:
        logger.error(f"Error fetching jobs for management: {e}")
        jobs, error = [], e.user_message("Failed to load jobs")

    return render_template(
        "manage_jobs.html", jobs=jobs, error=error, modal=modal, **modal_context
    ), status


def _form_values() -> dict:
    return {
        key: request.form.get(key, "")
        for key in ("title", "company", "location", "description",
                    "requirements", "salary", "job_type")
    }


def _load_job(job_id: int) -> Optional[Job]:
    try:
        return get_jobs_api().get(job_id)
    except ApiError as e:
        logger.error(f"Error fetching job {job_id}: {e}")
        flash(e.user_message("Failed to load job"), "error")
        return None


@manage_bp.route("/jobs", methods=["GET"])
@recruiter_required
def manage_jobs():
    """Render the job management page."""
    return _render()


@manage_bp.route("/jobs/new", methods=["GET", "POST"])
@recruiter_required
def create_job():
    """Create dialog; a successful save reloads the management page."""
    if request.method == "GET":
        return _render("partials/job_form_modal.html", job=None, values={}, errors={})

    values = _form_values()
    try:
        form = JobForm.model_validate(values)
    except ValidationError as e:
        return _render(
            "partials/job_form_modal.html", status=400,
            job=None, values=values, errors=field_errors(e),
        )

    try:
        job = get_jobs_api().create(form.to_payload())
    except ApiError as e:
        logger.error(f"Job creation failed: {e}")
        flash(e.user_message("Failed to create job"), "error")
        return _render(
            "partials/job_form_modal.html", status=502,
            job=None, values=values, errors={},
        )

    logger.info(f"Created job {job.id} '{job.title}'")
    flash("Job created successfully", "success")
    return htmx_redirect(url_for("manage.manage_jobs"))


@manage_bp.route("/jobs/<int:job_id>/edit", methods=["GET", "POST"])
@recruiter_required
def edit_job(job_id: int):
    """Edit dialog, prefilled from the API; saves with a partial update."""
    job = _load_job(job_id)
    if job is None:
        return htmx_redirect(url_for("manage.manage_jobs"))

    if request.method == "GET":
        prefill = JobForm.from_job(job).model_dump()
        values = {key: value or "" for key, value in prefill.items()}
        return _render("partials/job_form_modal.html", job=job, values=values, errors={})

    values = _form_values()
    try:
        form = JobForm.model_validate(values)
    except ValidationError as e:
        return _render(
            "partials/job_form_modal.html", status=400,
            job=job, values=values, errors=field_errors(e),
        )

    try:
        get_jobs_api().update(job_id, form.to_payload())
    except ApiError as e:
        logger.error(f"Job {job_id} update failed: {e}")
        flash(e.user_message("Failed to update job"), "error")
        return _render(
            "partials/job_form_modal.html", status=502,
            job=job, values=values, errors={},
        )

    logger.info(f"Updated job {job_id}")
    flash("Job updated successfully", "success")
    return htmx_redirect(url_for("manage.manage_jobs"))


@manage_bp.route("/jobs/<int:job_id>/delete", methods=["GET", "POST"])
@recruiter_required
def delete_job(job_id: int):
    """
    Delete with an explicit confirmation step.

    GET shows the confirmation; POST deletes only with confirm=yes, any
    other answer is a cancel and makes no API call.
    """
    if request.method == "GET":
        job = _load_job(job_id)
        if job is None:
            return htmx_redirect(url_for("manage.manage_jobs"))
        return _render("partials/delete_job_modal.html", job=job)

    if request.form.get("confirm") != "yes":
        return htmx_redirect(url_for("manage.manage_jobs"))

    try:
        get_jobs_api().delete(job_id)
    except ApiError as e:
        logger.error(f"Job {job_id} deletion failed: {e}")
        flash(e.user_message("Failed to delete job"), "error")
        return htmx_redirect(url_for("manage.manage_jobs"))

    logger.info(f"Deleted job {job_id}")
    flash("Job deleted successfully", "success")
    return htmx_redirect(url_for("manage.manage_jobs"))
