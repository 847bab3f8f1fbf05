"""Applications: public submission, recruiter-only review."""

from typing import Any, Dict, List

from ..models import Application, ApplicationForm, ApplicationStatus
from .base import ResourceApi


SUBMIT_PATH = "/api/applications/submit/"


class ApplicationsApi(ResourceApi):
    """Submit/list/get/update-status/delete over /api/applications/."""

    def submit(self, form: ApplicationForm) -> Any:
        """
        Submit a validated application.

        Multipart with the file under `resume` when one was uploaded,
        otherwise JSON carrying the resume link.
        """
        fields: Dict[str, Any] = {
            "job_id": form.job_id,
            "full_name": form.full_name,
            "email": form.email,
        }
        if form.phone:
            fields["phone"] = form.phone
        if form.cover_letter:
            fields["cover_letter"] = form.cover_letter

        if form.resume_file is not None:
            upload = form.resume_file
            files = {"resume": (upload.filename, upload.content, upload.content_type)}
            data = {key: str(value) for key, value in fields.items()}
            return self._body(self.client.post(SUBMIT_PATH, data=data, files=files))

        fields["resume_url"] = form.resume_url
        return self._body(self.client.post(SUBMIT_PATH, json=fields))

    def list(self) -> List[Application]:
        response = self.client.get("/api/applications/")
        return [self._parse(Application, item, response) for item in self._items(response)]

    def get(self, application_id: int) -> Application:
        response = self.client.get(f"/api/applications/{application_id}/")
        return self._parse(Application, self._json(response), response)

    def update_status(self, application_id: int, status: ApplicationStatus) -> Any:
        return self._body(self.client.patch(
            f"/api/applications/{application_id}/update_status/",
            json={"status": ApplicationStatus(status).value},
        ))

    def delete(self, application_id: int) -> None:
        self.client.delete(f"/api/applications/{application_id}/")
