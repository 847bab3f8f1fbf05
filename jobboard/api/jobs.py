"""Job postings: public reads, recruiter-only writes."""

from typing import Any, Dict, List

from ..models import Job
from .base import ResourceApi


class JobsApi(ResourceApi):
    """CRUD over /api/jobs/."""

    def _job(self, response) -> Job:
        return self._parse(Job, self._json(response), response)

    def list(self) -> List[Job]:
        response = self.client.get("/api/jobs/")
        return [self._parse(Job, item, response) for item in self._items(response)]

    def get(self, job_id: int) -> Job:
        return self._job(self.client.get(f"/api/jobs/{job_id}/"))

    def create(self, data: Dict[str, Any]) -> Job:
        return self._job(self.client.post("/api/jobs/", json=data))

    def update(self, job_id: int, data: Dict[str, Any]) -> Job:
        """Partial update (PATCH)."""
        return self._job(self.client.patch(f"/api/jobs/{job_id}/", json=data))

    def replace(self, job_id: int, data: Dict[str, Any]) -> Job:
        """Full update (PUT)."""
        return self._job(self.client.put(f"/api/jobs/{job_id}/", json=data))

    def delete(self, job_id: int) -> None:
        self.client.delete(f"/api/jobs/{job_id}/")
