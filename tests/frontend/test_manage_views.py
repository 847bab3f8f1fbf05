"""
Route tests for recruiter job management.

Tests:
- Management list and the create/edit modals (HTMX and full-page)
- Validation keeps the form open and makes no call
- Create posts, edit patches, delete asks first
- Confirmed delete removes the job from the next listing; cancel makes no call
"""

import pytest


HX = {"HX-Request": "true"}

NEW_JOB = {
    "title": "Site Reliability Engineer",
    "company": "Acme",
    "location": "Lisbon",
    "description": "Keep it running.",
    "requirements": "",
    "salary": "",
    "job_type": "Full-time",
}


@pytest.fixture
def live_jobs(api_routes, mock_response):
    """Stateful /api/jobs/ so deletes show up in the next listing."""
    jobs = [
        {"id": 1, "title": "Backend Engineer", "company": "Acme", "location": "Berlin", "description": "APIs"},
        {"id": 2, "title": "Product Designer", "company": "Globex", "location": "Remote", "description": "UX"},
    ]

    def list_jobs(**kwargs):
        return mock_response(200, list(jobs))

    def delete_job(job_id):
        def handler(**kwargs):
            jobs[:] = [job for job in jobs if job["id"] != job_id]
            return mock_response(204)
        return handler

    api_routes[("GET", "/api/jobs/")] = list_jobs
    for job in list(jobs):
        api_routes[("GET", f"/api/jobs/{job['id']}/")] = mock_response(200, job)
        api_routes[("DELETE", f"/api/jobs/{job['id']}/")] = delete_job(job["id"])
    return jobs


class TestManageList:

    def test_lists_jobs(self, authenticated_client, live_jobs):
        response = authenticated_client.get("/manage/jobs")

        html = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Manage Jobs" in html
        assert html.count('class="managed-job') == 2

    def test_empty_state(self, authenticated_client, api_routes, mock_response):
        api_routes[("GET", "/api/jobs/")] = mock_response(200, [])

        html = authenticated_client.get("/manage/jobs").get_data(as_text=True)

        assert "No jobs posted yet" in html


class TestCreateJob:

    def test_htmx_modal_only(self, authenticated_client, live_jobs, api_calls):
        response = authenticated_client.get("/manage/jobs/new", headers=HX)

        html = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "<html" not in html
        assert "Create New Job" in html
        assert "Internship" in html
        assert api_calls() == []

    def test_full_page_modal(self, authenticated_client, live_jobs):
        html = authenticated_client.get("/manage/jobs/new").get_data(as_text=True)

        assert "<html" in html
        assert "Create New Job" in html
        assert "Backend Engineer" in html

    def test_validation_keeps_modal_open(self, authenticated_client, live_jobs, api_calls):
        response = authenticated_client.post(
            "/manage/jobs/new", data={**NEW_JOB, "title": "", "location": ""}, headers=HX
        )

        html = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Job title is required" in html
        assert "Location is required" in html
        assert 'value="Acme"' in html
        assert api_calls("POST") == []

    def test_create_posts_payload(self, authenticated_client, live_jobs, api_routes, api_calls, mock_response):
        api_routes[("POST", "/api/jobs/")] = mock_response(201, {"id": 3, "title": NEW_JOB["title"]})

        response = authenticated_client.post("/manage/jobs/new", data=NEW_JOB, headers=HX)

        assert response.status_code == 204
        assert response.headers["HX-Redirect"] == "/manage/jobs"
        posts = api_calls("POST", "/api/jobs/")
        assert len(posts) == 1
        assert posts[0].kwargs["json"] == {
            "title": "Site Reliability Engineer",
            "company": "Acme",
            "location": "Lisbon",
            "description": "Keep it running.",
            "job_type": "Full-time",
        }

    def test_create_failure_shows_message(self, authenticated_client, live_jobs, api_routes, mock_response):
        api_routes[("POST", "/api/jobs/")] = mock_response(403, {"detail": "You do not have permission to perform this action."})

        html = authenticated_client.post("/manage/jobs/new", data=NEW_JOB, headers=HX).get_data(as_text=True)

        assert "You do not have permission to perform this action." in html
        assert 'value="Site Reliability Engineer"' in html


class TestEditJob:

    def test_prefilled_modal(self, authenticated_client, live_jobs):
        html = authenticated_client.get("/manage/jobs/1/edit", headers=HX).get_data(as_text=True)

        assert "Edit Job" in html
        assert 'value="Backend Engineer"' in html
        assert 'value="Berlin"' in html

    def test_edit_patches(self, authenticated_client, live_jobs, api_routes, api_calls, mock_response):
        api_routes[("PATCH", "/api/jobs/1/")] = mock_response(200, {"id": 1, "title": "Staff Engineer"})

        response = authenticated_client.post(
            "/manage/jobs/1/edit",
            data={**NEW_JOB, "title": "Staff Engineer"},
        )

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/manage/jobs")
        patches = api_calls("PATCH", "/api/jobs/1/")
        assert len(patches) == 1
        assert patches[0].kwargs["json"]["title"] == "Staff Engineer"

    def test_missing_job_redirects(self, authenticated_client, live_jobs):
        response = authenticated_client.get("/manage/jobs/42/edit")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/manage/jobs")


class TestDeleteJob:

    def test_confirmation_modal(self, authenticated_client, live_jobs, api_calls):
        html = authenticated_client.get("/manage/jobs/2/delete", headers=HX).get_data(as_text=True)

        assert "Are you sure?" in html
        assert "Product Designer" in html
        assert api_calls("DELETE") == []

    def test_confirmed_delete_removes_job(self, authenticated_client, live_jobs, api_calls):
        response = authenticated_client.post("/manage/jobs/2/delete", data={"confirm": "yes"})

        assert response.status_code == 302
        assert len(api_calls("DELETE", "/api/jobs/2/")) == 1

        html = authenticated_client.get("/manage/jobs").get_data(as_text=True)
        assert "Product Designer" not in html
        assert html.count('class="managed-job') == 1

    def test_cancel_makes_no_call(self, authenticated_client, live_jobs, api_calls):
        response = authenticated_client.post("/manage/jobs/2/delete", data={"confirm": "no"})

        assert response.status_code == 302
        assert api_calls("DELETE") == []
        html = authenticated_client.get("/manage/jobs").get_data(as_text=True)
        assert "Product Designer" in html

    def test_delete_failure_flashes(self, authenticated_client, live_jobs, api_routes, mock_response):
        api_routes[("DELETE", "/api/jobs/2/")] = mock_response(500)

        authenticated_client.post("/manage/jobs/2/delete", data={"confirm": "yes"})

        with authenticated_client.session_transaction() as sess:
            assert ("error", "Failed to delete job") in [tuple(f) for f in sess["_flashes"]]
