"""
Pytest fixtures for the Flask route tests.

Routes are exercised end to end against a fake API: `api_routes` maps
(method, path) to a canned response or a callable, and the shared
transport MagicMock dispatches every ApiClient call through it.
"""

import pytest


API_URL = "http://api.test"

JOBS = [
    {"id": 1, "title": "Backend Engineer", "company": "Acme", "location": "Berlin",
     "description": "Build APIs.", "job_type": "Full-time", "salary": "80k"},
    {"id": 2, "title": "Product Designer", "company": "Globex", "location": "Remote",
     "description": "Design things."},
    {"id": 3, "title": "Data Analyst", "company": "Initech", "location": "Berlin",
     "description": "Crunch numbers."},
]

APPLICATIONS = [
    {"id": 1, "full_name": "Ada Lovelace", "email": "ada@example.com", "status": "new",
     "resume": "https://files.example.com/ada.pdf", "job": JOBS[0]},
    {"id": 2, "full_name": "Alan Turing", "email": "alan@example.com", "status": "shortlisted",
     "cover_letter": "I like machines.", "job": JOBS[0]},
    {"id": 3, "name": "Grace Hopper", "email": "grace@navy.mil", "status": "Rejected", "job": 2},
    {"id": 4, "full_name": "Linus T", "email": "linus@example.com", "status": "shortlisted",
     "job": JOBS[2]},
]


@pytest.fixture
def api_routes(transport, mock_response):
    """
    Fake API keyed by (METHOD, path).

    Values are responses or callables receiving the request kwargs.
    Unknown routes answer 404 like the real API.
    """
    routes = {}

    def dispatch(method, url, **kwargs):
        path = url[len(API_URL):]
        handler = routes.get((method, path))
        if handler is None:
            return mock_response(404, {"detail": "Not found."})
        return handler(**kwargs) if callable(handler) else handler

    transport.request.side_effect = dispatch
    return routes


@pytest.fixture
def api_calls(transport):
    """calls(method=None, path=None) -> matching transport.request calls."""

    def calls(method=None, path=None):
        matched = []
        for call in transport.request.call_args_list:
            call_method, url = call.args[0], call.args[1]
            if method and call_method != method:
                continue
            if path and url != API_URL + path:
                continue
            matched.append(call)
        return matched

    return calls


@pytest.fixture
def jobs_api(api_routes, mock_response):
    api_routes[("GET", "/api/jobs/")] = mock_response(200, JOBS)
    for job in JOBS:
        api_routes[("GET", f"/api/jobs/{job['id']}/")] = mock_response(200, job)
    return api_routes


@pytest.fixture
def applications_api(api_routes, mock_response):
    api_routes[("GET", "/api/applications/")] = mock_response(200, APPLICATIONS)
    return api_routes
