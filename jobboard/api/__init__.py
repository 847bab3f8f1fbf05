"""
Typed clients for the job board REST API.

Public API:
- get_api_client(): per-request ApiClient bound to the session token store
- get_jobs_api() / get_applications_api() / get_auth_api(): resource wrappers
- reset_transport(): drop the shared requests.Session
"""

import logging
from typing import Optional

import requests
from flask import g

from ..config import current_settings
from ..http_client import ApiClient
from ..tokens import SessionTokenStore
from .applications import ApplicationsApi
from .auth import AuthApi
from .jobs import JobsApi

logger = logging.getLogger(__name__)

# Shared transport for connection pooling
_transport: Optional[requests.Session] = None


def _get_transport() -> requests.Session:
    global _transport

    if _transport is None:
        _transport = requests.Session()
        logger.info("Initialized shared HTTP transport")

    return _transport


def reset_transport() -> None:
    """Close and forget the shared transport."""
    global _transport

    if _transport is not None:
        _transport.close()
    _transport = None


def get_api_client() -> ApiClient:
    """
    ApiClient for the current request.

    Tokens come from the caller's session cookie, so each request gets its
    own client; the underlying connection pool is shared.
    """
    if "api_client" not in g:
        settings = current_settings()
        g.api_client = ApiClient(
            base_url=settings.api_url,
            token_store=SessionTokenStore(),
            timeout=settings.request_timeout,
            session=_get_transport(),
        )
    return g.api_client


def get_jobs_api() -> JobsApi:
    return JobsApi(get_api_client())


def get_applications_api() -> ApplicationsApi:
    return ApplicationsApi(get_api_client())


def get_auth_api() -> AuthApi:
    return AuthApi(get_api_client())


__all__ = [
    "ApplicationsApi",
    "AuthApi",
    "JobsApi",
    "get_api_client",
    "get_applications_api",
    "get_auth_api",
    "get_jobs_api",
    "reset_transport",
]
