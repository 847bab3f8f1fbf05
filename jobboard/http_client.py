"""
Authenticated HTTP client for the job board REST API.

Wraps a requests.Session with:
- a base URL and a JSON default content type
- a bearer credential read from the injected TokenStore on every request
- exactly one refresh-then-retry when a request comes back 401

Per-request states:
- NORMAL: first attempt
- REFRESHING: first attempt returned 401, refresh call in flight
- RETRIED: refresh succeeded, original request re-issued with the new token

Transitions:
- NORMAL -> REFRESHING: 401 on the first attempt
- REFRESHING -> RETRIED: refresh returned a new access token
- REFRESHING -> (SessionExpiredError): refresh missing/failed; tokens cleared

A response in RETRIED state is always handed back to the caller, so a
request can never loop through refresh twice.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

import requests

from .tokens import TokenStore

logger = logging.getLogger(__name__)

REFRESH_PATH = "/api/token/refresh/"


class RequestState(str, Enum):
    """Refresh-retry states of a single logical request."""
    NORMAL = "normal"
    REFRESHING = "refreshing"
    RETRIED = "retried"


class ApiError(Exception):
    """Raised for any non-2xx API response other than a recoverable 401."""

    def __init__(
        self,
        status_code: Optional[int],
        payload: Any = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.status_code = status_code
        self.payload = payload
        self.method = method
        self.path = path
        super().__init__(
            f"{method or 'request'} {path or ''} failed"
            f" ({status_code if status_code is not None else 'no response'}):"
            f" {self.server_message or 'no message'}"
        )

    @property
    def server_message(self) -> Optional[str]:
        """Human-readable message supplied by the API, if any."""
        if isinstance(self.payload, dict):
            for key in ("message", "detail", "error"):
                value = self.payload.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
        return None

    def user_message(self, fallback: str) -> str:
        """Server message when present, otherwise the caller's generic fallback."""
        return self.server_message or fallback


class ApiConnectionError(ApiError):
    """The API could not be reached (DNS, refused connection, timeout)."""

    def __init__(self, method: str, path: str, reason: Exception):
        self.reason = reason
        super().__init__(None, {"error": str(reason)}, method, path)

    @property
    def server_message(self) -> Optional[str]:
        # Transport details are not meant for end users
        return None


class ApiResponseError(ApiError):
    """A 2xx response whose body is not the JSON shape the caller expects."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.detail = detail
        super().__init__(status_code, None, method, path)

    def __str__(self) -> str:
        return f"{self.method or 'request'} {self.path or ''} returned an unreadable body: {self.detail}"


class SessionExpiredError(Exception):
    """The access token was rejected and could not be refreshed; tokens are cleared."""


class ApiClient:
    """
    Single configured client shared by the resource wrappers.

    Args:
        base_url: API root, e.g. "http://127.0.0.1:8000"
        token_store: where access/refresh tokens are read and written
        timeout: optional per-request timeout (None = requests default)
        session: transport; a new requests.Session when omitted
    """

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store
        self.timeout = timeout
        self.session = session or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _build_headers(
        self, headers: Optional[Dict[str, str]], multipart: bool, authenticate: bool = True
    ) -> Dict[str, str]:
        merged: Dict[str, str] = {}
        if not multipart:
            # requests writes its own multipart Content-Type with the boundary
            merged["Content-Type"] = "application/json"
        if headers:
            merged.update(headers)
        token = self.token_store.get() if authenticate else None
        if token:
            merged["Authorization"] = f"Bearer {token}"
        else:
            merged.pop("Authorization", None)
        return merged

    def _send(
        self,
        method: str,
        path: str,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticate: bool = True,
    ) -> requests.Response:
        try:
            return self.session.request(
                method,
                self.url_for(path),
                json=json,
                data=data,
                files=files,
                headers=self._build_headers(
                    headers, multipart=bool(files), authenticate=authenticate
                ),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} transport failure: {e}")
            raise ApiConnectionError(method, path, e) from e

    def _refresh_access_token(self) -> Optional[str]:
        """
        Exchange the stored refresh token for a new access token.

        Sent without a bearer header. Returns None on any failure.
        """
        refresh_token = self.token_store.get_refresh()
        if not refresh_token:
            logger.info("No refresh token stored; cannot refresh session")
            return None

        try:
            response = self.session.post(
                self.url_for(REFRESH_PATH),
                json={"refresh": refresh_token},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Token refresh transport failure: {e}")
            return None

        if not 200 <= response.status_code < 300:
            logger.warning(f"Token refresh rejected ({response.status_code})")
            return None

        try:
            access = response.json().get("access")
        except (ValueError, AttributeError):
            access = None
        if not access:
            logger.warning("Token refresh response carried no access token")
            return None

        self.token_store.set_access(access)
        return access

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        allow_refresh: bool = True,
    ) -> requests.Response:
        """
        Send a request, refreshing the access token at most once on 401.

        files must hold re-readable content (bytes, not open streams) so the
        retried request carries the same body. Token endpoints pass
        allow_refresh=False: no bearer is attached and a rejected login
        surfaces as a plain ApiError.

        Returns:
            The 2xx response

        Raises:
            SessionExpiredError: 401 and the refresh path failed (tokens cleared)
            ApiConnectionError: transport failure
            ApiError: any other non-2xx status, passed through unmodified
        """
        method = method.upper()
        state = RequestState.NORMAL
        response = self._send(method, path, json, data, files, headers, authenticate=allow_refresh)

        if response.status_code == 401 and allow_refresh and state is RequestState.NORMAL:
            state = RequestState.REFRESHING
            logger.info(f"{method} {path} returned 401; refreshing access token")

            if self._refresh_access_token() is None:
                self.token_store.clear()
                logger.warning("Session expired; tokens cleared, login required")
                raise SessionExpiredError(f"{method} {path} requires a new login")

            state = RequestState.RETRIED
            logger.info(f"Retrying {method} {path} with refreshed token")
            response = self._send(method, path, json, data, files, headers, authenticate=allow_refresh)

        if not 200 <= response.status_code < 300:
            raise ApiError(response.status_code, _decode_body(response), method, path)

        logger.debug(f"{method} {path} -> {response.status_code} ({state.value})")
        return response

    def get(self, path: str, **kwargs) -> requests.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> requests.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> requests.Response:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs) -> requests.Response:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        return self.request("DELETE", path, **kwargs)


def _decode_body(response: requests.Response) -> Any:
    """JSON body when there is one, else the raw text (or None when empty)."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
