"""
Shared plumbing for the typed resource clients.

Each resource wraps the one ApiClient and only shapes paths and payloads;
authentication, refresh and error mapping live in the client. Bodies that
are not the expected JSON shape raise ApiResponseError, so views handle
them like any other ApiError.
"""

from typing import Any, List, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..http_client import ApiClient, ApiResponseError, _decode_body

ModelT = TypeVar("ModelT", bound=BaseModel)


def _response_error(response: requests.Response, detail: str) -> ApiResponseError:
    request = response.request
    return ApiResponseError(
        response.status_code,
        detail,
        method=getattr(request, "method", None),
        path=getattr(request, "path_url", None) or response.url,
    )


class ResourceApi:
    """Base class: holds the client and parses response bodies."""

    def __init__(self, client: ApiClient):
        self.client = client

    @staticmethod
    def _json(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise _response_error(response, f"invalid JSON ({e})") from e

    @staticmethod
    def _body(response: requests.Response) -> Any:
        """Lenient decode for writes whose body the caller does not rely on."""
        return _decode_body(response)

    @classmethod
    def _items(cls, response: requests.Response) -> List[Any]:
        """List body, unwrapping a paginated {"results": [...]} envelope."""
        payload = cls._json(response)
        if isinstance(payload, dict):
            payload = payload.get("results", [])
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise _response_error(response, f"expected a list, got {type(payload).__name__}")
        return payload

    @staticmethod
    def _parse(model: Type[ModelT], data: Any, response: requests.Response) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise _response_error(
                response, f"{model.__name__} failed validation ({e.error_count()} errors)"
            ) from e
