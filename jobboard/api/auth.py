"""Token endpoints."""

from ..http_client import REFRESH_PATH
from ..models import TokenPair
from .base import ResourceApi


class AuthApi(ResourceApi):

    def login(self, username: str, password: str) -> TokenPair:
        response = self.client.post(
            "/api/token/",
            json={"username": username, "password": password},
            allow_refresh=False,
        )
        return self._parse(TokenPair, self._json(response), response)

    def refresh(self, refresh_token: str) -> str:
        """Explicit refresh; the client also does this on its own after a 401."""
        response = self.client.post(
            REFRESH_PATH, json={"refresh": refresh_token}, allow_refresh=False
        )
        payload = self._json(response)
        if not isinstance(payload, dict):
            payload = {}
        return self._parse(TokenPair, {**payload, "refresh": refresh_token}, response).access
