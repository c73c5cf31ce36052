from typing import Optional

import httpx

from swiftlink.client.base import check_status, parse_body, redirect_location
from swiftlink.client.errors import RequestError
from swiftlink.schemas import CreateLinkRequest, CreateLinkResponse, InfoResponse


class SwiftlinkClient:
    """
    Blocking client for a swiftlink server.

    ``base_url`` is the server root, e.g. ``http://localhost:8080``. An existing
    ``httpx.Client`` may be passed in; it is then used as is and not closed
    by this client.
    """

    def __init__(self, base_url: str, http_client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return self._client.request(method, f"{self.base_url}{path}", **kwargs)
        except httpx.HTTPError as e:
            raise RequestError(f"Request error: {e}") from e

    def create_link(self, url: str) -> CreateLinkResponse:
        """Calls ``POST /api/create`` to create (or fetch) the short link for ``url``."""
        body = CreateLinkRequest(url=url).model_dump()
        response = check_status(self._send("POST", "/api/create", json=body))
        return parse_body(response, CreateLinkResponse)

    def get_link_info(self, code: str) -> InfoResponse:
        response = check_status(self._send("GET", f"/api/info/{code}"))
        return parse_body(response, InfoResponse)

    def redirect(self, code: str) -> str:
        """Return the URL ``/{code}`` redirects to, without following it."""
        return redirect_location(self._send("GET", f"/{code}", follow_redirects=False))

    def delete_link(self, code: str, token: str) -> None:
        check_status(
            self._send("DELETE", f"/{code}", headers={"Authorization": f"Bearer {token}"})
        )
