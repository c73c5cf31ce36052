from typing import Optional

import httpx

from swiftlink.client.base import check_status, parse_body, redirect_location
from swiftlink.client.errors import RequestError
from swiftlink.schemas import CreateLinkRequest, CreateLinkResponse, InfoResponse


class AsyncSwiftlinkClient:
    """Async counterpart of ``SwiftlinkClient`` built on ``httpx.AsyncClient``."""

    def __init__(self, base_url: str, http_client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, f"{self.base_url}{path}", **kwargs)
        except httpx.HTTPError as e:
            raise RequestError(f"Request error: {e}") from e

    async def create_link(self, url: str) -> CreateLinkResponse:
        body = CreateLinkRequest(url=url).model_dump()
        response = check_status(await self._send("POST", "/api/create", json=body))
        return parse_body(response, CreateLinkResponse)

    async def get_link_info(self, code: str) -> InfoResponse:
        response = check_status(await self._send("GET", f"/api/info/{code}"))
        return parse_body(response, InfoResponse)

    async def redirect(self, code: str) -> str:
        return redirect_location(await self._send("GET", f"/{code}", follow_redirects=False))

    async def delete_link(self, code: str, token: str) -> None:
        check_status(
            await self._send("DELETE", f"/{code}", headers={"Authorization": f"Bearer {token}"})
        )
